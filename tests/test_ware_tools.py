import io
from unittest import mock

import pytest

from srcswitch.mirrors import TUNA, USER_DEFINE, USTC, StatusCan
from srcswitch.recipe import RecipeError, Session
from srcswitch.recipes import ware_tools as wt


def _session(dry_run=True):
    return Session(dry_run=dry_run, stdout=io.StringIO(), stderr=io.StringIO())


def _url_of(sources, mirror):
    return next(s.url for s in sources if s.mirror is mirror)


def _which_only(*names):
    return lambda name: f"/usr/bin/{name}" if name in names else None


def test_homebrew_exports_use_url():
    url = "https://m.example.com/"
    lines = wt.homebrew_exports(url)
    assert len(lines) == 4
    assert lines[0] == 'export HOMEBREW_API_DOMAIN="' + url + 'homebrew-bottles/api"'
    assert all(line.startswith("export HOMEBREW_") for line in lines)
    assert all(url in line for line in lines)


def test_fish_exports_match_posix_exports():
    url = "https://m.example.com/"
    posix = wt.homebrew_exports(url)
    fish = wt.homebrew_fish_exports(url)
    assert len(fish) == len(posix)
    for p, f in zip(posix, fish):
        assert f.startswith("set -x ")
        name = p[len("export "):].split("=", 1)[0]
        assert f.split()[2] == name
        assert p.split("=", 1)[1] == f.split(" ", 3)[3]


def test_set_homebrew_writes_zshrc_and_existing_bashrc(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    (tmp_path / ".bashrc").write_text("# mine\n")
    session = _session(dry_run=False)
    source = wt.set_homebrew(session, "tuna")
    assert source.mirror is TUNA
    zshrc = (tmp_path / ".zshrc").read_text()
    bashrc = (tmp_path / ".bashrc").read_text()
    for line in wt.homebrew_exports(source.url):
        assert line in zshrc
        assert line in bashrc
    assert bashrc.startswith("# mine\n")
    assert (tmp_path / ".bashrc.bak").read_text() == "# mine\n"
    assert not (tmp_path / ".config" / "fish" / "config.fish").exists()
    assert session.commands == []


def test_set_homebrew_writes_fish_config_when_present(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    fish = tmp_path / ".config" / "fish" / "config.fish"
    fish.parent.mkdir(parents=True)
    fish.write_text("")
    source = wt.set_homebrew(_session(dry_run=False), "bfsu")
    content = fish.read_text()
    for line in wt.homebrew_fish_exports(source.url):
        assert line in content
    assert "export " not in content


def test_get_homebrew_echoes_variables():
    session = _session()
    wt.get_homebrew(session, None)
    assert len(session.commands) == 1
    for name in ("HOMEBREW_API_DOMAIN", "HOMEBREW_CORE_GIT_REMOTE"):
        assert f"echo {name}=${name};" in session.commands[0]


def test_homebrew_feat():
    feat = wt.homebrew_feat(None)
    assert feat.can_get is True
    assert feat.can_reset is False
    assert feat.can_english is True
    assert feat.can_user_define is False
    assert feat.stcan_locally is StatusCan.CAN_NOT
    assert wt.HOMEBREW.features() == feat


@mock.patch("shutil.which", side_effect=_which_only("nix-channel"))
def test_set_nix_commands(_which):
    session = _session()
    source = wt.set_nix(session, None)
    url = source.url
    assert session.commands == [
        "nix-channel --add " + url + "nixpkgs-unstable nixpkgs",
        "nix-channel --update",
    ]
    appended = [a for a in session.actions if a[0] == "append"]
    assert appended == [
        ("append", "~/.config/nix/nix.conf",
         "substituters = " + url + "store https://cache.nixos.org/")
    ]


@mock.patch("shutil.which", return_value=None)
def test_set_nix_requires_program(_which):
    session = _session()
    with pytest.raises(RecipeError):
        wt.set_nix(session, None)
    assert session.commands == []


def test_miktex_url_replaces_texlive_suffix():
    url = "https://mirrors.tuna.tsinghua.edu.cn/CTAN/systems/texlive/tlnet"
    assert wt.miktex_url(url) == (
        "https://mirrors.tuna.tsinghua.edu.cn/CTAN/systems/win32/miktex/tm/packages/"
    )


def test_miktex_url_without_suffix_appends():
    url = "https://a.example.com/x/"
    assert wt.miktex_url(url) == url + "win32/miktex/tm/packages/"


@mock.patch("shutil.which", side_effect=_which_only("tlmgr"))
def test_set_tex_with_tlmgr_only(_which):
    session = _session()
    wt.set_tex(session, "tuna")
    url = _url_of(wt.TEX_SOURCES, TUNA)
    assert session.commands == ["tlmgr option repository " + url]


@mock.patch("shutil.which", side_effect=_which_only("tlmgr", "mpm"))
def test_set_tex_with_both_tools(_which):
    session = _session()
    source = wt.set_tex(session, "tuna")
    assert session.commands[1] == "mpm --set-repository=" + wt.miktex_url(source.url)
    assert len(session.commands) == 2


@mock.patch("shutil.which", return_value=None)
def test_tex_without_tools_fails(_which):
    with pytest.raises(RecipeError):
        wt.set_tex(_session(), None)
    with pytest.raises(RecipeError):
        wt.get_tex(_session(), None)


@mock.patch("shutil.which", side_effect=_which_only("mpm"))
def test_get_tex_with_mpm(_which):
    session = _session()
    wt.get_tex(session, None)
    assert session.commands == ["mpm --get-repository"]


def test_tex_target_cannot_reset():
    with pytest.raises(RecipeError):
        wt.TEX.reset_source(_session())


def test_set_winget_default_is_ustc():
    session = _session()
    source = wt.set_winget(session, None)
    assert source.mirror is USTC
    assert session.commands == [
        "winget source remove winget",
        "winget source add winget " + source.url,
    ]


def test_set_winget_user_url():
    url = "https://w.example.com/cache"
    session = _session()
    source = wt.set_winget(session, url)
    assert source.mirror is USER_DEFINE
    assert session.commands[-1] == "winget source add winget " + url


def test_get_and_reset_winget():
    session = _session()
    wt.WINGET.get_source(session)
    wt.WINGET.reset_source(session)
    assert session.commands == ["winget source list", "winget source reset winget"]


def test_winget_feat():
    feat = wt.winget_feat(None)
    assert (feat.can_get, feat.can_reset, feat.can_english, feat.can_user_define) == (
        True, True, False, True,
    )