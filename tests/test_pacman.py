import io
from unittest import mock

import pytest

from srcswitch.mirrors import ALI, UPSTREAM, USTC
from srcswitch.recipe import RecipeError, Session
from srcswitch.recipes import pacman


@pytest.fixture
def session():
    return Session(dry_run=True, stdout=io.StringIO(), stderr=io.StringIO())


def _actions(session, kind):
    return [action for action in session.actions if action[0] == kind]


def test_server_line_x86_64():
    url = "https://mirrors.example.com/archlinux"
    assert pacman.arch_server_line(url, "x86_64") == "Server = " + url + "/$repo/os/$arch"


def test_server_line_arm():
    url = "https://mirrors.example.com/archlinux"
    line = pacman.arch_server_line(url, "aarch64")
    assert line == "Server = " + url + "arm/$arch/$repo"


def test_set_arch_x86(session):
    with mock.patch("platform.machine", return_value="x86_64"):
        source = pacman.set_arch(session, "ustc")
    assert source.mirror is USTC
    prepends = _actions(session, "prepend")
    assert prepends == [
        ("prepend", pacman.PACMAN_MIRRORLIST, pacman.arch_server_line(source.url, "x86_64"))
    ]
    assert session.commands == ["pacman -Syyu"]
    assert _actions(session, "backup") == [("backup", pacman.PACMAN_MIRRORLIST)]


def test_set_arch_arm(session):
    with mock.patch("platform.machine", return_value="aarch64"):
        source = pacman.set_arch(session, None)
    assert source.mirror is ALI
    assert _actions(session, "prepend")[0][2] == pacman.arch_server_line(source.url, "aarch64")
    assert session.commands == ["pacman -Syy"]


def test_set_archlinuxcn(session):
    source = pacman.set_archlinuxcn(session, "tuna")
    content = _actions(session, "prepend")[0][2]
    assert content == "[archlinuxcn]\nServer = " + source.url + "$arch"
    assert session.commands == ["pacman -Sy archlinuxcn-keyring", "pacman -Syy"]


def test_archlinuxcn_upstream_has_url(session):
    source = pacman.set_archlinuxcn(session, "upstream")
    assert source.mirror is UPSTREAM
    assert source.url == "https://repo.archlinuxcn.org/"


def test_arch_upstream_unknown_address(session):
    with pytest.raises(RecipeError):
        pacman.set_arch(session, "upstream")


def test_feats_point_at_each_other():
    arch = pacman.ARCH.features()
    cn = pacman.ARCHLINUXCN.features()
    assert arch.can_get and cn.can_get
    assert not arch.can_reset and not cn.can_reset
    assert "archlinuxcn" in arch.note
    assert "set arch" in cn.note


def test_set_msys2(session):
    source = pacman.set_msys2(session, "bfsu")
    backups = [action[1] for action in _actions(session, "backup")]
    assert backups == list(pacman.MSYS2_MIRRORLISTS)
    assert len(session.commands) == 1
    assert source.url + "/#g" in session.commands[0]
    assert "/etc/pacman.d/mirrorlist*" in session.commands[0]


def test_set_manjaro(session):
    result = pacman.MANJARO.set_source(session)
    assert result is None
    assert session.commands == ["pacman-mirrors -i -c China -m rank", "pacman -Syy"]


def test_msys2_cannot_reset(session):
    with pytest.raises(RecipeError):
        pacman.MSYS2.reset_source(session)