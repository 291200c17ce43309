import io

import pytest

from srcswitch.mirrors import NJU, TUNA, USTC
from srcswitch.recipe import RecipeError, Session
from srcswitch.recipes import bsd


def make_session():
    return Session(dry_run=True, stdout=io.StringIO(), stderr=io.StringIO())


def fake_which(available):
    def which(name, *args, **kwargs):
        return f"/usr/bin/{name}" if name in available else None

    return which


def test_freebsd_pkg_conf_format():
    assert bsd.freebsd_pkg_conf("ustc", "mirrors.ustc.edu.cn") == (
        "ustc: { \n"
        '  url: "http://mirrors.ustc.edu.cn/freebsd-pkg/${ABI}/latest",\n'
        "}\n"
        "FreeBSD: { enabled: no }"
    )


def test_freebsd_nju_clones_from_previous_mirror(monkeypatch):
    monkeypatch.setattr("shutil.which", fake_which({"git"}))
    session = make_session()
    source = bsd.set_freebsd(session, "nju")
    assert source.mirror is NJU

    ustc_url = bsd.FREEBSD_SOURCES[1].url
    assert bsd.FREEBSD_SOURCES[1].mirror is USTC
    assert session.commands == [
        f"git clone --depth 1 https://{ustc_url}/freebsd-ports/ports.git /usr/ports"
    ]

    overwrites = [a for a in session.actions if a[0] == "overwrite"]
    assert overwrites == [
        ("overwrite", "/usr/local/etc/pkg/repos/nju.conf", bsd.freebsd_pkg_conf("nju", source.url))
    ]
    appends = [a for a in session.actions if a[0] == "append"]
    assert len(appends) == 1
    assert appends[0][1] == bsd.FREEBSD_MAKE_CONF
    assert source.url in appends[0][2]
    assert ("mkdir", bsd.FREEBSD_PKG_REPOS_DIR) in session.actions


def test_freebsd_without_git_fetches_tarball(monkeypatch):
    monkeypatch.setattr("shutil.which", fake_which(set()))
    session = make_session()
    source = bsd.set_freebsd(session, "ustc")
    assert session.commands == [
        f"fetch https://{source.url}/freebsd-ports/ports.tar.gz",
        "tar -zxvf ports.tar.gz -C /usr/ports",
        "rm ports.tar.gz",
    ]


def test_netbsd_writes_repository_url(monkeypatch, tmp_path):
    release = tmp_path / "os-release"
    release.write_text('NAME=NetBSD\nVERSION="9.3"\nID=netbsd\n', encoding="utf-8")
    monkeypatch.setattr(bsd, "NETBSD_OS_RELEASE", str(release))
    session = make_session()
    source = bsd.set_netbsd(session, "tuna")
    assert source.mirror is TUNA
    expected = f"{source.url}{session.cpu_arch()}/9.3/All"
    assert ("overwrite", bsd.NETBSD_REPOSITORIES_CONF, expected) in session.actions


def test_netbsd_without_version_raises(monkeypatch, tmp_path):
    release = tmp_path / "os-release"
    release.write_text("NAME=NetBSD\n", encoding="utf-8")
    monkeypatch.setattr(bsd, "NETBSD_OS_RELEASE", str(release))
    with pytest.raises(RecipeError):
        bsd.set_netbsd(make_session(), "tuna")


def test_openbsd_overwrites_installurl():
    session = make_session()
    source = bsd.set_openbsd(session, "ali")
    assert ("backup", bsd.OPENBSD_INSTALLURL) in session.actions
    assert ("overwrite", bsd.OPENBSD_INSTALLURL, source.url) in session.actions
    assert session.commands == []


def test_targets_features():
    assert bsd.FREEBSD.features().can_get is False
    assert bsd.OPENBSD.features().can_get is True
    with pytest.raises(RecipeError):
        bsd.FREEBSD.reset_source(make_session())