import io

import pytest

from srcswitch.mirrors import BFSU, TUNA, USER_DEFINE
from srcswitch.recipe import RecipeError, Session
from srcswitch.recipes import os_misc as om


def _session():
    return Session(dry_run=True, stdout=io.StringIO(), stderr=io.StringIO())


def test_set_alpine_default_uses_first_mirror():
    session = _session()
    source = om.set_alpine(session, None)
    assert source.mirror is TUNA
    assert session.commands == [
        "sed -i 's#https\\?://dl-cdn.alpinelinux.org/alpine#"
        + source.url
        + "#g' /etc/apk/repositories",
        "apk update",
    ]


def test_set_alpine_upstream_has_no_address():
    with pytest.raises(RecipeError):
        om.set_alpine(_session(), "upstream")


def test_set_gentoo_backs_up_and_appends_mirrors():
    session = _session()
    source = om.set_gentoo(session, "ustc")
    assert ("backup", "/etc/portage/repos.conf/gentoo.conf") in session.actions
    assert len(session.commands) == 1
    assert "rsync://" + source.url in session.commands[0]
    appends = [a for a in session.actions if a[0] == "append"]
    assert len(appends) == 1
    assert appends[0][1] == "/etc/portage/make.conf"
    assert appends[0][2].startswith('GENTOO_MIRRORS="https://' + source.url)


def test_set_openwrt_rewrites_distfeeds():
    session = _session()
    source = om.set_openwrt(session, "tuna")
    assert ("backup", "/etc/opkg/distfeeds.conf") in session.actions
    assert source.url in session.commands[0]
    assert session.commands[0].endswith("/etc/opkg/distfeeds.conf")
    assert len(session.commands) == 2


def test_set_solus_adds_repo():
    session = _session()
    source = om.set_solus(session, "bfsu")
    assert source.mirror is BFSU
    assert session.commands == ["eopkg add-repo Solus " + source.url]


def test_set_solus_unknown_mirror():
    session = _session()
    with pytest.raises(RecipeError):
        om.set_solus(session, "nope")
    assert session.commands == []


def test_get_void_lists_repositories():
    session = _session()
    om.VOID.get_source(session)
    assert session.commands == ["xbps-query -L"]


def test_set_void_copies_and_rewrites():
    session = _session()
    source = om.set_void(session, None)
    assert ("mkdir", "/etc/xbps.d") in session.actions
    assert session.commands[0] == "cp /usr/share/xbps.d/*-repository-*.conf /etc/xbps.d/"
    assert "repo-default.voidlinux.org" in session.commands[1]
    assert source.url in session.commands[1]
    assert len(session.commands) == 2
    output = session.stdout.getvalue()
    assert "alpha.de.repo.voidlinux.org|" + source.url in output


def test_opensuse_commands_shape():
    url = "https://o.example.com/opensuse"
    commands = om.opensuse_commands(url)
    assert len(commands) == 6
    assert all(c.startswith("zypper ar -cfg '" + url + "/opensuse/distribution/leap/") for c in commands)
    aliases = [c.rsplit(" ", 1)[1] for c in commands]
    assert len(set(aliases)) == 6
    assert aliases[0] == "mirror-oss"


def test_set_opensuse_runs_all_in_order():
    session = _session()
    source = om.set_opensuse(session, "tuna")
    assert session.commands == ["zypper mr -da"] + om.opensuse_commands(source.url)
    assert "zypper lr" in session.stdout.getvalue()


def test_user_defined_url():
    url = "https://s.example.com/solus/eopkg-index.xml.xz"
    session = _session()
    source = om.SOLUS.set_source(session, url)
    assert source.mirror is USER_DEFINE
    assert session.commands == ["eopkg add-repo Solus " + url]


def test_targets_without_getter_raise():
    with pytest.raises(RecipeError):
        om.OPENSUSE.get_source(_session())
    assert om.ALPINE.features().can_get is True
    assert om.GENTOO.features().can_get is False