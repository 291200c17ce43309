"""Recipes for Alpine, Gentoo, OpenWrt, Solus, Void Linux and openSUSE."""

from __future__ import annotations

from typing import Optional

from ..mirrors import (
    ALI,
    BFSU,
    HUAWEI,
    LZUOSS,
    MIRRORZ,
    NETEASE,
    NJU,
    PKU,
    SJTUG_ZHIYUAN,
    SOHU,
    SUSTECH,
    TENCENT,
    TUNA,
    UPSTREAM,
    USTC,
    VOLCENGINE,
    ZJU,
    SourceInfo,
)
from ..recipe import Session, SetsrcType, Target

ALPINE_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/alpine"),
    SourceInfo(SJTUG_ZHIYUAN, "https://mirrors.sjtug.sjtu.edu.cn/alpine"),
    SourceInfo(SUSTECH, "https://mirrors.sustech.edu.cn/alpine"),
    SourceInfo(ZJU, "https://mirrors.zju.edu.cn/alpine"),
    SourceInfo(LZUOSS, "https://mirror.lzu.edu.cn/alpine"),
    SourceInfo(ALI, "https://mirrors.aliyun.com/alpine"),
    SourceInfo(TENCENT, "https://mirrors.cloud.tencent.com/alpine"),
    SourceInfo(HUAWEI, "https://mirrors.huaweicloud.com/alpine"),
)

GENTOO_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "mirrors.aliyun.com"),
    SourceInfo(BFSU, "mirrors.bfsu.edu.cn"),
    SourceInfo(USTC, "mirrors.ustc.edu.cn"),
    SourceInfo(TUNA, "mirrors.tuna.tsinghua.edu.cn"),
    SourceInfo(TENCENT, "mirrors.tencent.com"),
    SourceInfo(NETEASE, "mirrors.163.com"),
    SourceInfo(SOHU, "mirrors.sohu.com"),
)

OPENWRT_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(MIRRORZ, "https://mirrors.cernet.edu.cn/openwrt"),
    SourceInfo(ALI, "https://mirrors.aliyun.com/openwrt"),
    SourceInfo(TENCENT, "https://mirrors.cloud.tencent.com/openwrt"),
    SourceInfo(TUNA, "https://mirror.tuna.tsinghua.edu.cn/openwrt"),
    SourceInfo(SJTUG_ZHIYUAN, "https://mirror.sjtu.edu.cn/openwrt"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/openwrt"),
    SourceInfo(PKU, "https://mirrors.pku.edu.cn/openwrt"),
    SourceInfo(SUSTECH, "https://mirrors.sustech.edu.cn/openwrt"),
)

SOLUS_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/solus/packages/shannon/eopkg-index.xml.xz"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/solus/packages/shannon/eopkg-index.xml.xz"),
    SourceInfo(NJU, "https://mirror.nju.edu.cn/solus/packages/shannon/eopkg-index.xml.xz"),
)

VOID_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/voidlinux"),
    SourceInfo(SJTUG_ZHIYUAN, "https://mirror.sjtu.edu.cn/voidlinux"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/voidlinux"),
)

OPENSUSE_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/opensuse"),
    SourceInfo(VOLCENGINE, "https://mirrors.volces.com/opensuse"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/opensuse"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/opensuse"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/opensuse"),
    SourceInfo(TENCENT, "https://mirrors.tencent.com/opensuse"),
    SourceInfo(NETEASE, "https://mirrors.163.com/opensuse"),
    SourceInfo(SOHU, "https://mirrors.sohu.com/opensuse"),
)

_ALPINE_REPOSITORIES = "/etc/apk/repositories"
_GENTOO_REPOS_CONF = "/etc/portage/repos.conf/gentoo.conf"
_GENTOO_MAKE_CONF = "/etc/portage/make.conf"
_OPENWRT_DISTFEEDS = "/etc/opkg/distfeeds.conf"
_VOID_REPOSITORY_CONFS = "/etc/xbps.d/*-repository-*.conf"


def get_alpine(session: Session, option: Optional[str]) -> None:
    session.view_file(_ALPINE_REPOSITORIES)


def set_alpine(session: Session, option: Optional[str]) -> SourceInfo:
    source = session.yield_source(ALPINE_SOURCES, option)
    session.run(
        "sed -i 's#https\\?://dl-cdn.alpinelinux.org/alpine#"
        + source.url
        + "#g' " + _ALPINE_REPOSITORIES
    )
    session.run("apk update")
    session.conclude(source, SetsrcType.UNTESTED)
    return source


def set_gentoo(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(GENTOO_SOURCES, option)
    session.backup(_GENTOO_REPOS_CONF)
    session.run(
        'sed -i "s#rsync://.*/gentoo-portage#rsync://'
        + source.url
        + '/gentoo-portage#g" ' + _GENTOO_REPOS_CONF
    )
    session.append_to_file(f'GENTOO_MIRRORS="https://{source.url}/gentoo"', _GENTOO_MAKE_CONF)
    session.conclude(source, SetsrcType.UNTESTED)
    return source


def get_openwrt(session: Session, option: Optional[str]) -> None:
    session.view_file(_OPENWRT_DISTFEEDS)


def set_openwrt(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(OPENWRT_SOURCES, option)
    session.backup(_OPENWRT_DISTFEEDS)
    session.run(
        "sed -E -i 's@https?://.*downloads.openwrt.org@"
        + source.url
        + "@g' " + _OPENWRT_DISTFEEDS
    )
    session.run("opkg update")
    session.conclude(source, SetsrcType.AUTO)
    return source


def set_solus(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(SOLUS_SOURCES, option)
    session.run("eopkg add-repo Solus " + source.url)
    session.conclude(source, SetsrcType.AUTO)
    return source


def get_void(session: Session, option: Optional[str]) -> None:
    session.run("xbps-query -L")


def set_void(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(VOID_SOURCES, option)

    session.ensure_dir("/etc/xbps.d")
    session.run("cp /usr/share/xbps.d/*-repository-*.conf /etc/xbps.d/")
    session.run(
        "sed -i 's|https://repo-default.voidlinux.org|"
        + source.url
        + "|g' " + _VOID_REPOSITORY_CONFS
    )
    fallback = (
        "sed -i 's|https://alpha.de.repo.voidlinux.org|"
        + source.url
        + "|g' " + _VOID_REPOSITORY_CONFS
    )
    session.note("若报错可尝试使用以下命令:")
    session.say(fallback)
    session.conclude(source, SetsrcType.UNTESTED)
    return source


_OPENSUSE_REPOS = (
    ("leap/$releasever/repo/oss/", "mirror-oss"),
    ("leap/$releasever/repo/non-oss/", "mirror-non-oss"),
    ("leap/$releasever/oss/", "mirror-update"),
    ("leap/$releasever/non-oss/", "mirror-update-non-oss"),
    ("leap/$releasever/sle/", "mirror-sle-update"),
    ("leap/$releasever/backports/", "mirror-backports-update"),
)


def opensuse_commands(url: str) -> list[str]:
    """The six ``zypper ar`` commands that add the mirror repositories under ``url``."""
    return [
        f"zypper ar -cfg '{url}/opensuse/distribution/{path}' {alias}"
        for path, alias in _OPENSUSE_REPOS
    ]


def set_opensuse(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(OPENSUSE_SOURCES, option)

    session.run("zypper mr -da")
    commands = opensuse_commands(source.url)
    for command in commands[:4]:
        session.run(command)

    session.note("leap 15.3用户还需要添加sle和backports源")
    session.note("另外请确保系统在更新后仅启用了六个软件源，可以使用 zypper lr 检查软件源状态")
    session.note("并使用 zypper mr -d 禁用多余的软件源")

    for command in commands[4:]:
        session.run(command)
    session.conclude(source, SetsrcType.UNTESTED)
    return source


ALPINE = Target("alpine", ALPINE_SOURCES, set_alpine, getter=get_alpine)
GENTOO = Target("gentoo", GENTOO_SOURCES, set_gentoo)
OPENWRT = Target("openwrt", OPENWRT_SOURCES, set_openwrt, getter=get_openwrt)
SOLUS = Target("solus", SOLUS_SOURCES, set_solus)
VOID = Target("void", VOID_SOURCES, set_void, getter=get_void)
OPENSUSE = Target("opensuse", OPENSUSE_SOURCES, set_opensuse)