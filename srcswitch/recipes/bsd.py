"""Recipes for FreeBSD, NetBSD and OpenBSD."""

from __future__ import annotations

import re
from typing import Optional

from ..mirrors import (
    ALI,
    BFSU,
    NETEASE,
    NJU,
    SOHU,
    TENCENT,
    TUNA,
    UPSTREAM,
    USTC,
    SourceInfo,
)
from ..recipe import RecipeError, Session, SetsrcType, Target

# NJU must not be the first mirror: FreeBSD falls back to the one before it for git.
FREEBSD_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(USTC, "mirrors.ustc.edu.cn"),
    SourceInfo(NJU, "mirror.nju.edu.cn"),
    SourceInfo(NETEASE, "mirrors.163.com"),
)

NETBSD_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/pkgsrc/packages/NetBSD/"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/pkgsrc/packages/NetBSD/"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/pkgsrc/packages/NetBSD/"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/pkgsrc/packages/NetBSD/"),
    SourceInfo(TENCENT, "https://mirrors.tencent.com/pkgsrc/packages/NetBSD/"),
    SourceInfo(NETEASE, "https://mirrors.163.com/pkgsrc/packages/NetBSD/"),
    SourceInfo(SOHU, "https://mirrors.sohu.com/pkgsrc/packages/NetBSD/"),
)

OPENBSD_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/OpenBSD/"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/OpenBSD/"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/OpenBSD/"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/OpenBSD/"),
    SourceInfo(TENCENT, "https://mirrors.tencent.com/OpenBSD/"),
    SourceInfo(NETEASE, "https://mirrors.163.com/OpenBSD/"),
    SourceInfo(SOHU, "https://mirrors.sohu.com/OpenBSD/"),
)

FREEBSD_PKG_REPOS_DIR = "/usr/local/etc/pkg/repos"
FREEBSD_MAKE_CONF = "/etc/make.conf"
NETBSD_REPOSITORIES_CONF = "/usr/pkg/etc/pkgin/repositories.conf"
NETBSD_OS_RELEASE = "/etc/os-release"
OPENBSD_INSTALLURL = "/etc/installurl"


def freebsd_pkg_conf(code: str, url: str) -> str:
    """The pkg repository configuration that uses the mirror host ``url`` under ``code``."""
    return (
        f"{code}: {{ \n"
        f'  url: "http://{url}/freebsd-pkg/${{ABI}}/latest",\n'
        "}\n"
        "FreeBSD: { enabled: no }"
    )


def _freebsd_git_source(source: SourceInfo) -> SourceInfo:
    # NJU's freebsd-ports has no git; use the mirror listed before it.
    if source.mirror is NJU and source in FREEBSD_SOURCES:
        return FREEBSD_SOURCES[FREEBSD_SOURCES.index(source) - 1]
    return source


def set_freebsd(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(FREEBSD_SOURCES, option)

    session.log("1. 添加 freebsd-pkg 源 (二进制安装包)")
    session.ensure_dir(FREEBSD_PKG_REPOS_DIR)
    conf = f"{FREEBSD_PKG_REPOS_DIR}/{source.mirror.code}.conf"
    session.overwrite_file(freebsd_pkg_conf(source.mirror.code, source.url), conf)
    session.note(f"若要使用季度分支，请在{conf}中将latest改为quarterly")
    session.note(
        "若要使用HTTPS源，请先安装securtiy/ca_root_ns，并将'http'改成'https'，"
        "最后使用'pkg update -f'刷新缓存即可\n"
    )
    session.say("")

    session.log("2. 修改 freebsd-ports 源")
    if session.check_program("git"):
        git_source = _freebsd_git_source(source)
        session.run(
            f"git clone --depth 1 https://{git_source.url}/freebsd-ports/ports.git /usr/ports"
        )
        session.note("下次更新请使用 git -C /usr/ports pull 而非使用 gitup")
    else:
        session.run(f"fetch https://{source.url}/freebsd-ports/ports.tar.gz")
        session.run("tar -zxvf ports.tar.gz -C /usr/ports")
        session.run("rm ports.tar.gz")
        session.log("下次更新请重新下载内容至 /usr/ports")

    session.log("3. 指定 port 源")
    session.backup(FREEBSD_MAKE_CONF)
    session.append_to_file(
        f"MASTER_SITE_OVERRIDE?=http://{source.url}/freebsd-ports/distfiles/${{DIST_SUBDIR}}/",
        FREEBSD_MAKE_CONF,
    )

    session.note("4. 抱歉，目前境内无 freebsd-update 源，若存在请报告issue，谢谢")
    session.conclude(source, SetsrcType.SEMI_AUTO)
    return source


def get_netbsd(session: Session, option: Optional[str]) -> None:
    session.view_file(NETBSD_REPOSITORIES_CONF)


def _netbsd_version(path: str) -> str:
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            lines = handle.read().splitlines()
    except OSError as exc:
        raise RecipeError(f"cannot read {path}: {exc}") from exc
    matches = [
        match
        for line in lines
        if "VERSION=" in line
        for match in re.findall(r"[8-9].[0-9]+", line)
    ]
    if not matches:
        raise RecipeError(f"cannot find the NetBSD version in {path}")
    return matches[-1]


def set_netbsd(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(NETBSD_SOURCES, option)
    session.backup(NETBSD_REPOSITORIES_CONF)

    arch = session.cpu_arch()
    try:
        version = _netbsd_version(NETBSD_OS_RELEASE)
    except RecipeError as exc:
        session.error(str(exc))
        raise

    session.overwrite_file(f"{source.url}{arch}/{version}/All", NETBSD_REPOSITORIES_CONF)
    session.conclude(source, SetsrcType.UNTESTED)
    return source


def get_openbsd(session: Session, option: Optional[str]) -> None:
    session.view_file(OPENBSD_INSTALLURL)


def set_openbsd(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(OPENBSD_SOURCES, option)
    session.backup(OPENBSD_INSTALLURL)
    session.overwrite_file(source.url, OPENBSD_INSTALLURL)
    session.conclude(source, SetsrcType.UNTESTED)
    return source


FREEBSD = Target("freebsd", FREEBSD_SOURCES, set_freebsd)
NETBSD = Target("netbsd", NETBSD_SOURCES, set_netbsd, getter=get_netbsd)
OPENBSD = Target("openbsd", OPENBSD_SOURCES, set_openbsd, getter=get_openbsd)