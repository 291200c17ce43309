"""Recipes for pacman-based systems: Arch Linux, Arch Linux CN, MSYS2 and Manjaro."""

from __future__ import annotations

from typing import Optional

from ..mirrors import (
    ALI,
    BFSU,
    HUAWEI,
    NETEASE,
    SOHU,
    TENCENT,
    TUNA,
    UPSTREAM,
    USTC,
    FeatInfo,
    SourceInfo,
    StatusCan,
)
from ..recipe import Session, SetsrcType, Target

PACMAN_MIRRORLIST = "/etc/pacman.d/mirrorlist"
MSYS2_MIRRORLISTS = (
    "/etc/pacman.d/mirrorlist.mingw32",
    "/etc/pacman.d/mirrorlist.mingw64",
    "/etc/pacman.d/mirrorlist.msys",
)

# No trailing slash: on ARM an "arm" suffix is appended to the URL.
ARCH_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/archlinux"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/archlinux"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/archlinux"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/archlinux"),
    SourceInfo(TENCENT, "https://mirrors.tencent.com/archlinux"),
    SourceInfo(HUAWEI, "https://mirrors.huaweicloud.com/archlinux"),
    SourceInfo(NETEASE, "https://mirrors.163.com/archlinux"),
)

ARCHLINUXCN_SOURCES = (
    SourceInfo(UPSTREAM, "https://repo.archlinuxcn.org/"),
    SourceInfo(ALI, "https://mirrors.aliyun.com/archlinuxcn/"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/archlinuxcn/"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/archlinuxcn/"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/archlinuxcn/"),
    SourceInfo(TENCENT, "https://mirrors.cloud.tencent.com/archlinuxcn/"),
    SourceInfo(NETEASE, "https://mirrors.163.com/archlinux-cn/"),
)

MSYS2_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/msys2"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/msys2"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/msys2"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/msys2"),
    SourceInfo(TENCENT, "https://mirrors.tencent.com/msys2"),
    SourceInfo(HUAWEI, "https://mirrors.huaweicloud.com/msys2"),
    SourceInfo(NETEASE, "https://mirrors.163.com/msys2"),
    SourceInfo(SOHU, "https://mirrors.sohu.com/msys2"),
)


def _is_x86_64(arch: str) -> bool:
    return arch.startswith("x86_64")


def arch_server_line(url: str, arch: str) -> str:
    """The mirrorlist ``Server`` line for the mirror ``url`` on CPU ``arch``."""
    if _is_x86_64(arch):
        return f"Server = {url}/$repo/os/$arch"
    return f"Server = {url}arm/$arch/$repo"


def get_arch(session: Session, option: Optional[str]) -> None:
    session.view_file(PACMAN_MIRRORLIST)


def set_arch(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(ARCH_SOURCES, option)
    session.backup(PACMAN_MIRRORLIST)

    arch = session.cpu_arch()
    # Earlier entries take precedence.
    session.prepend_to_file(arch_server_line(source.url, arch), PACMAN_MIRRORLIST)

    session.run("pacman -Syyu" if _is_x86_64(arch) else "pacman -Syy")
    session.conclude(source, SetsrcType.AUTO)
    return source


def arch_feat(option: Optional[str]) -> FeatInfo:
    return FeatInfo(
        can_get=True,
        can_reset=False,
        stcan_locally=StatusCan.CAN_NOT,
        can_english=True,
        can_user_define=True,
        note="可额外使用 chsrc set archlinuxcn 来更换 Arch Linux CN Repository 源",
    )


def get_archlinuxcn(session: Session, option: Optional[str]) -> None:
    session.view_file(PACMAN_MIRRORLIST)


def set_archlinuxcn(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(ARCHLINUXCN_SOURCES, option)
    session.backup(PACMAN_MIRRORLIST)

    session.prepend_to_file(f"[archlinuxcn]\nServer = {source.url}$arch", PACMAN_MIRRORLIST)

    session.run("pacman -Sy archlinuxcn-keyring")
    session.run("pacman -Syy")
    session.conclude(source, SetsrcType.UNTESTED)
    return source


def archlinuxcn_feat(option: Optional[str]) -> FeatInfo:
    return FeatInfo(
        can_get=True,
        can_reset=False,
        stcan_locally=StatusCan.CAN_NOT,
        can_english=True,
        can_user_define=True,
        note="可额外使用 chsrc set arch 来更换 Arch Linux 源",
    )


def set_msys2(session: Session, option: Optional[str]) -> SourceInfo:
    source = session.yield_source(MSYS2_SOURCES, option)
    for path in MSYS2_MIRRORLISTS:
        session.backup(path)

    base = source.url.rstrip("/") + "/"
    session.note(f"请针对你的架构下载安装此目录下的文件:{base}distrib/<架构>/")
    session.run(
        f'sed -i "s#https\\?://mirror.msys2.org/#{base}#g" /etc/pacman.d/mirrorlist* '
    )
    session.conclude(source, SetsrcType.UNTESTED)
    return source


def set_manjaro(session: Session, option: Optional[str]) -> None:
    session.ensure_root()
    session.run("pacman-mirrors -i -c China -m rank")
    session.run("pacman -Syy")
    session.conclude(None, SetsrcType.AUTO)


ARCH = Target("arch", ARCH_SOURCES, set_arch, getter=get_arch, feat=arch_feat)
ARCHLINUXCN = Target(
    "archlinuxcn",
    ARCHLINUXCN_SOURCES,
    set_archlinuxcn,
    getter=get_archlinuxcn,
    feat=archlinuxcn_feat,
)
MSYS2 = Target("msys2", MSYS2_SOURCES, set_msys2)
MANJARO = Target("manjaro", (), set_manjaro)