"""Recipes for APT-based systems: Debian, Ubuntu, Armbian, Kali, Linux Lite and Linux Mint."""

from __future__ import annotations

import re
from enum import IntEnum
from typing import Optional

from ..mirrors import (
    ALI,
    BFSU,
    HUAWEI,
    MIRRORZ,
    NETEASE,
    NJU,
    SJTUG_ZHIYUAN,
    SOHU,
    SUSTECH,
    TENCENT,
    TUNA,
    UPSTREAM,
    USTC,
    VOLCENGINE,
    FeatInfo,
    SourceInfo,
    StatusCan,
)
from ..recipe import APP_NAME, RecipeError, Session, SetsrcType, Target

APT_SOURCE_LIST = "/etc/apt/sources.list"
APT_SOURCE_LIST_D = "/etc/apt/sources.list.d/"

# Debian 12 and Ubuntu 24.04 onwards keep their sources in DEB822 format.
DEBIAN_SOURCE_LIST_DEB822 = "/etc/apt/sources.list.d/debian.sources"
UBUNTU_SOURCE_LIST_DEB822 = "/etc/apt/sources.list.d/ubuntu.sources"

ETC_OS_RELEASE = "/etc/os-release"

ROS_SOURCE_LIST = APT_SOURCE_LIST_D + "ros-latest.list"
LINUXMINT_SOURCE_LIST = APT_SOURCE_LIST_D + "official-package-repositories.list"
ARMBIAN_SOURCE_LIST = APT_SOURCE_LIST_D + "armbian.list"
RASPBERRYPI_SOURCE_LIST = APT_SOURCE_LIST_D + "raspi.list"

# Host written into a generated sources.list; the following sed replaces it.
_PLACEHOLDER_HOST = "https://placeholder.example.com"


class DebianType(IntEnum):
    """Which distribution a generated sources.list is made for."""

    DEBIAN = 1
    UBUNTU = 2


DEBIAN_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/debian"),
    SourceInfo(VOLCENGINE, "https://mirrors.volces.com/debian"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/debian"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/debian"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/debian"),
    SourceInfo(TENCENT, "https://mirrors.tencent.com/debian"),
    SourceInfo(NETEASE, "https://mirrors.163.com/debian"),
    SourceInfo(SOHU, "https://mirrors.sohu.com/debian"),
)

UBUNTU_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/ubuntu"),
    SourceInfo(VOLCENGINE, "https://mirrors.volces.com/ubuntu"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/ubuntu"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/ubuntu"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/ubuntu"),
    SourceInfo(TENCENT, "https://mirrors.tencent.com/ubuntu"),
    SourceInfo(HUAWEI, "https://mirrors.huaweicloud.com/ubuntu"),
    SourceInfo(NETEASE, "https://mirrors.163.com/ubuntu"),
    SourceInfo(SOHU, "https://mirrors.sohu.com/ubuntu"),
)

ARMBIAN_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/armbian"),
    SourceInfo(SJTUG_ZHIYUAN, "https://mirror.sjtu.edu.cn/armbian"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/armbian"),
    SourceInfo(SUSTECH, "https://mirrors.sustech.edu.cn/armbian"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/armbian"),
    SourceInfo(NJU, "https://mirrors.nju.edu.cn/armbian"),
    SourceInfo(ALI, "https://mirrors.aliyun.com/armbian"),
)

KALI_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/kali"),
    SourceInfo(VOLCENGINE, "https://mirrors.volces.com/kali"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/kali"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/kali"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/kali"),
    SourceInfo(TENCENT, "https://mirrors.tencent.com/kali"),
    SourceInfo(HUAWEI, "https://mirrors.huaweicloud.com/kali"),
    SourceInfo(NETEASE, "https://mirrors.163.com/kali"),
    SourceInfo(SOHU, "https://mirrors.sohu.com/kali"),
)

LINUXLITE_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(SJTUG_ZHIYUAN, "https://mirrors.sjtug.sjtu.edu.cn/linuxliteos/"),
)

LINUXMINT_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(MIRRORZ, "https://mirrors.cernet.edu.cn/linuxmint/"),
    SourceInfo(ALI, "http://mirrors.aliyun.com/linuxmint-packages/"),
    SourceInfo(NETEASE, "https://mirrors.163.com/linuxmint/packages/"),
)


def _read_os_release(path: str) -> dict[str, str]:
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            lines = handle.read().splitlines()
    except OSError:
        return {}
    fields: dict[str, str] = {}
    for line in lines:
        key, sep, value = line.partition("=")
        if sep:
            fields[key.strip()] = value.strip().strip("\"'")
    return fields


def _leading_number(value: str) -> float:
    match = re.match(r"\s*[+-]?\d+(?:\.\d*)?", value)
    return float(match.group()) if match else 0.0


def apt_sourcelist_template(debian_type: DebianType, codename: str, version: float) -> str:
    """A stand-in sources.list for ``codename``; its host is replaced afterwards.

    Debian releases before 10 are not supported and raise :class:`RecipeError`.
    """
    debian_type = DebianType(debian_type)
    header = f"# Generated by {APP_NAME}"

    if debian_type is DebianType.UBUNTU:
        components = "main restricted universe multiverse"
        suites = (codename, f"{codename}-updates", f"{codename}-backports", f"{codename}-security")
        lines = [f"deb {_PLACEHOLDER_HOST}/ubuntu {suite} {components}" for suite in suites]
        return header + "\n\n" + "\n".join(lines) + "\n"

    if version >= 12:
        components = "main contrib non-free non-free-firmware"
        security = f"{codename}-security"
        header_line = header
    elif version >= 11:
        components = "main contrib non-free"
        security = f"{codename}-security"
        header_line = f"{header}({_PLACEHOLDER_HOST})"
    elif version >= 10:
        components = "main contrib non-free"
        security = f"{codename}/updates"
        header_line = f"{header}({_PLACEHOLDER_HOST})"
    else:
        raise RecipeError("您的Debian版本过低(<10)，暂不支持换源")

    lines = [
        f"deb {_PLACEHOLDER_HOST}/debian {codename} {components}",
        f"deb {_PLACEHOLDER_HOST}/debian {codename}-updates {components}",
        f"deb {_PLACEHOLDER_HOST}/debian {codename}-backports {components}",
        f"deb {_PLACEHOLDER_HOST}/debian-security {security} {components}",
    ]
    return header_line + "\n\n" + "\n".join(lines) + "\n"


def ensure_apt_sourcelist(session: Session, debian_type: DebianType) -> bool:
    """Make sure the APT source list exists, generating one if it is missing.

    Returns whether the file existed before the call.
    """
    if session.check_file(APT_SOURCE_LIST):
        return True
    session.note("将生成新的源配置文件")

    release = _read_os_release(ETC_OS_RELEASE)
    codename = release.get("VERSION_CODENAME", "")
    version = _leading_number(release.get("VERSION_ID", ""))

    try:
        content = apt_sourcelist_template(debian_type, codename, version)
    except RecipeError as exc:
        session.error(str(exc))
        raise
    session.overwrite_file(content, APT_SOURCE_LIST)
    return False


def _view_first_existing(session: Session, paths: tuple[str, ...], missing: str) -> None:
    for path in paths:
        if session.check_file(path):
            session.view_file(path)
            return
    session.error(missing)
    raise RecipeError(missing)


def _is_x86_64(session: Session) -> bool:
    return session.cpu_arch().startswith("x86_64")


# Debian


def get_debian(session: Session, option: Optional[str]) -> None:
    _view_first_existing(
        session,
        (DEBIAN_SOURCE_LIST_DEB822, APT_SOURCE_LIST),
        "缺少源配置文件！但仍可直接通过 chsrc set debian 来添加使用新的源",
    )


def _https_hint(session: Session) -> None:
    session.note("如果遇到无法拉取 HTTPS 源的情况，我们会使用 HTTP 源并需要您运行:")
    session.say("apt install apt-transport-https ca-certificates")


def _set_debian_deb822(session: Session, option: Optional[str]) -> SourceInfo:
    source = session.yield_source(DEBIAN_SOURCES, option)
    _https_hint(session)
    session.backup(DEBIAN_SOURCE_LIST_DEB822)
    session.run(
        f"sed -E -i 's@https?://.*/debian/?@{source.url}@g' {DEBIAN_SOURCE_LIST_DEB822}"
    )
    # The security repository lives under a separate path.
    session.run(
        f"sed -E -i 's@https?://.*/debian-security/?@{source.url}-security@g' "
        f"{DEBIAN_SOURCE_LIST_DEB822}"
    )
    session.run("apt update")
    session.conclude(source, SetsrcType.AUTO)
    return source


def set_debian(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()

    if session.check_file(DEBIAN_SOURCE_LIST_DEB822):
        session.note("将基于新格式换源")
        return _set_debian_deb822(session, option)

    existed = ensure_apt_sourcelist(session, DebianType.DEBIAN)
    source = session.yield_source(DEBIAN_SOURCES, option)
    _https_hint(session)

    # A generated list holds nothing worth keeping.
    if existed:
        session.backup(APT_SOURCE_LIST)

    session.run(f"sed -E -i 's@https?://.*/debian/?@{source.url}@g' {APT_SOURCE_LIST}")
    session.run("apt update")
    session.conclude(source, SetsrcType.AUTO)
    return source


# Ubuntu


def get_ubuntu(session: Session, option: Optional[str]) -> None:
    _view_first_existing(
        session,
        (UBUNTU_SOURCE_LIST_DEB822, APT_SOURCE_LIST),
        "缺少源配置文件！但仍可直接通过 chsrc set ubuntu 来添加使用新的源",
    )


def _ubuntu_sed(session: Session, url: str, path: str) -> str:
    if _is_x86_64(session):
        return f"sed -E -i 's@https?://.*/ubuntu/?@{url}@g' {path}"
    return f"sed -E -i 's@https?://.*/ubuntu-ports/?@{url}-ports@g' {path}"


def _set_ubuntu_deb822(session: Session, option: Optional[str]) -> SourceInfo:
    source = session.yield_source(UBUNTU_SOURCES, option)
    session.backup(UBUNTU_SOURCE_LIST_DEB822)
    session.run(_ubuntu_sed(session, source.url, UBUNTU_SOURCE_LIST_DEB822))
    session.run("apt update")
    session.conclude(source, SetsrcType.AUTO)
    return source


def set_ubuntu(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()

    if session.check_file(UBUNTU_SOURCE_LIST_DEB822):
        session.note("将基于新格式换源")
        return _set_ubuntu_deb822(session, option)

    existed = ensure_apt_sourcelist(session, DebianType.UBUNTU)
    source = session.yield_source(UBUNTU_SOURCES, option)

    if existed:
        session.backup(APT_SOURCE_LIST)

    session.run(_ubuntu_sed(session, source.url, APT_SOURCE_LIST))
    session.run("apt update")
    session.conclude(source, SetsrcType.AUTO)
    return source


# Armbian


def get_armbian(session: Session, option: Optional[str]) -> None:
    if session.check_file(ARMBIAN_SOURCE_LIST):
        session.view_file(ARMBIAN_SOURCE_LIST)
        return
    if session.in_english:
        message = "Source list config file missing! Path: " + ARMBIAN_SOURCE_LIST
    else:
        message = "缺少源配置文件！路径：" + ARMBIAN_SOURCE_LIST
    session.error(message)
    raise RecipeError(message)


def set_armbian(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(ARMBIAN_SOURCES, option)
    session.backup(ARMBIAN_SOURCE_LIST)
    session.run(
        f"sed -E -i 's@https?[^ ]*armbian/?[^ ]*@{source.url}@g' {ARMBIAN_SOURCE_LIST}"
    )
    session.run("apt update")
    session.conclude(source, SetsrcType.AUTO)
    return source


def armbian_feat(option: Optional[str]) -> FeatInfo:
    return FeatInfo(
        can_get=True,
        can_reset=False,
        stcan_locally=StatusCan.CAN_NOT,
        can_english=True,
        can_user_define=True,
    )


# Kali Linux


def get_kali(session: Session, option: Optional[str]) -> None:
    session.view_file(APT_SOURCE_LIST)


def set_kali(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(KALI_SOURCES, option)
    session.backup(APT_SOURCE_LIST)
    session.run(f"sed -E -i 's@https?://.*/kali/?@{source.url}@g' {APT_SOURCE_LIST}")
    session.run("apt update")
    session.conclude(source, SetsrcType.UNTESTED)
    return source


# Linux Lite


def get_linuxlite(session: Session, option: Optional[str]) -> None:
    session.view_file(APT_SOURCE_LIST)


def set_linuxlite(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(LINUXLITE_SOURCES, option)
    session.backup(APT_SOURCE_LIST)
    session.run(f"sed -E -i 's@https?://.*/.*/?@{source.url}@g' {APT_SOURCE_LIST}")
    session.run("apt update")
    session.conclude(source, SetsrcType.AUTO)
    return source


# Linux Mint


def get_linuxmint(session: Session, option: Optional[str]) -> None:
    session.view_file(LINUXMINT_SOURCE_LIST)


def set_linuxmint(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(LINUXMINT_SOURCES, option)
    session.backup(LINUXMINT_SOURCE_LIST)
    session.run(
        f"sed -E -i 's@https?://.*/.*/?@{source.url}@g' {LINUXMINT_SOURCE_LIST}"
    )
    session.run("apt update")
    session.conclude(source, SetsrcType.AUTO)
    session.warn(
        "完成后请不要再使用 mintsources（自带的图形化软件源设置工具）进行任何操作，"
        "因为在操作后，无论是否有按“确定”，mintsources 均会覆写我们刚才换源的内容"
    )
    return source


DEBIAN = Target("debian", DEBIAN_SOURCES, set_debian, getter=get_debian)
UBUNTU = Target("ubuntu", UBUNTU_SOURCES, set_ubuntu, getter=get_ubuntu)
ARMBIAN = Target(
    "armbian", ARMBIAN_SOURCES, set_armbian, getter=get_armbian, feat=armbian_feat
)
KALI = Target("kali", KALI_SOURCES, set_kali, getter=get_kali)
LINUXLITE = Target("linuxlite", LINUXLITE_SOURCES, set_linuxlite, getter=get_linuxlite)
LINUXMINT = Target("linuxmint", LINUXMINT_SOURCES, set_linuxmint, getter=get_linuxmint)