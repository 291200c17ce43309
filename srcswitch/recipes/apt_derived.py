"""Recipes for ROS, Raspberry Pi OS, Trisquel, deepin and openKylin."""

from __future__ import annotations

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
    SourceInfo,
)
from ..recipe import Session, SetsrcType, Target
from .apt import APT_SOURCE_LIST, RASPBERRYPI_SOURCE_LIST, ROS_SOURCE_LIST

ROS_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn"),
    SourceInfo(TENCENT, "https://mirrors.tencent.com"),
    SourceInfo(HUAWEI, "https://mirrors.huaweicloud.com"),
    SourceInfo(NETEASE, "https://mirrors.163.com"),
    SourceInfo(SOHU, "https://mirrors.sohu.com"),
)

RASPBERRYPI_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(MIRRORZ, "https://mirrors.cernet.edu.cn/raspberrypi/"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/raspberrypi/"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/raspberrypi/"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/raspberrypi/"),
    SourceInfo(SJTUG_ZHIYUAN, "https://mirrors.sjtug.sjtu.edu.cn/raspberrypi/"),
    SourceInfo(SUSTECH, "https://mirrors.sustech.edu.cn/raspberrypi/"),
)

TRISQUEL_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/trisquel/"),
    SourceInfo(MIRRORZ, "https://mirrors.cernet.edu.cn/trisquel/"),
    SourceInfo(NJU, "https://mirror.nju.edu.cn/trisquel/"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/trisquel/"),
)

DEEPIN_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/deepin"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/deepin"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/deepin"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/deepin"),
    SourceInfo(TENCENT, "https://mirrors.tencent.com/deepin"),
    SourceInfo(NETEASE, "https://mirrors.163.com/deepin"),
    SourceInfo(SOHU, "https://mirrors.sohu.com/deepin"),
)

OPENKYLIN_SOURCES = (
    SourceInfo(UPSTREAM, "https://archive.openkylin.top/openkylin/"),
    SourceInfo(ALI, "https://mirrors.aliyun.com/openkylin/"),
    SourceInfo(NETEASE, "https://mirrors.163.com/openkylin/"),
)

ROS_KEY_COMMAND = (
    "apt-key adv --keyserver 'hkp://keyserver.ubuntu.com:80' "
    "--recv-key C1CF6E31E6BADE8868B172B4F42ED6FBAB17C654"
)


def _replace_and_update(
    session: Session,
    sources: tuple[SourceInfo, ...],
    option: Optional[str],
    path: str,
    pattern: str,
) -> SourceInfo:
    """Back up ``path``, point every URL matching ``pattern`` at the mirror, then update."""
    session.ensure_root()
    source = session.yield_source(sources, option)
    session.backup(path)
    session.run(f"sed -E -i 's@{pattern}@{source.url}@g' {path}")
    session.run("apt update")
    session.conclude(source, SetsrcType.UNTESTED)
    return source


def set_ros(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(ROS_SOURCES, option)
    session.backup(ROS_SOURCE_LIST)
    session.run(
        f"sed -E -i 's@https?://.*/ros/ubuntu/?@{source.url}/ros/ubuntu@g' {ROS_SOURCE_LIST}"
    )
    session.run(ROS_KEY_COMMAND)
    session.run("apt update")
    session.conclude(source, SetsrcType.UNTESTED)
    return source


def get_raspberrypi(session: Session, option: Optional[str]) -> None:
    session.view_file(RASPBERRYPI_SOURCE_LIST)


def set_raspberrypi(session: Session, option: Optional[str]) -> SourceInfo:
    return _replace_and_update(
        session, RASPBERRYPI_SOURCES, option, RASPBERRYPI_SOURCE_LIST, "https?://.*/.*/?"
    )


def get_trisquel(session: Session, option: Optional[str]) -> None:
    session.view_file(APT_SOURCE_LIST)


def set_trisquel(session: Session, option: Optional[str]) -> SourceInfo:
    return _replace_and_update(
        session, TRISQUEL_SOURCES, option, APT_SOURCE_LIST, "https?://.*/trisquel/?"
    )


def get_deepin(session: Session, option: Optional[str]) -> None:
    session.view_file(APT_SOURCE_LIST)


def set_deepin(session: Session, option: Optional[str]) -> SourceInfo:
    return _replace_and_update(
        session, DEEPIN_SOURCES, option, APT_SOURCE_LIST, "https?://.*/deepin/?"
    )


def get_openkylin(session: Session, option: Optional[str]) -> None:
    session.view_file(APT_SOURCE_LIST)


def set_openkylin(session: Session, option: Optional[str]) -> SourceInfo:
    return _replace_and_update(
        session, OPENKYLIN_SOURCES, option, APT_SOURCE_LIST, "https?://.*/openkylin/?"
    )


ROS = Target("ros", ROS_SOURCES, set_ros)
RASPBERRYPI = Target(
    "raspberrypi", RASPBERRYPI_SOURCES, set_raspberrypi, getter=get_raspberrypi
)
TRISQUEL = Target("trisquel", TRISQUEL_SOURCES, set_trisquel, getter=get_trisquel)
DEEPIN = Target("deepin", DEEPIN_SOURCES, set_deepin, getter=get_deepin)
OPENKYLIN = Target("openkylin", OPENKYLIN_SOURCES, set_openkylin, getter=get_openkylin)