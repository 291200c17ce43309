"""Recipes for YUM/DNF-based systems: AlmaLinux, Anolis OS, Fedora, Rocky Linux and openEuler."""

from __future__ import annotations

import re
from typing import Optional

from ..mirrors import (
    ALI,
    BFSU,
    HUST,
    LZUOSS,
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
    ZJU,
    SourceInfo,
)
from ..recipe import Session, SetsrcType, Target

YUM_SOURCE_LIST_D = "/etc/yum.repos.d/"
OPENEULER_SOURCE_LIST = YUM_SOURCE_LIST_D + "openEuler.repo"
ETC_OS_RELEASE = "/etc/os-release"

FEDORA_REPO = YUM_SOURCE_LIST_D + "fedora.repo"
FEDORA_MODULAR_REPO = YUM_SOURCE_LIST_D + "fedora-modular.repo"
FEDORA_UPDATES_REPO = YUM_SOURCE_LIST_D + "fedora-updates.repo"
FEDORA_UPDATES_MODULAR_REPO = YUM_SOURCE_LIST_D + "fedora-updates-modular.repo"

ALMALINUX_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/almalinux"),
    SourceInfo(VOLCENGINE, "https://mirrors.volces.com/almalinux"),
    SourceInfo(SJTUG_ZHIYUAN, "https://mirrors.sjtug.sjtu.edu.cn/almalinux"),
    SourceInfo(ZJU, "https://mirrors.zju.edu.cn/almalinux"),
    SourceInfo(NJU, "https://mirror.nju.edu.cn/almalinux"),
)

ANOLIS_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/anolis"),
    SourceInfo(HUST, "https://mirrors.hust.edu.cn/anolis"),
)

FEDORA_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/fedora"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/fedora"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/fedora"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/fedora"),
    SourceInfo(TENCENT, "https://mirrors.tencent.com/fedora"),
    SourceInfo(NETEASE, "https://mirrors.163.com/fedora"),
    SourceInfo(SOHU, "https://mirrors.sohu.com/fedora"),
)

ROCKYLINUX_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(MIRRORZ, "https://mirrors.cernet.edu.cn/rocky"),
    SourceInfo(ALI, "https://mirrors.aliyun.com/rockylinux"),
    SourceInfo(VOLCENGINE, "https://mirrors.volces.com/rockylinux"),
    SourceInfo(SJTUG_ZHIYUAN, "https://mirror.sjtu.edu.cn/rocky"),
    SourceInfo(SUSTECH, "https://mirrors.sustech.edu.cn/rocky-linux"),
    SourceInfo(ZJU, "https://mirrors.zju.edu.cn/rocky"),
    SourceInfo(LZUOSS, "https://mirror.lzu.edu.cn/rocky"),
    SourceInfo(SOHU, "https://mirrors.sohu.com/Rocky"),
    SourceInfo(NETEASE, "https://mirrors.163.com/rocky"),
)

OPENEULER_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(ALI, "https://mirrors.aliyun.com/openeuler/"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/openeuler/"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/openeuler/"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/openeuler/"),
    SourceInfo(TENCENT, "https://mirrors.tencent.com/openeuler/"),
    SourceInfo(NETEASE, "https://mirrors.163.com/openeuler/"),
    SourceInfo(SOHU, "https://mirrors.sohu.com/openeuler/"),
)


def set_almalinux(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(ALMALINUX_SOURCES, option)
    session.run(
        "sed -e 's|^mirrorlist=|#mirrorlist=|g' "
        "-e 's|^#\\s*baseurl=https://repo.almalinux.org/almalinux|baseurl="
        + source.url
        + "|g'  -i.bak  /etc/yum.repos.d/almalinux*.repo"
    )
    session.run("dnf makecache")
    session.conclude(source, SetsrcType.AUTO)
    return source


def set_anolis(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(ANOLIS_SOURCES, option)
    session.run(
        "sed -i.bak -E 's|https?://(mirrors\\.openanolis\\.cn/anolis)|"
        + source.url
        + "|g' /etc/yum.repos.d/*.repo"
    )
    session.run("dnf makecache")
    session.run("dnf update")
    session.conclude(source, SetsrcType.UNTESTED)
    return source


def set_fedora(session: Session, option: Optional[str]) -> SourceInfo:
    """Switch Fedora's repositories; Fedora 29 and earlier are not supported."""
    session.ensure_root()
    source = session.yield_source(FEDORA_SOURCES, option)

    session.note("Fedora 29 及以下版本暂不支持")
    session.backup(FEDORA_REPO)
    session.backup(FEDORA_UPDATES_REPO)

    repos = " ".join(
        (FEDORA_REPO, FEDORA_MODULAR_REPO, FEDORA_UPDATES_REPO, FEDORA_UPDATES_MODULAR_REPO)
    )
    session.run(
        "sed -e 's|^metalink=|#metalink=|g' "
        "-e 's|^#baseurl=http://download.example/pub/fedora/linux/|baseurl="
        + source.url.rstrip("/")
        + "/|g' -i.bak "
        + repos
    )

    session.log("已替换文件 " + FEDORA_REPO)
    session.log("已新增文件 " + FEDORA_MODULAR_REPO)
    session.log("已替换文件 " + FEDORA_UPDATES_REPO)
    session.log("已新增文件 " + FEDORA_UPDATES_MODULAR_REPO)

    session.run("dnf makecache")
    session.conclude(source, SetsrcType.AUTO)
    return source


def rocky_command(url: str, version: float) -> str:
    """The sed command that points Rocky Linux ``version`` at the mirror ``url``."""
    if version < 9:
        repos = "/etc/yum.repos.d/Rocky-*.repo"
    else:
        repos = "/etc/yum.repos.d/rocky-extras.repo /etc/yum.repos.d/rocky.repo"
    return (
        "sed -e 's|^mirrorlist=|#mirrorlist=|g' "
        "-e 's|^#baseurl=http://dl.rockylinux.org/$contentdir|baseurl="
        + url
        + "|g' -i.bak "
        + repos
    )


def _rocky_version(path: str) -> float:
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            lines = handle.read().splitlines()
    except OSError:
        return 0.0
    for line in lines:
        key, sep, value = line.partition("=")
        if sep and key.strip() == "ROCKY_SUPPORT_PRODUCT_VERSION":
            match = re.match(r"\s*[+-]?\d+(?:\.\d*)?", value.strip().strip("\"'"))
            return float(match.group()) if match else 0.0
    return 0.0


def set_rockylinux(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(ROCKYLINUX_SOURCES, option)
    version = _rocky_version(ETC_OS_RELEASE)
    session.run(rocky_command(source.url, version))
    session.run("dnf makecache")
    session.conclude(source, SetsrcType.AUTO)
    return source


def set_openeuler(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_root()
    source = session.yield_source(OPENEULER_SOURCES, option)
    session.backup(OPENEULER_SOURCE_LIST)
    session.run(
        "sed -i 's#http://repo.openeuler.org/#"
        + source.url
        + "#g' "
        + OPENEULER_SOURCE_LIST
    )
    session.run("dnf makecache")
    session.conclude(source, SetsrcType.AUTO)
    return source


ALMALINUX = Target("almalinux", ALMALINUX_SOURCES, set_almalinux)
ANOLIS = Target("anolis", ANOLIS_SOURCES, set_anolis)
FEDORA = Target("fedora", FEDORA_SOURCES, set_fedora)
ROCKYLINUX = Target("rockylinux", ROCKYLINUX_SOURCES, set_rockylinux)
OPENEULER = Target("openeuler", OPENEULER_SOURCES, set_openeuler)