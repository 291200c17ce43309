"""Mirror sites and the records that describe a target's sources and features."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

_BIG_FILE_UBUNTU = "/24.04/ubuntu-24.04.1-desktop-amd64.iso"
_BIG_FILE_CTAN = "/systems/texlive/Images/texlive.iso"
_BIG_FILE_ARCHLINUX = "/iso/latest/archlinux-x86_64.iso"
_BIG_FILE_DEEPIN = "/20.9/deepin-desktop-community-20.9-amd64.iso"


@dataclass(frozen=True)
class MirrorSite:
    """A mirror site: its short code, English abbreviation, full name and links."""

    code: str
    abbr: str
    name: str
    site: Optional[str] = None
    bigfile_url: Optional[str] = None


@dataclass(frozen=True)
class SourceInfo:
    """One source of a target: the mirror that serves it and its URL."""

    mirror: MirrorSite
    url: Optional[str]


class StatusCan(IntEnum):
    """Whether a feature is supported not at all, fully or partly."""

    CAN_NOT = 0
    CAN_FULLY = 1
    CAN_SEMI = 2


@dataclass
class FeatInfo:
    """What a target's recipe supports."""

    can_get: bool = False
    can_reset: bool = False
    can_english: bool = False
    can_user_define: bool = False
    stcan_locally: StatusCan = StatusCan.CAN_NOT
    locally: Optional[str] = None
    note: Optional[str] = None


# Campus mirrors
MIRRORZ = MirrorSite("mirrorz", "MirrorZ", "MirrorZ 校园网镜像站", "https://mirrors.cernet.edu.cn/")
TUNA = MirrorSite(
    "tuna", "TUNA", "清华大学开源软件镜像站", "https://mirrors.tuna.tsinghua.edu.cn/",
    "https://mirrors.tuna.tsinghua.edu.cn/speedtest/1000mb.bin",
)
SJTUG_ZHIYUAN = MirrorSite(
    "sjtu", "SJTUG-zhiyuan", "上海交通大学致远镜像站", "https://mirrors.sjtug.sjtu.edu.cn/",
    "https://mirrors.sjtug.sjtu.edu.cn/ctan" + _BIG_FILE_CTAN,
)
ZJU = MirrorSite(
    "zju", "ZJU", "浙江大学开源软件镜像站", "https://mirrors.zju.edu.cn/",
    "https://mirrors.zju.edu.cn/ubuntu-releases" + _BIG_FILE_UBUNTU,
)
LZUOSS = MirrorSite(
    "lzu", "LZUOSS", "兰州大学开源社区镜像站", "https://mirror.lzu.edu.cn/",
    "https://mirror.lzu.edu.cn/CTAN" + _BIG_FILE_CTAN,
)
JLU = MirrorSite(
    "jlu", "JLU", "吉林大学开源镜像站", "https://mirrors.jlu.edu.cn/",
    "https://mirrors.jlu.edu.cn/_static/speedtest.bin",
)
BFSU = MirrorSite(
    "bfsu", "BFSU", "北京外国语大学开源软件镜像站", "https://mirrors.bfsu.edu.cn/",
    "https://mirrors.bfsu.edu.cn/speedtest/1000mb.bin",
)
PKU = MirrorSite(
    "pku", "PKU", "北京大学开源镜像站", "https://mirrors.pku.edu.cn/",
    "https://mirrors.pku.edu.cn/ubuntu-releases" + _BIG_FILE_UBUNTU,
)
BJTU = MirrorSite(
    "bjtu", "BJTU", "北京交通大学自由与开源软件镜像站", "https://mirror.bjtu.edu.cn/",
    "https://mirror.bjtu.edu.cn/archlinux" + _BIG_FILE_ARCHLINUX,
)
SUSTECH = MirrorSite(
    "sustech", "SUSTech", "南方科技大学开源软件镜像站", "https://mirrors.sustech.edu.cn/",
    "https://mirrors.sustech.edu.cn/site/speedtest/1000mb.bin",
)
USTC = MirrorSite(
    "ustc", "USTC", "中国科学技术大学开源镜像站", "https://mirrors.ustc.edu.cn/",
    "https://mirrors.ustc.edu.cn/ubuntu-releases" + _BIG_FILE_UBUNTU,
)
HUST = MirrorSite(
    "hust", "HUST", "华中科技大学开源镜像站", "https://mirrors.hust.edu.cn/",
    "https://mirrors.hust.edu.cn/ubuntu-releases" + _BIG_FILE_UBUNTU,
)
ISCAS = MirrorSite(
    "iscas", "ISCAS", "中科院软件所智能软件研究中心开源镜像站", "https://mirror.iscas.ac.cn/",
    "https://mirror.iscas.ac.cn/ubuntu-releases" + _BIG_FILE_UBUNTU,
)
SCAU = MirrorSite(
    "scau", "SCAU", "华南农业大学开源软件镜像站", "https://mirrors.scau.edu.cn/",
    "https://mirrors.scau.edu.cn/ubuntu-releases" + _BIG_FILE_UBUNTU,
)
NJU = MirrorSite(
    "nju", "NJU", "南京大学开源镜像站", "https://mirrors.nju.edu.cn/",
    "https://mirrors.nju.edu.cn/archlinux" + _BIG_FILE_ARCHLINUX,
)

# Commercial mirrors
ALI = MirrorSite(
    "ali", "Ali OPSX Public", "阿里巴巴开源镜像站(公网)", "https://developer.aliyun.com/mirror/",
    "https://mirrors.aliyun.com/deepin-cd" + _BIG_FILE_DEEPIN,
)
TENCENT = MirrorSite(
    "tencent", "Tencent Public", "腾讯软件源(公网)", "https://mirrors.tencent.com/",
    "https://mirrors.cloud.tencent.com/ubuntu-releases" + _BIG_FILE_UBUNTU,
)
HUAWEI = MirrorSite(
    "huawei", "Huawei Cloud", "华为开源镜像站", "https://mirrors.huaweicloud.com/",
    "https://mirrors.huaweicloud.com/ubuntu-releases" + _BIG_FILE_UBUNTU,
)
VOLCENGINE = MirrorSite(
    "volc", "Volcengine", "火山引擎开源软件镜像站(公网)", "https://developer.volcengine.com/mirror/",
    "https://mirrors.volces.com/ubuntu-releases" + _BIG_FILE_UBUNTU,
)
NETEASE = MirrorSite(
    "netease", "Netease", "网易开源镜像站", "https://mirrors.163.com/",
    "https://mirrors.163.com/deepin-cd" + _BIG_FILE_DEEPIN,
)
SOHU = MirrorSite(
    "sohu", "SOHU", "搜狐开源镜像站", "https://mirrors.sohu.com/",
    "https://mirrors.sohu.com/deepin-cd" + _BIG_FILE_DEEPIN,
)

UPSTREAM = MirrorSite("upstream", "Upstream", "上游默认源")
USER_DEFINE = MirrorSite("user", "用户自定义", "用户自定义")

_ALL = (
    MIRRORZ, TUNA, SJTUG_ZHIYUAN, ZJU, LZUOSS, JLU, BFSU, PKU, BJTU, SUSTECH,
    USTC, HUST, ISCAS, SCAU, NJU,
    ALI, TENCENT, HUAWEI, VOLCENGINE, NETEASE, SOHU,
    UPSTREAM, USER_DEFINE,
)
_BY_CODE = {mirror.code: mirror for mirror in _ALL}


def all_mirrors() -> tuple[MirrorSite, ...]:
    """Every shared mirror site, including the upstream and user-defined markers."""
    return _ALL


def find_mirror(code: str) -> MirrorSite:
    """The shared mirror site with ``code``; raises KeyError if there is none."""
    try:
        return _BY_CODE[code]
    except KeyError:
        raise KeyError(f"unknown mirror code: {code}") from None