"""Recipes for software whose sources are mostly switched by hand."""

from __future__ import annotations

import sys
from typing import Optional

from .. import system
from ..mirrors import (
    BFSU,
    SJTUG_ZHIYUAN,
    TUNA,
    UPSTREAM,
    USTC,
    ZJU,
    MirrorSite,
    SourceInfo,
)
from ..recipe import RecipeError, Session, SetsrcType, Target

DAOCLOUD = MirrorSite(
    "daocloud", "DaoCloud", "上海道客网络科技有限公司", "https://www.daocloud.io/",
    "https://qiniu-download-public.daocloud.io/DaoCloud_Enterprise/dce5/offline-community-v0.18.0-amd64.tar",
)
FIT2CLOUD = MirrorSite("fit2cloud", "FIT2CLOUD", "杭州飞致云信息科技有限公司", "https://www.fit2cloud.com/")
HUECKER = MirrorSite(
    "huecker", "(Russia) Huecker", "俄罗斯 Huecker.io", "https://huecker.io/",
    "https://huecker.io/en/use.html",
)
EMACS_CHINA = MirrorSite("emacschina", "EmacsChina", "Emacs China 社区", "https://elpamirror.emacs-china.org/")

ANACONDA_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/anaconda/"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/anaconda/"),
    SourceInfo(ZJU, "https://mirrors.zju.edu.cn/anaconda/"),
    SourceInfo(SJTUG_ZHIYUAN, "https://mirror.sjtu.edu.cn/anaconda"),
)

COCOAPODS_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/git/CocoaPods/Specs.git"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/git/CocoaPods/Specs.git"),
)

DOCKERHUB_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(DAOCLOUD, "https://docker.m.daocloud.io"),
    SourceInfo(FIT2CLOUD, "https://docker.1panel.live"),
    SourceInfo(HUECKER, "https://huecker.io"),
)

EMACS_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(SJTUG_ZHIYUAN, "https://mirrors.sjtug.sjtu.edu.cn/docs/emacs-elpa"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/help/elpa/"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/help/elpa/"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/help/elpa.html"),
    SourceInfo(ZJU, "https://mirrors.zju.edu.cn/docs/elpa/"),
    SourceInfo(EMACS_CHINA, "https://elpamirror.emacs-china.org/"),
)

FLATHUB_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(SJTUG_ZHIYUAN, "https://mirror.sjtu.edu.cn/flathub"),
)

GUIX_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(SJTUG_ZHIYUAN, "https://mirror.sjtu.edu.cn/git/guix.git"),
)

_DOCKER_DAEMON_JSON = "/etc/docker/daemon.json"


def _on_linux() -> bool:
    return sys.platform.startswith("linux")


def _on_bsd() -> bool:
    return "bsd" in sys.platform


def anaconda_condarc(url: str) -> str:
    """The ``.condarc`` content that points conda at the mirror under ``url``."""
    main = url + "pkgs/main"
    r = url + "pkgs/r"
    msys2 = url + "pkgs/msys2"
    cloud = url + "cloud"
    return (
        "channels:\n  - defaults\n"
        "show_channel_urls: true\ndefault_channels:"
        f"\n  - {main}"
        f"\n  - {r}"
        f"\n  - {msys2}"
        "\ncustom_channels:\n"
        f"  conda-forge: {cloud}"
        f"\n  msys2: {cloud}"
        f"\n  bioconda: {cloud}"
        f"\n  menpo: {cloud}"
        f"\n  pytorch: {cloud}"
        f"\n  pytorch-lts: {cloud}"
        f"\n  simpleitk: {cloud}"
        f"\n  deepmodeling: {cloud}"
    )


def set_anaconda(session: Session, option: Optional[str]) -> SourceInfo:
    source = session.yield_source(ANACONDA_SOURCES, option)
    content = anaconda_condarc(source.url)
    config = (system.os_home() or "~") + "/.condarc"

    if system.on_windows():
        if not session.check_program("conda"):
            message = "未找到 conda 命令，请检查是否存在"
            session.error(message)
            raise RecipeError(message)
        session.run("conda config --set show_channel_urls yes")

    session.note(f"请向 {config} 中手动添加:")
    session.say(content)
    session.note("然后运行 conda clean -i 清除索引缓存，保证用的是镜像站提供的索引")
    session.conclude(source, SetsrcType.SEMI_AUTO)
    return source


def set_cocoapods(session: Session, option: Optional[str]) -> SourceInfo:
    source = session.yield_source(COCOAPODS_SOURCES, option)
    session.note("请手动执行以下命令:")
    session.say("cd ~/.cocoapods/repos")
    session.say("pod repo remove master")
    session.say(f"git clone {source.url} master")
    session.say("")
    session.note("最后进入项目工程目录，在Podfile中第一行加入:")
    session.say(f"source '{source.url}'")
    session.conclude(source, SetsrcType.MANUAL)
    return source


def dockerhub_daemon_json(url: str) -> str:
    """The ``daemon.json`` snippet that registers ``url`` as a registry mirror."""
    return '{\n  "registry-mirrors": ["' + url + '"]\n}'


def get_dockerhub(session: Session, option: Optional[str]) -> None:
    if _on_linux() or _on_bsd():
        session.view_file(_DOCKER_DAEMON_JSON)
    else:
        session.note("请打开Docker Desktop设置")
        session.note("选择“Docker Engine”选项卡，在该选项卡中找到“registry-mirrors”一栏查看")


def set_dockerhub(session: Session, option: Optional[str]) -> SourceInfo:
    source = session.yield_source(DOCKERHUB_SOURCES, option)
    if _on_linux() or _on_bsd():
        session.note(f"请向 {_DOCKER_DAEMON_JSON} 中添加下述内容:")
        session.say(dockerhub_daemon_json(source.url))
        if _on_linux():
            session.note("然后请运行:")
            session.say("sudo systemctl restart docker")
        else:
            session.note("然后请手动重启 docker 服务")
    else:
        session.note("请打开Docker Desktop设置")
        session.note("选择“Docker Engine”选项卡，在该选项卡中找到“registry-mirrors”一栏，添加镜像地址:")
        session.say(source.url)
    session.conclude(source, SetsrcType.MANUAL)
    return source


def set_emacs(session: Session, option: Optional[str]) -> SourceInfo:
    source = session.yield_source(EMACS_SOURCES, option)
    session.note("Emacs换源涉及Elisp，需要手动查阅并换源:")
    session.say(source.url)
    session.conclude(source, SetsrcType.MANUAL)
    return source


def set_flathub(session: Session, option: Optional[str]) -> SourceInfo:
    source = session.yield_source(FLATHUB_SOURCES, option)
    session.note("若出现问题，可先调用以下命令:")
    session.say(
        f"wget {source.url}/flathub.gpg\n"
        "flatpak remote-modify --gpg-import=flathub.gpg flathub"
    )
    session.run(f"flatpak remote-modify flathub --url={source.url}")
    session.conclude(source, SetsrcType.AUTO)
    return source


def guix_channels(url: str) -> str:
    """The ``channels.scm`` content that takes the default channel from ``url``."""
    return (
        "(list (channel\n"
        "       (inherit (car %default-channels))\n"
        f'       (url "{url}")))'
    )


def set_guix(session: Session, option: Optional[str]) -> SourceInfo:
    source = session.yield_source(GUIX_SOURCES, option)
    session.note("为防止扰乱配置文件，请您手动写入以下内容到 ~/.config/guix/channels.scm 文件中")
    session.say(guix_channels(source.url))
    session.conclude(source, SetsrcType.MANUAL)
    return source


ANACONDA = Target("anaconda", ANACONDA_SOURCES, set_anaconda)
COCOAPODS = Target("cocoapods", COCOAPODS_SOURCES, set_cocoapods)
DOCKERHUB = Target("dockerhub", DOCKERHUB_SOURCES, set_dockerhub, getter=get_dockerhub)
EMACS = Target("emacs", EMACS_SOURCES, set_emacs)
FLATHUB = Target("flathub", FLATHUB_SOURCES, set_flathub)
GUIX = Target("guix", GUIX_SOURCES, set_guix)