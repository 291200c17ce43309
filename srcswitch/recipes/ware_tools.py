"""Recipes for Homebrew, Nix, TeX Live and WinGet."""

from __future__ import annotations

from typing import Optional

from .. import text
from ..mirrors import (
    BFSU,
    JLU,
    LZUOSS,
    SJTUG_ZHIYUAN,
    SUSTECH,
    TUNA,
    UPSTREAM,
    USTC,
    ZJU,
    FeatInfo,
    SourceInfo,
    StatusCan,
)
from ..recipe import APP_NAME, RecipeError, Session, SetsrcType, Target

HOMEBREW_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/"),
    SourceInfo(ZJU, "https://mirrors.zju.edu.cn/"),
    SourceInfo(SUSTECH, "https://mirrors.sustech.edu.cn/"),
)

NIX_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/nix-channels/"),
)

TEX_SOURCES = (
    SourceInfo(UPSTREAM, None),
    SourceInfo(SJTUG_ZHIYUAN, "https://mirrors.sjtug.sjtu.edu.cn/ctan/systems/texlive/tlnet"),
    SourceInfo(TUNA, "https://mirrors.tuna.tsinghua.edu.cn/CTAN/systems/texlive/tlnet"),
    SourceInfo(BFSU, "https://mirrors.bfsu.edu.cn/CTAN/systems/texlive/tlnet"),
    SourceInfo(LZUOSS, "https://mirror.lzu.edu.cn/CTAN/systems/texlive/tlnet"),
    SourceInfo(JLU, "https://mirrors.jlu.edu.cn/CTAN/systems/texlive/tlnet"),
    SourceInfo(SUSTECH, "https://mirrors.sustech.edu.cn/CTAN/systems/texlive/tlnet"),
)

WINGET_SOURCES = (
    SourceInfo(UPSTREAM, "https://cdn.winget.microsoft.com/cache"),
    SourceInfo(USTC, "https://mirrors.ustc.edu.cn/winget-source"),
)

_HOMEBREW_VARIABLES = (
    ("HOMEBREW_API_DOMAIN", "homebrew-bottles/api"),
    ("HOMEBREW_BOTTLE_DOMAIN", "homebrew-bottles"),
    ("HOMEBREW_BREW_GIT_REMOTE", "git/homebrew/brew.git"),
    ("HOMEBREW_CORE_GIT_REMOTE", "git/homebrew/homebrew-core.git"),
)

_ZSHRC = "~/.zshrc"
_BASHRC = "~/.bashrc"
_FISHRC = "~/.config/fish/config.fish"


def homebrew_exports(url: str) -> list[str]:
    """POSIX shell ``export`` lines that point Homebrew at the mirror ``url``."""
    return [f'export {name}="{url}{suffix}"' for name, suffix in _HOMEBREW_VARIABLES]


def homebrew_fish_exports(url: str) -> list[str]:
    """fish ``set -x`` lines that point Homebrew at the mirror ``url``."""
    return [f'set -x {name} "{url}{suffix}"' for name, suffix in _HOMEBREW_VARIABLES]


def _write_profile(session: Session, path: str, lines: list[str]) -> None:
    session.backup(path)
    session.append_to_file(f"\n\n# Generated by {APP_NAME}", path)
    for line in lines:
        session.append_to_file(line, path)


def get_homebrew(session: Session, option: Optional[str]) -> None:
    command = "".join(
        f"echo {name}=${name};" for name, _ in _HOMEBREW_VARIABLES
    )
    session.run(command, abort_on_failure=False)


def set_homebrew(session: Session, option: Optional[str]) -> SourceInfo:
    source = session.yield_source(HOMEBREW_SOURCES, option)
    exports = homebrew_exports(source.url)

    _write_profile(session, _ZSHRC, exports)
    if session.check_file(_BASHRC):
        _write_profile(session, _BASHRC, exports)
    if session.check_file(_FISHRC):
        _write_profile(session, _FISHRC, homebrew_fish_exports(source.url))

    session.conclude(source, SetsrcType.AUTO)
    session.note("请您重启终端使Homebrew环境变量生效")
    return source


def homebrew_feat(option: Optional[str]) -> FeatInfo:
    return FeatInfo(
        can_get=True,
        can_reset=False,
        stcan_locally=StatusCan.CAN_NOT,
        locally=None,
        can_english=True,
        # The URLs are pieced together, so a user-supplied URL cannot be used.
        can_user_define=False,
        note="该换源通过写入环境变量实现，若多次换源，请手动清理profile文件",
    )


def set_nix(session: Session, option: Optional[str]) -> SourceInfo:
    session.ensure_program("nix-channel")
    source = session.yield_source(NIX_SOURCES, option)

    session.run(f"nix-channel --add {source.url}nixpkgs-unstable nixpkgs")
    session.append_to_file(
        f"substituters = {source.url}store https://cache.nixos.org/",
        "~/.config/nix/nix.conf",
    )
    session.run("nix-channel --update")

    session.note("若您使用的是NixOS，请确认您的系统版本<version>（如22.11），并手动运行:")
    session.say(f"nix-channel --add {source.url}nixpkgs-<version> nixpkgs")
    session.note("若您使用的是NixOS，请额外添加下述内容至 configuration.nix 中")
    session.say(f'nix.settings.substituters = [ "{source.url}store" ];')

    session.conclude(source, SetsrcType.SEMI_AUTO)
    return source


def miktex_url(url: str) -> str:
    """The MiKTeX package repository on the same CTAN mirror as the TeX Live ``url``."""
    return text.delete_suffix(url, "texlive/tlnet") + "win32/miktex/tm/packages/"


def _tex_tools(session: Session) -> tuple[bool, bool]:
    has_tlmgr = session.check_program("tlmgr")
    has_mpm = session.check_program("mpm")
    if not has_tlmgr and not has_mpm:
        message = "未找到 tlmgr 或 mpm 命令，请检查是否存在（其一）"
        session.error(message)
        raise RecipeError(message)
    return has_tlmgr, has_mpm


def get_tex(session: Session, option: Optional[str]) -> None:
    has_tlmgr, has_mpm = _tex_tools(session)
    if has_tlmgr:
        session.run("tlmgr option repository")
    if has_mpm:
        session.run("mpm --get-repository")


def set_tex(session: Session, option: Optional[str]) -> SourceInfo:
    has_tlmgr, has_mpm = _tex_tools(session)
    source = session.yield_source(TEX_SOURCES, option)

    if has_tlmgr:
        session.run(f"tlmgr option repository {source.url}")
    if has_mpm:
        session.run(f"mpm --set-repository={miktex_url(source.url)}")

    session.conclude(source, SetsrcType.UNTESTED)
    return source


def get_winget(session: Session, option: Optional[str]) -> None:
    session.run("winget source list")


def set_winget(session: Session, option: Optional[str]) -> SourceInfo:
    source = session.yield_source(WINGET_SOURCES, option)
    session.run("winget source remove winget")
    session.run(f"winget source add winget {source.url}")
    session.conclude(source, SetsrcType.AUTO)
    return source


def reset_winget(session: Session, option: Optional[str]) -> None:
    session.run("winget source reset winget")
    session.conclude(None, SetsrcType.AUTO)


def winget_feat(option: Optional[str]) -> FeatInfo:
    return FeatInfo(
        can_get=True,
        can_reset=True,
        can_english=False,
        can_user_define=True,
    )


HOMEBREW = Target(
    "homebrew", HOMEBREW_SOURCES, set_homebrew, getter=get_homebrew, feat=homebrew_feat
)
NIX = Target("nix", NIX_SOURCES, set_nix)
TEX = Target("tex", TEX_SOURCES, set_tex, getter=get_tex)
WINGET = Target(
    "winget",
    WINGET_SOURCES,
    set_winget,
    getter=get_winget,
    resetter=reset_winget,
    feat=winget_feat,
)