"""The session a recipe runs in, source selection, and target descriptions."""

from __future__ import annotations

import os
import platform
import shutil
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence, TextIO

from . import system, text as _text
from .mirrors import UPSTREAM, USER_DEFINE, FeatInfo, SourceInfo

APP_NAME = "srcswitch"


class RecipeError(Exception):
    """A recipe could not be carried out."""


class SetsrcType(Enum):
    """How completely a recipe switched the source by itself."""

    AUTO = "auto"
    RESET = "reset"
    SEMI_AUTO = "semi_auto"
    MANUAL = "manual"
    UNTESTED = "untested"


_CONCLUSIONS = {
    SetsrcType.AUTO: ("全自动换源完成", "Auto-switch done"),
    SetsrcType.RESET: ("已重置为上游默认源", "Reset to the upstream default source"),
    SetsrcType.SEMI_AUTO: (
        "半自动换源完成，仍需按上述提示手工操作",
        "Semi-automatic switch done, please follow the notes above",
    ),
    SetsrcType.MANUAL: ("请按上述提示手工操作", "Please follow the notes above manually"),
    SetsrcType.UNTESTED: (
        "换源完成，但该方案未经测试，若遇问题请报告",
        "Switch done, but this recipe is untested; please report any problem",
    ),
}


def _is_url(option: str) -> bool:
    return option.startswith(("http://", "https://"))


def select_source(sources: Iterable[SourceInfo], option: Optional[str]) -> SourceInfo:
    """Pick a source by mirror code, a user URL, or the first mirror when ``option`` is empty.

    The word ``first`` also picks the first mirror after the upstream entry.
    """
    candidates = tuple(sources)
    if not candidates:
        raise RecipeError("no sources available")

    if option and _is_url(option):
        return SourceInfo(USER_DEFINE, option)

    if not option or option == "first":
        for candidate in candidates:
            if candidate.mirror is not UPSTREAM and candidate.url:
                return candidate
        raise RecipeError("no mirror source available")

    for candidate in candidates:
        if candidate.mirror.code == option:
            if candidate.url is None:
                raise RecipeError(f"the address of source '{option}' is unknown")
            return candidate
    raise RecipeError(f"unknown mirror code: {option}")


class Session:
    """Output streams, command execution and file edits shared by every recipe.

    With ``dry_run`` set, commands are not executed, files are not changed and
    root is not required; every action is still recorded in :attr:`actions`.
    """

    def __init__(
        self,
        in_english: bool = False,
        dry_run: bool = False,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self.in_english = in_english
        self.dry_run = dry_run
        self._stdout = stdout
        self._stderr = stderr
        self.actions: list[tuple[str, ...]] = []

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    @property
    def commands(self) -> list[str]:
        """Commands run (or, in a dry run, that would have run), in order."""
        return [action[1] for action in self.actions if action[0] == "run"]

    def _label(self, chinese: str, english: str) -> str:
        return english if self.in_english else chinese

    def _emit(
        self,
        label: str,
        message: str,
        color: Optional[Callable[[str], str]],
        to_stderr: bool = False,
    ) -> None:
        if color is None:
            line = f"[{APP_NAME} {label}] {message}"
        else:
            line = f"[{color(APP_NAME)} {_text.bold(color(label))}] {color(message)}"
        stream = self.stderr if to_stderr else self.stdout
        stream.write(line + "\n")

    def log(self, message: str) -> None:
        self._emit(self._label("日志", "log"), message, None)

    def note(self, message: str) -> None:
        self._emit(self._label("提示", "notice"), message, _text.blue)

    def warn(self, message: str) -> None:
        self._emit(self._label("警告", "warn"), message, _text.yellow, to_stderr=True)

    def error(self, message: str) -> None:
        self._emit(self._label("错误", "error"), message, _text.red, to_stderr=True)

    def _success(self, message: str) -> None:
        self._emit(self._label("成功", "succeed"), message, _text.green)

    def say(self, text: str) -> None:
        """Write ``text`` as it is, followed by a newline."""
        self.stdout.write(text + "\n")

    def run(self, command: str, abort_on_failure: bool = True) -> int:
        """Run ``command`` through the shell and return its exit status."""
        self.actions.append(("run", command))
        self._emit(self._label("运行", "run"), command, _text.cyan)
        if self.dry_run:
            return 0
        self.stdout.flush()
        status = subprocess.run(command, shell=True).returncode
        if status != 0:
            message = self._label(
                f"命令执行失败 (返回码 {status}): {command}",
                f"Command failed (exit status {status}): {command}",
            )
            if abort_on_failure:
                self.error(message)
                raise RecipeError(message)
            self.warn(message)
        return status

    @staticmethod
    def _resolve(path: str) -> str:
        if path.startswith("~"):
            home = system.os_home()
            if home is None:
                raise RecipeError("home directory is not set in the environment")
            return home + path[1:]
        return path

    def view_file(self, path: str) -> None:
        """Write the contents of ``path`` to the output stream."""
        self.actions.append(("view", path))
        try:
            with open(self._resolve(path), encoding="utf-8", errors="replace") as handle:
                content = handle.read()
        except OSError as exc:
            raise RecipeError(f"cannot read {path}: {exc}") from exc
        self.stdout.write(content)
        if content and not content.endswith("\n"):
            self.stdout.write("\n")

    def check_file(self, path: str) -> bool:
        return system.file_exists(path)

    def check_program(self, name: str) -> bool:
        return shutil.which(name) is not None

    def ensure_program(self, name: str) -> None:
        if not self.check_program(name):
            message = self._label(
                f"未找到 {name} 命令，请检查是否存在",
                f"Command {name} not found, please check that it is installed",
            )
            self.error(message)
            raise RecipeError(message)

    def ensure_root(self) -> None:
        """Require administrator rights (skipped on Windows and in a dry run)."""
        if self.dry_run or system.on_windows():
            return
        if os.geteuid() != 0:
            message = self._label(
                "请在命令前使用 sudo 或切换为 root 用户来保证必要的权限",
                "Use sudo before the command or switch to root to ensure the necessary permissions",
            )
            self.error(message)
            raise RecipeError(message)

    def ensure_dir(self, path: str) -> None:
        self.actions.append(("mkdir", path))
        if not self.dry_run:
            os.makedirs(self._resolve(path), exist_ok=True)

    def backup(self, path: str) -> Optional[str]:
        """Copy ``path`` to ``path.bak``; return the backup path, or None if nothing was copied."""
        target = path + ".bak"
        self.actions.append(("backup", path))
        if self.dry_run:
            return target
        real = self._resolve(path)
        if not os.path.exists(real):
            self.note(self._label(f"{path} 不存在，不进行备份", f"{path} does not exist, skip backup"))
            return None
        shutil.copy2(real, self._resolve(target))
        self.log(self._label(f"备份文件名为 {target}", f"Backup file name is {target}"))
        return target

    @staticmethod
    def _with_newline(content: str) -> str:
        return content if content.endswith("\n") else content + "\n"

    def _prepare_parent(self, real: str) -> None:
        parent = os.path.dirname(real)
        if parent:
            os.makedirs(parent, exist_ok=True)

    def append_to_file(self, text: str, path: str) -> None:
        self.actions.append(("append", path, text))
        if self.dry_run:
            return
        real = self._resolve(path)
        self._prepare_parent(real)
        with open(real, "a", encoding="utf-8") as handle:
            handle.write(self._with_newline(text))

    def prepend_to_file(self, text: str, path: str) -> None:
        self.actions.append(("prepend", path, text))
        if self.dry_run:
            return
        real = self._resolve(path)
        self._prepare_parent(real)
        existing = ""
        if os.path.exists(real):
            with open(real, encoding="utf-8") as handle:
                existing = handle.read()
        with open(real, "w", encoding="utf-8") as handle:
            handle.write(self._with_newline(text) + existing)

    def overwrite_file(self, text: str, path: str) -> None:
        self.actions.append(("overwrite", path, text))
        if self.dry_run:
            return
        real = self._resolve(path)
        self._prepare_parent(real)
        with open(real, "w", encoding="utf-8") as handle:
            handle.write(self._with_newline(text))

    def cpu_arch(self) -> str:
        return platform.machine()

    def yield_source(self, sources: Sequence[SourceInfo], option: Optional[str]) -> SourceInfo:
        """Select a source for ``option`` and announce the choice."""
        source = select_source(sources, option)
        mirror = source.mirror
        name = mirror.abbr if self.in_english else mirror.name
        self.note(
            self._label(
                f"选中镜像站: {name} ({mirror.code})  {source.url}",
                f"Selected mirror site: {name} ({mirror.code})  {source.url}",
            )
        )
        return source

    def conclude(self, source: Optional[SourceInfo], kind: SetsrcType) -> None:
        """Report how the switch ended and credit the mirror that was used."""
        chinese, english = _CONCLUSIONS[SetsrcType(kind)]
        message = english if self.in_english else chinese
        if kind in (SetsrcType.AUTO, SetsrcType.RESET):
            self._success(message)
        elif kind is SetsrcType.UNTESTED:
            self.warn(message)
        else:
            self.note(message)
        if source is not None and source.mirror not in (UPSTREAM, USER_DEFINE):
            mirror = source.mirror
            self.say(
                self._label(
                    f"感谢镜像提供方: {mirror.name}",
                    f"Thanks to the mirror site: {mirror.abbr}",
                )
            )


RecipeFunc = Callable[[Session, Optional[str]], object]


@dataclass
class Target:
    """A switchable target: its sources and the recipes that act on it."""

    name: str
    sources: Sequence[SourceInfo]
    setter: RecipeFunc
    getter: Optional[RecipeFunc] = None
    resetter: Optional[RecipeFunc] = None
    feat: Optional[Callable[[Optional[str]], FeatInfo]] = None

    def get_source(self, session: Session, option: Optional[str] = None) -> object:
        if self.getter is None:
            raise RecipeError(f"target '{self.name}' cannot show its current source")
        return self.getter(session, option)

    def set_source(self, session: Session, option: Optional[str] = None) -> object:
        return self.setter(session, option)

    def reset_source(self, session: Session, option: Optional[str] = None) -> object:
        if self.resetter is None:
            raise RecipeError(f"target '{self.name}' cannot be reset")
        return self.resetter(session, option)

    def features(self, option: Optional[str] = None) -> FeatInfo:
        if self.feat is not None:
            return self.feat(option)
        return FeatInfo(can_get=self.getter is not None, can_reset=self.resetter is not None)