"""Operating-system helpers: platform checks, paths and running commands."""

from __future__ import annotations

import os
import subprocess
import sys
from typing import Callable, Optional

from . import text


def on_windows() -> bool:
    """True when running on Windows."""
    return sys.platform.startswith("win")


def os_home() -> Optional[str]:
    """The user's home directory from the environment, or None if unset."""
    return os.environ.get("USERPROFILE" if on_windows() else "HOME")


def _require_home() -> str:
    home = os_home()
    if home is None:
        raise RuntimeError("home directory is not set in the environment")
    return home


def devnull() -> str:
    """The null device path of the current platform."""
    return "nul" if on_windows() else "/dev/null"


def run(
    command: str,
    line: int = 0,
    on_line: Optional[Callable[[str], None]] = None,
) -> Optional[str]:
    """Run ``command`` through the shell and return one line of its output.

    ``line`` selects the 1-based line to return; 0 returns the last line.
    ``on_line`` is called for each line read before the selected one (with 0,
    for every line). Lines keep their trailing newline. Returns None when the
    command prints nothing.
    """
    result: Optional[str] = None
    with subprocess.Popen(
        command,
        shell=True,
        stdout=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
    ) as proc:
        assert proc.stdout is not None
        for count, output in enumerate(proc.stdout, start=1):
            result = output
            if count == line:
                break
            if on_line is not None:
                on_line(output)
        proc.stdout.close()
        proc.wait()
    return result


def powershell_profile() -> str:
    """Path of the PowerShell (7+) profile script."""
    return _require_home() + "\\Documents\\PowerShell\\Microsoft.PowerShell_profile.ps1"


def powershell_v5_profile() -> str:
    """Path of the Windows PowerShell 5 profile script."""
    return (
        _require_home()
        + "\\Documents\\WindowsPowerShell\\Microsoft.PowerShell_profile.ps1"
    )


def _expand_tilde(path: str) -> str:
    if text.starts_with(path, "~"):
        return _require_home() + path[1:]
    return path


def file_exists(path: str) -> bool:
    """True if ``path`` exists; a leading ``~`` means the home directory."""
    return os.path.exists(_expand_tilde(path))


def dir_exists(path: str) -> bool:
    """True if ``path`` is a directory; a leading ``~`` means the home directory."""
    return os.path.isdir(_expand_tilde(path))


def uniform_path(path: str) -> str:
    """Strip surrounding whitespace; on Windows also expand ``~/`` and use backslashes."""
    result = text.strip(path)
    if on_windows():
        if text.starts_with(result, "~/"):
            result = _require_home() + "\\" + text.delete_prefix(result, "~/")
        result = text.gsub(result, "/", "\\")
    return result


def parent_dir(path: str) -> str:
    """The directory part of ``path`` after normalising it with :func:`uniform_path`."""
    normalized = uniform_path(path)
    separator = "\\" if on_windows() else "/"
    head, found, _ = normalized.rpartition(separator)
    if not found:
        raise ValueError(f"path has no parent directory: {path!r}")
    return head