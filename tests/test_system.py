import sys

import pytest

from srcswitch import system


@pytest.fixture
def posix(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def windows(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.setenv("USERPROFILE", "C:\\Users\\someone")


def test_on_windows_follows_platform(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    assert system.on_windows() is True
    monkeypatch.setattr(sys, "platform", "linux")
    assert system.on_windows() is False


def test_devnull(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert system.devnull() == "/dev/null"
    monkeypatch.setattr(sys, "platform", "win32")
    assert system.devnull() == "nul"


def test_os_home_posix(posix):
    assert system.os_home() == str(posix)


def test_os_home_windows(windows):
    assert system.os_home() == "C:\\Users\\someone"


def test_os_home_unset(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.delenv("HOME", raising=False)
    assert system.os_home() is None


def test_powershell_profiles(windows):
    assert system.powershell_profile() == (
        "C:\\Users\\someone\\Documents\\PowerShell\\Microsoft.PowerShell_profile.ps1"
    )
    assert system.powershell_v5_profile() == (
        "C:\\Users\\someone\\Documents\\WindowsPowerShell\\"
        "Microsoft.PowerShell_profile.ps1"
    )


def test_powershell_profile_without_home(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.delenv("USERPROFILE", raising=False)
    with pytest.raises(RuntimeError):
        system.powershell_profile()


def test_file_exists(posix):
    image = posix / "chsrc.png"
    image.write_bytes(b"\x89PNG")
    assert system.file_exists(str(image)) is True
    assert system.file_exists(str(posix / "missing.png")) is False


def test_file_exists_with_tilde(posix):
    (posix / ".bashrc").write_text("export A=1\n")
    assert system.file_exists("~/.bashrc") is True
    assert system.file_exists("~/.zshrc") is False


def test_dir_exists(posix):
    (posix / "etc").mkdir()
    assert system.dir_exists("~") is True
    assert system.dir_exists(str(posix / "etc")) is True
    assert system.dir_exists("~/etc") is True
    assert system.dir_exists("~/nothing") is False


def test_dir_exists_rejects_file(posix):
    (posix / "file.txt").write_text("x")
    assert system.dir_exists("~/file.txt") is False


def test_uniform_path_posix(posix):
    assert system.uniform_path(" \n ~/haha/test/123 \n\r ") == "~/haha/test/123"


def test_uniform_path_windows(windows):
    assert system.uniform_path(" ~/haha/test/123 ") == (
        "C:\\Users\\someone\\haha\\test\\123"
    )
    assert system.uniform_path("a/b/c") == "a\\b\\c"


def test_parent_dir_posix(posix):
    assert system.parent_dir(" ~/haha/test/123") == system.uniform_path("~/haha/test")
    assert system.parent_dir("/etc/apt/sources.list") == "/etc/apt"


def test_parent_dir_windows(windows):
    assert system.parent_dir(" ~/haha/test/123") == "C:\\Users\\someone\\haha\\test"


def test_parent_dir_without_separator(posix):
    with pytest.raises(ValueError):
        system.parent_dir("plain")


def test_run_returns_selected_line(posix):
    seen = []
    result = system.run("printf 'a\\nb\\nc\\n'", 2, seen.append)
    assert result == "b\n"
    assert seen == ["a\n"]


def test_run_last_line_visits_all(posix):
    seen = []
    result = system.run("printf 'a\\nb\\nc\\n'", 0, seen.append)
    assert result == "c\n"
    assert seen == ["a\n", "b\n", "c\n"]


def test_run_line_beyond_output_returns_last(posix):
    assert system.run("printf 'x\\ny\\n'", 5) == "y\n"


def test_run_no_output(posix):
    assert system.run("true") is None