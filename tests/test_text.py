import sys

import pytest

from srcswitch import text
from srcswitch.text import Style


@pytest.fixture(autouse=True)
def _color_on():
    text.set_color_enabled(True)
    yield
    text.set_color_enabled(True)


@pytest.mark.parametrize(
    "func, code, word",
    [
        (text.bold, 1, "粗体"),
        (text.faint, 2, "浅体"),
        (text.italic, 3, "斜体"),
        (text.underline, 4, "下划线"),
        (text.blink, 5, "闪烁"),
        (text.cross, 9, "删除线"),
        (text.red, 31, "红色"),
        (text.green, 32, "绿色"),
        (text.yellow, 33, "黄色"),
        (text.blue, 34, "蓝色"),
        (text.magenta, 35, "紫色"),
        (text.cyan, 36, "青色"),
    ],
)
def test_styles_wrap_text(func, code, word):
    assert func(word) == f"\x1b[{code}m{word}\x1b[0m"


def test_stylize_with_enum():
    assert text.stylize("x", Style.RED) == "\x1b[31mx\x1b[0m"


def test_color_disabled_returns_plain_text():
    text.set_color_enabled(False)
    assert text.red("红色") == "红色"
    assert text.bold("粗体") == "粗体"


def test_color_can_be_reenabled():
    text.set_color_enabled(False)
    text.set_color_enabled(True)
    assert text.green("ok") == "\x1b[32mok\x1b[0m"


def test_ends_with():
    assert text.ends_with("abcdef", "abcdefg") is False
    assert text.ends_with("abcdef", "def") is True
    assert text.ends_with("abcdef", "bcdef") is True
    assert text.ends_with("abcdef", "abcdef") is True
    assert text.ends_with("abcdef", "") is True


def test_starts_with():
    assert text.starts_with("abcdef", "abcdefg") is False
    assert text.starts_with("abcdef", "abc") is True
    assert text.starts_with("abcdef", "abcde") is True
    assert text.starts_with("abcdef", "abcdef") is True
    assert text.starts_with("abcdef", "") is True


def test_starts_with_none():
    assert text.starts_with(None, "a") is False
    assert text.starts_with("a", None) is False


def test_delete_suffix():
    assert text.delete_suffix("abcdefg", "cdef") == "abcdefg"
    assert text.delete_suffix("abcdefg", "cdefgh") == "abcdefg"
    assert text.delete_suffix("abcdefg", "") == "abcdefg"
    assert text.delete_suffix("abcdefg", "efg") == "abcd"


def test_delete_prefix():
    assert text.delete_prefix("abcdefg", "cdef") == "abcdefg"
    assert text.delete_prefix("abcdefg", "0abcde") == "abcdefg"
    assert text.delete_prefix("abcdefg", "") == "abcdefg"
    assert text.delete_prefix("abcdefg", "abc") == "defg"


def test_gsub():
    assert text.gsub("abcdefabcdef", "abc", "") == "defdef"
    assert text.gsub("abcdefabcdef", "abc", "6") == "6def6def"
    assert text.gsub("abcdefabcdef", "abc", "XIANG") == "XIANGdefXIANGdef"
    assert text.gsub("abcdefabcdef", "abc", "DEF") == "DEFdefDEFdef"


def test_gsub_no_match():
    assert text.gsub("hello", "xyz", "q") == "hello"


def test_gsub_empty_pattern_rejected():
    with pytest.raises(ValueError):
        text.gsub("abc", "", "x")


def test_strip():
    assert text.strip(" \n ~/haha/test/123 \n\r ") == "~/haha/test/123"
    assert text.strip("\t\v\fabc\f") == "abc"
    assert text.strip(" \n ") == ""


def test_quiet_command_posix(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert text.quiet_command("git version") == "git version 1>/dev/null 2>&1 "


def test_quiet_command_windows(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    assert text.quiet_command("git version") == "git version >nul 2>nul "