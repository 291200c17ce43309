# srcswitch

`srcswitch` points the package sources of operating systems and developer
tools at a mirror site. It holds a catalogue of mirror sites and, for each
supported target, the mirrors that carry it and the steps that switch to one.

## Supported targets

Each recipe module defines source lists, `get_*` / `set_*` functions and
`Target` objects:

- `srcswitch.recipes.apt`: Debian, Ubuntu, Armbian, Kali Linux, Linux Lite,
  Linux Mint
- `srcswitch.recipes.apt_derived`: ROS, Raspberry Pi OS, Trisquel, deepin,
  openKylin
- `srcswitch.recipes.yum`: AlmaLinux, Anolis OS, Fedora Linux, Rocky Linux,
  openEuler
- `srcswitch.recipes.pacman`: Arch Linux, Arch Linux CN, MSYS2, Manjaro
- `srcswitch.recipes.bsd`: FreeBSD, NetBSD, OpenBSD
- `srcswitch.recipes.os_misc`: Alpine Linux, Gentoo, OpenWrt, Solus,
  Void Linux, openSUSE
- `srcswitch.recipes.ware_manual`: Anaconda, CocoaPods, Docker Hub, Emacs,
  Flathub, Guix
- `srcswitch.recipes.ware_tools`: Homebrew, Nix, TeX Live, WinGet

## Usage

Every recipe takes a `srcswitch.recipe.Session`, which runs shell commands,
backs up and edits files, and writes progress messages. With `dry_run=True`
no command is executed, no file is changed and root is not required; every
step is still recorded in `session.actions`, and the commands in
`session.commands`.

```python
import sys

from srcswitch.recipe import Session
from srcswitch.recipes.apt import set_ubuntu

session = Session(in_english=True, dry_run=True, stdout=sys.stdout, stderr=sys.stderr)
set_ubuntu(session, "tuna")
print(session.commands)
```

The `option` argument chooses the source (see `srcswitch.recipe.select_source`):

- a mirror code such as `tuna`, `ustc` or `ali` picks that mirror;
- a URL starting with `http://` or `https://` is used as a user-defined source;
- `None`, an empty string or `first` picks the first listed mirror after the
  upstream entry.

`in_english` switches the session's own labels and messages to English; the
notes that individual recipes print are in Chinese.

A `Target` bundles a target's sources with its recipes:

```python
from srcswitch.recipe import Session
from srcswitch.recipes.ware_tools import WINGET

session = Session(dry_run=True)
WINGET.set_source(session, "ustc")
WINGET.reset_source(session)
print(WINGET.features())
```

Mirror sites can be looked up directly:

```python
from srcswitch.mirrors import all_mirrors, find_mirror

tuna = find_mirror("tuna")
print(tuna.name, tuna.site)
print(len(all_mirrors()))
```

Several recipes expose the text they would write, so it can be inspected
before anything is applied:

```python
from srcswitch.recipes.pacman import arch_server_line
from srcswitch.recipes.ware_manual import guix_channels

print(guix_channels("https://mirror.sjtu.edu.cn/git/guix.git"))
print(arch_server_line("https://mirrors.ustc.edu.cn/archlinux", "x86_64"))
```

Failures are raised as `srcswitch.recipe.RecipeError`. Examples are a failing
command, a missing required program, an unknown mirror code, missing root
rights (checked outside Windows and dry runs) and an unsupported system
version.

The helper modules `srcswitch.text`, `srcswitch.log` and `srcswitch.system`
provide terminal styling, prompted log lines, and path and command utilities.

## What the package does not do

- It has no command-line program. Recipes are called from Python.
- It does not measure mirror speed. Mirrors carry a `bigfile_url`, but the
  automatic choice is simply the first listed mirror.