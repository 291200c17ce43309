[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "srcswitch"
version = "0.1.0"
description = "Switch operating-system and software package sources to mirror sites"
requires-python = ">=3.10"
dependencies = []
keywords = ["mirror", "package-manager", "apt", "dnf", "pacman", "homebrew", "sources"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Operating System :: POSIX :: BSD",
    "Operating System :: MacOS",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["srcswitch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
