[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "groupfun"
version = "0.1.0"
description = "Game and utility logic for group-chat bots: daily draws, sign-in scores, sleep tracking, tarot, a marriage registry and more"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["chat", "bot", "group", "tarot", "sign-in", "games", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.setuptools.packages.find]
include = ["groupfun*"]

[tool.pytest.ini_options]
addopts = "-ra"
