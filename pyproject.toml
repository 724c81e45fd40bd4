[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cloudmusic"
version = "0.1.0"
description = "Song lists in SQLite, playlist state and a client for a shared music server"
requires-python = ">=3.10"
dependencies = []
keywords = ["music", "player", "playlist", "sqlite", "client"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Players",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cloudmusic = "cloudmusic.client:main"

[tool.hatch.build.targets.wheel]
packages = ["cloudmusic"]

[tool.pytest.ini_options]
addopts = "-ra"
