[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "diggerlib"
version = "0.1.0"
description = "Engine parts of a classic tunnelling arcade game: PC speaker sound, DRF recordings, high scores, sprites and monsters"
requires-python = ">=3.10"
dependencies = []
keywords = ["digger", "arcade", "game", "pc-speaker", "sound", "recording", "sprites"]
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
    "Topic :: Games/Entertainment :: Arcade",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["diggerlib"]

[tool.pytest.ini_options]
addopts = "-ra"
