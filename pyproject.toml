[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "prosystem-core"
version = "0.1.0"
description = "Emulation core: a 6502-compatible CPU, the RIOT input/timer chip and the TIA sound generator"
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "6502", "cpu", "riot", "tia", "sound"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["prosystem_core"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
