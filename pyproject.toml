[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fallsave"
version = "2.1.0"
description = "Read and write the headers of Fallout 1, Fallout 2 and Fallout 3 save files"
requires-python = ">=3.10"
dependencies = []
keywords = ["fallout", "save", "savegame", "binary", "games"]
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
    "Topic :: Games/Entertainment :: Role-Playing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fallsave"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
