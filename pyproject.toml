[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gexe"
version = "0.1.0"
description = "Script-friendly helpers: variable expansion, string utilities, HTTP requests, address checks and program info"
requires-python = ">=3.10"
dependencies = []
keywords = ["scripting", "variables", "expansion", "http", "printf"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gexe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
