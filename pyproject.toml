[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bootil"
version = "0.1.0"
description = "Everyday building blocks: name/value trees with JSON, console colours and line editing, debug output, files, folder change monitoring, threads, TCP sockets, message routing, HTTP queries and JPEG/PNG images."
requires-python = ">=3.10"
keywords = ["utility", "tree", "json", "console", "sockets", "router", "threads", "files", "http", "image"]
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
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["bootil"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
