[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spongetcp"
version = "0.1.0"
description = "Building blocks of a user-space TCP: byte streams, stream reassembly, a TCP receiver, segment parsing and POSIX socket helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "networking", "byte-stream", "reassembly", "sequence-numbers", "checksum", "sockets"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["spongetcp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
