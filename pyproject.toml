[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "openflow"
version = "0.1.0"
description = "OpenFlow 1.3 message framing, table messages and properties, runners and a response recorder"
requires-python = ">=3.10"
dependencies = []
keywords = ["openflow", "sdn", "networking", "protocol", "switch"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["openflow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
