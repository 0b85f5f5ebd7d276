[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dobotlink"
version = "1.1.0"
description = "Dobot and DobotV3 serial protocol framing, checksums and hex-text command building"
requires-python = ">=3.10"
dependencies = []
keywords = ["dobot", "serial", "protocol", "crc", "firmware", "robot"]
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
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["dobotlink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
