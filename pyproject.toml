[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fdoonboard"
version = "0.1.0"
description = "Device onboarding helpers: raw CBOR array parsing, retry delays, the onboarding marker file and key generation"
requires-python = ">=3.10"
keywords = ["fdo", "onboarding", "cbor", "device", "provisioning"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]
dependencies = [
    "cbor2",
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["fdoonboard"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
