[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tmkms"
version = "0.1.0"
description = "Tendermint remote-signer messages in the Amino wire format, canonical sign bytes, and double-signing protection"
requires-python = ">=3.10"
dependencies = []
keywords = ["tendermint", "kms", "amino", "validator", "signing", "consensus"]
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
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tmkms"]

[tool.pytest.ini_options]
addopts = "-ra"
