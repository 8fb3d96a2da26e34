[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "k1curve"
version = "0.1.0"
description = "Pure-Python secp256k1 field, point and multiplication primitives with SHA-256, HMAC-SHA256 and RFC 6979 byte generation"
requires-python = ">=3.10"
dependencies = []
keywords = ["secp256k1", "elliptic curve", "sha256", "hmac", "rfc6979", "wnaf"]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["k1curve"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
