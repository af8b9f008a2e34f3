[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "multinic"
version = "1.2.6"
description = "Networking helpers for multi-NIC container networking: IP handling, HNS policies, API types and connectivity tools"
requires-python = ">=3.10"
dependencies = []
keywords = ["cni", "networking", "kubernetes", "multi-nic", "ipam", "hns"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
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

[project.scripts]
multinic-echo-server = "multinic.echo_server:main"
multinic-echo-client = "multinic.echo_client:main"

[tool.hatch.build.targets.wheel]
packages = ["multinic"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
