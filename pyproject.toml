[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "agentobjects"
version = "0.1.0"
description = "Builders for the Kubernetes object manifests that deploy a monitoring agent and its cluster sensor"
requires-python = ">=3.10"
dependencies = []
keywords = ["kubernetes", "operator", "manifests", "rbac", "agent"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["agentobjects"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
