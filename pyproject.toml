[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "localpvkit"
version = "0.1.0"
description = "Builders, filters and pluggable API clients for Kubernetes containers, events, persistent volumes and claims"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "kubernetes",
    "persistent-volume",
    "pvc",
    "local-pv",
    "storage",
    "builder",
    "quantity",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
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
packages = ["localpvkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
