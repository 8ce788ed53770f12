[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "procwatch"
version = "0.1.0"
description = "Building blocks for watching process CPU and memory use: /proc sampling, rolling statistics, anomaly and trend detection, and alert dispatch."
requires-python = ">=3.10"
dependencies = []
keywords = ["monitoring", "process", "alerts", "cpu", "memory", "procfs"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["procwatch"]

[tool.pytest.ini_options]
addopts = "-ra"
