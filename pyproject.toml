[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mqtt5core"
version = "0.1.0"
description = "Building blocks for MQTT 5 clients: protocol types, UTF-8 validation, property encoding, broker lists and reconnect backoff."
requires-python = ">=3.10"
dependencies = []
keywords = ["mqtt", "mqtt5", "iot", "messaging", "protocol", "asyncio"]
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
    "Framework :: AsyncIO",
    "Typing :: Typed",
    "Topic :: Communications",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["mqtt5core"]

[tool.hatch.build.targets.sdist]
include = ["mqtt5core", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
