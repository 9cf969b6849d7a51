[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meetsched"
version = "0.1.0"
description = "In-memory meeting scheduler with availability tracking and slot suggestions over a JSON HTTP API"
requires-python = ">=3.11"
keywords = ["meeting", "scheduler", "availability", "calendar", "flask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
meetsched = "meetsched.server:main"

[tool.hatch.build.targets.wheel]
packages = ["meetsched"]

[tool.pytest.ini_options]
addopts = "-ra"
