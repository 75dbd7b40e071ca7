[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gitworkon"
version = "0.1.0"
description = "Clone Git projects from predefined sources and safely remove them when done"
requires-python = ">=3.10"
keywords = ["git", "workspace", "clone", "projects", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
    "Topic :: Utilities",
]
dependencies = [
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gw = "gitworkon.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gitworkon"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
