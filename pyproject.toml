[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pintsized"
version = "0.1.0"
description = "Headless core pieces of a small game engine: bit flags, bounded strings, ECS, task graph, camera maths and a model of GPU device, buffer and pipeline setup."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "game-engine",
    "ecs",
    "task-graph",
    "camera",
    "plugin-registry",
    "render-pipeline",
]
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
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pintsized"]

[tool.hatch.build.targets.sdist]
include = [
    "pintsized",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
