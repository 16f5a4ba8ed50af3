[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tabletop"
version = "0.1.0"
description = "A small aiohttp server for hosting Hanabi board game rooms, with the game engine to run them"
requires-python = ">=3.10"
keywords = ["hanabi", "board-game", "aiohttp", "websocket", "game-server"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: AsyncIO",
    "Framework :: aiohttp",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "aiohttp>=3.9",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "pytest-asyncio>=0.23",
]

[project.scripts]
tabletop = "tabletop.app:main"

[tool.hatch.build.targets.wheel]
packages = ["tabletop"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
