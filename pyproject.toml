[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "moonshooter"
version = "0.1.0"
description = "A headless, frame-stepped side-scrolling shoot 'em up with enemy waves, object pools and parallax scrolling"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "shooter", "shmup", "arcade", "simulation", "object-pool"]
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
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
moonshooter = "moonshooter.app:main"

[tool.hatch.build.targets.wheel]
packages = ["moonshooter"]

[tool.pytest.ini_options]
addopts = "-ra"
