[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubscape"
version = "0.1.0"
description = "A grid-based raycasting explorer that loads .cub scene files and XPM wall textures"
requires-python = ">=3.10"
keywords = ["raycasting", "game", "xpm", "maze", "pygame", "first-person"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: First Person Shooters",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cubscape = "cubscape.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cubscape"]

[tool.pytest.ini_options]
addopts = "-ra"
