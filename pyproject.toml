[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "frakt"
version = "0.1.0"
description = "Distributed fractal rendering: a TCP server hands out fragment tasks and workers compute and return pixel intensities."
requires-python = ">=3.10"
keywords = ["fractal", "mandelbrot", "julia", "newton-raphson", "burning-ship", "distributed"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
frakt-worker = "frakt.client:main"
frakt-server = "frakt.server:main"

[tool.hatch.build.targets.wheel]
packages = ["frakt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
