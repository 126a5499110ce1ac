[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fbview"
version = "0.1.0"
description = "Load, flip and scale uncompressed BMP images and show them on a Linux framebuffer"
requires-python = ">=3.10"
dependencies = []
keywords = ["bmp", "bitmap", "framebuffer", "fbdev", "image", "scaling", "lcd"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Multimedia :: Graphics :: Viewers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fbview = "fbview.cli:main"
fbview-numbers = "fbview.numbers:main"
fbview-search = "fbview.search:main"

[tool.hatch.build.targets.wheel]
packages = ["fbview"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
