[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "picturelab"
version = "0.1.0"
description = "Small raster image editor: flips, transpose, blur and tile histogram equalisation with an edit history and PNG export"
requires-python = ">=3.10"
dependencies = []
keywords = ["image", "grayscale", "rgb", "histogram", "equalization", "blur", "png"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Environment :: Console",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: Editors :: Raster-Based",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
picturelab = "picturelab.processing:main"

[tool.hatch.build.targets.wheel]
packages = ["picturelab"]

[tool.pytest.ini_options]
addopts = "-ra"
