[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pdfcompose"
version = "0.1.0"
description = "Building blocks for composing PDF content: units, content stream operators, image holders and TrueType font parsing"
requires-python = ">=3.10"
dependencies = []
keywords = ["pdf", "truetype", "ttf", "fonts", "content-stream", "printing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Printing",
    "Topic :: Text Processing :: Fonts",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pdfcompose-fontmaker = "pdfcompose.fontmaker:main"

[tool.hatch.build.targets.wheel]
packages = ["pdfcompose"]

[tool.pytest.ini_options]
addopts = "-ra"
