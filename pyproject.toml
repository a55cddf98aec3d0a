[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fastqc_lite"
version = "1.0.0"
description = "Building blocks for quality control, trimming and statistics of FASTQ sequencing reads"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "fastq",
    "sequencing",
    "bioinformatics",
    "quality-control",
    "read-merging",
    "ngs",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fastqc_lite"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
