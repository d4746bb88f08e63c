[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sincresample"
version = "0.1.0"
description = "High-quality windowed-sinc sample-rate conversion for blocks of audio"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["audio", "resampling", "sinc", "sample-rate", "dsp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
]

[project.optional-dependencies]
test = [
    "pytest",
    "numpy",
]

[tool.hatch.build.targets.wheel]
packages = ["sincresample"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
