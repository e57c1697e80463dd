[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "abledecoder"
version = "1.0.0"
description = "Decrypt 'able'-compressed AIFC sound files into plain AIFC"
requires-python = ">=3.10"
keywords = ["aiff", "aifc", "audio", "decrypt", "blowfish", "sound"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
]
dependencies = [
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
abledecoder = "abledecoder.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["abledecoder"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
