[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pcmkit"
version = "0.1.0"
description = "Fixed-point PCM quantization, dithering, resampling and WAV/CDDA output, with Xing/LAME tag parsing"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "audio",
    "pcm",
    "dither",
    "mu-law",
    "resample",
    "wav",
    "cdda",
    "xing",
    "lame",
    "replay-gain",
    "crc16",
]
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
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pcmkit"]

[tool.hatch.build.targets.sdist]
include = ["pcmkit", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
