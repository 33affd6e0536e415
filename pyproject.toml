[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zyranet"
version = "1.0.0"
description = "NumPy neural-network layers, an Adam optimiser, MFCC audio features and simple speech and text utilities"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "neural-network",
    "convolution",
    "max-pooling",
    "adam",
    "mfcc",
    "speech",
    "numpy",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
zyranet-preprocess-audio = "zyranet.preprocess:main"
zyranet-preprocess-text = "zyranet.text:main"

[tool.hatch.build.targets.wheel]
packages = ["zyranet"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
