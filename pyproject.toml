[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cabernet"
version = "0.1.0"
description = "A small reverse-mode automatic differentiation engine with tensors and an SGD optimizer"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["autograd", "tensor", "automatic-differentiation", "sgd", "numpy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cabernet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
