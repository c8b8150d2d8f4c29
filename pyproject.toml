[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cxxreduce"
version = "0.1.0"
description = "Minimize C++ header test cases for binding-generator bugs with creduce"
requires-python = ">=3.10"
dependencies = []
keywords = ["creduce", "c++", "test-case reduction", "bindings", "debugging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cxxreduce = "cxxreduce.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cxxreduce"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
