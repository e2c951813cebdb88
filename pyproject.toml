[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rdfless"
version = "0.1.9"
description = "A colorful pretty printer for RDF (Turtle/TriG/N-Triples/N-Quads) with ANSI colors"
requires-python = ">=3.11"
keywords = ["rdf", "turtle", "trig", "ntriples", "nquads", "pretty-printer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup",
    "Topic :: Utilities",
]
dependencies = [
    "tomli-w>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
rdfless = "rdfless.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["rdfless"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
