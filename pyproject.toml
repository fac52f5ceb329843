[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sharedkit"
version = "0.1.0"
description = "Shared building blocks: file storage, a small typed data frame, a file cache and rate-limited page fetching."
requires-python = ">=3.10"
dependencies = []
keywords = ["storage", "dataframe", "csv", "json", "cache", "scraping", "chartjs"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sharedkit"]

[tool.pytest.ini_options]
addopts = "-ra"
