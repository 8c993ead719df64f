[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sib"
version = "0.1.0"
description = "Terminal note finder that ranks Markdown notes by tags, frontmatter metadata and usage"
requires-python = ">=3.11"
keywords = ["notes", "markdown", "frontmatter", "curses", "search", "ranking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Indexing",
]
dependencies = [
    "pyyaml",
    "platformdirs",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sib = "sib.app:main"

[tool.hatch.build.targets.wheel]
packages = ["sib"]

[tool.pytest.ini_options]
addopts = "-ra"
