[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coursepick"
version = "0.6.0"
description = "Interactive course selection client for a university teaching-affairs web system"
requires-python = ">=3.10"
keywords = ["course selection", "cli", "http", "cas", "login"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: English",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
]
dependencies = [
    "requests",
    "beautifulsoup4",
    "cryptography",
    "termcolor",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
coursepick-auth = "coursepick.auth_cli:main"
coursepick-cookie = "coursepick.cookie_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["coursepick"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
