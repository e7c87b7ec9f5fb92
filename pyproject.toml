[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bookingsys"
version = "0.1.0"
description = "Resource booking service: users, bookable resources and bookings over a small JSON HTTP API"
requires-python = ">=3.11"
keywords = ["booking", "reservation", "scheduling", "wsgi", "rest", "sqlalchemy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Environment :: Web Environment",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: Office/Business :: Scheduling",
]
dependencies = [
    "sqlalchemy>=2.0",
    "werkzeug>=3.0",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[project.scripts]
bookingsys-server = "bookingsys.app:main"
bookingsys-racecheck = "bookingsys.racecheck:main"

[tool.hatch.build.targets.wheel]
packages = ["bookingsys"]

[tool.hatch.build.targets.sdist]
include = ["bookingsys", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
ignore_missing_imports = true
