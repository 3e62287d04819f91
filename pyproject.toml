[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "isekaishop"
version = "0.1.0"
description = "A small HTTP item-shop service with paginated, filterable item listings backed by PostgreSQL"
requires-python = ">=3.10"
keywords = ["shop", "items", "http", "rest", "api", "flask", "sqlalchemy", "pagination"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "pyyaml>=6.0",
    "sqlalchemy>=2.0",
    "flask>=2.3",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[project.scripts]
isekaishop-server = "isekaishop.server:main"
isekaishop-migrate = "isekaishop.migration:migrate_main"
isekaishop-seed = "isekaishop.migration:seed_main"

[tool.hatch.build.targets.wheel]
packages = ["isekaishop"]

[tool.hatch.build.targets.sdist]
include = ["isekaishop", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
