[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coopkernel"
version = "0.1.0"
description = "A small cooperative-threading teaching kernel: threads, a FIFO scheduler, semaphores, locks, condition variables and synchronized lists."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "kernel",
    "threads",
    "scheduler",
    "semaphore",
    "condition-variable",
    "operating-systems",
    "education",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
coopkernel = "coopkernel.system:main"

[tool.hatch.build.targets.wheel]
packages = ["coopkernel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
