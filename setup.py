#!/usr/bin/env python3

from setuptools import find_packages, setup

version = {}
with open("./semver_range/_version.py") as f:
    exec(f.read(), version)

with open("./README.md") as f:
    long_description = f.read()

test_requires = [
    "pytest",
    "pytest-cov",
    "hypothesis>=6.0",
    "pretend",
    "coverage[toml]",
]

setup(
    name="semver-range",
    version=version["__version__"],
    license="Apache-2.0",
    description="Semantic versions and npm-style version ranges with interval algebra",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["test", "test.*"]),
    platforms="any",
    python_requires=">=3.9",
    install_requires=[
        "icontract>=2.6.0",
    ],
    extras_require={
        "test": test_requires,
        "dev": test_requires
        + [
            "flake8",
            "black",
            "isort",
            "mypy",
            "interrogate",
            "pdoc3",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
    ],
)
