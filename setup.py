# File: goburden/setup.py
# Location: goburden/setup.py
"""
Setup script for goburden.

This file configures how the package is built, installed, and what
dependencies are required.
"""

import os
from setuptools import setup, find_packages

# Load version from version.py without importing the module
version = {}
with open(os.path.join("goburden", "version.py")) as f:
    exec(f.read(), version)

# Read the README for the long description
this_dir = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_dir, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="goburden",
    version=version["__version__"],
    description="Ontology-wide case/control variant burden enrichment with Fisher's exact test.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "goatools",
        "pandas",
        "scipy",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={"console_scripts": ["goburden=goburden.cli:main"]},
    include_package_data=True,
    package_data={"goburden": ["config.json"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
    ],
)
