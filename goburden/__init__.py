# File: goburden/__init__.py
# Location: goburden/goburden/__init__.py

"""
goburden Package.

This package propagates case/control variant counts through an ontology
DAG (e.g. the Gene Ontology) and ranks terms by Fisher's exact test.
"""

from .version import __version__
