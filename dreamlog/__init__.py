"""Dreamlog: voice dream journal with transcript analysis."""

__version__ = "0.1.0"
