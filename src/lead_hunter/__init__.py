"""Permit visit recommendations and route planning for Lead Hunter."""

__version__ = "0.1.0"
