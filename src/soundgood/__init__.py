"""Soundgood music school instrument rentals."""

__version__ = "0.1.0"
