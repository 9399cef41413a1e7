"""Statform: a number-entry form with live and stored statistics."""

__version__ = "0.1.0"
