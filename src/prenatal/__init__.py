"""Pregnancy progress and daily supplement schedule tracking."""

__version__ = "0.1.0"
