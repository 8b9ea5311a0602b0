"""Mangaluru Mitra: a conversational city guide."""

__version__ = "0.1.0"
