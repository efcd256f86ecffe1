"""Cached HTML/JSON index of an object-storage bucket."""

__version__ = "0.1.0"
