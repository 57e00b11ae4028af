"""Inkpost: blog API with local and Google sign-in."""

__version__ = "0.1.0"
