"""Queryable catalog of AI models and providers."""

__version__ = "0.0.1"
