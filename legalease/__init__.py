"""LegalEase AI backend: document upload and delegated simplification."""

__version__ = "1.0.0"
