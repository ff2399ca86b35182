"""Desktop user interface for the CNPJ lookup tool."""

from .app import LookupApp, main  # noqa: F401

__all__ = ["LookupApp", "main"]
