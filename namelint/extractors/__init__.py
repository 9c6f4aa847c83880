"""Identifier extractors for specific source languages."""

from .python_ast import extract_identifiers, extract_from_source

__all__ = ["extract_identifiers", "extract_from_source"]
