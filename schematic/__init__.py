"""Validate slash-separated paths against a compact schema language.

Modules: parser (schema text to AST), constraints, modifiers and schema.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]