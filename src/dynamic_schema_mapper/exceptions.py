"""Exception types raised by dynamic-schema-mapper.

Only two conditions are errors: JSON text that cannot be decoded
(``ParseError``) and a root value that violates a requested validation
constraint (``ValidationError``).  Everything else (missing keys, failed
coercions, unresolved paths, unavailable cached descriptors) degrades to a
default or an empty result instead of raising.
"""

from __future__ import annotations

__all__ = ["ParseError", "SchemaMapperError", "ValidationError"]


class SchemaMapperError(Exception):
    """Base class for all errors raised by this package."""


class ParseError(SchemaMapperError, ValueError):
    """Input text is not valid JSON."""


class ValidationError(SchemaMapperError, ValueError):
    """Root value violates an ``allow_null`` / ``require_object`` constraint."""
