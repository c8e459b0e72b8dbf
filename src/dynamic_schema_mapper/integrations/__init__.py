"""Integrations subpackage for dynamic-schema-mapper.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via pytest11 entry point), providing the
  ``schema_session`` and ``assert_no_breaking_changes`` fixtures
"""

from __future__ import annotations

__all__: list[str] = []
