"""Dynamic schema mapper - typed access and change detection for evolving JSON."""

from __future__ import annotations

from dynamic_schema_mapper.api import (
    compare_schemas,
    disable_schema_detection,
    enable_schema_detection,
    get_default_session,
    parse,
    parse_with_validation,
    reset_cache,
)
from dynamic_schema_mapper.cache import CacheMetadata, SchemaCacheManager
from dynamic_schema_mapper.config import CacheConfig
from dynamic_schema_mapper.diff import ChangeKind, SchemaChange, SchemaDiff
from dynamic_schema_mapper.exceptions import (
    ParseError,
    SchemaMapperError,
    ValidationError,
)
from dynamic_schema_mapper.parser import SchemaDescriptor, SchemaParser
from dynamic_schema_mapper.schema import DynamicSchema
from dynamic_schema_mapper.session import SchemaChangeListener, SchemaSession
from dynamic_schema_mapper.tree import ValueKind, ValueNode

__version__: str = "0.1.0"
__all__: list[str] = [
    "CacheConfig",
    "CacheMetadata",
    "ChangeKind",
    "DynamicSchema",
    "ParseError",
    "SchemaCacheManager",
    "SchemaChange",
    "SchemaChangeListener",
    "SchemaDescriptor",
    "SchemaDiff",
    "SchemaMapperError",
    "SchemaParser",
    "SchemaSession",
    "ValidationError",
    "ValueKind",
    "ValueNode",
    "compare_schemas",
    "disable_schema_detection",
    "enable_schema_detection",
    "get_default_session",
    "parse",
    "parse_with_validation",
    "reset_cache",
]
