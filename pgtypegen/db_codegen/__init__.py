"""DB Code Generator - Generates Rust types from a live PostgreSQL schema."""

from .catalog import CatalogColumn, CatalogReader, connect
from .emitter import EmitOptions, RustEmitter, write_output
from .main import build_schema_model, generate
from .model import (
    ColumnDef,
    EnumDef,
    EnumVariant,
    SchemaModel,
    TableDef,
    TypeExpr,
    TypeKind,
)
from .type_mapper import PRIMITIVE_TYPES, TypeMapOptions, map_type

__all__ = [
    "CatalogColumn",
    "CatalogReader",
    "connect",
    "EmitOptions",
    "RustEmitter",
    "write_output",
    "build_schema_model",
    "generate",
    "ColumnDef",
    "EnumDef",
    "EnumVariant",
    "SchemaModel",
    "TableDef",
    "TypeExpr",
    "TypeKind",
    "PRIMITIVE_TYPES",
    "TypeMapOptions",
    "map_type",
]
