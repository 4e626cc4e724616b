"""Map PostgreSQL catalog type names to Rust types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ..shared import sanitize_type_name
from .model import TypeExpr, TypeKind

# Type mappings from catalog type names to Rust types
PRIMITIVE_TYPES: Final[dict[str, str]] = {
    "bytea": "Vec<u8>",
    "text": "String",
    "varchar": "String",
    "character varying": "String",
    "bpchar": "String",
    "char": "i8",
    "character": "i8",
    "smallint": "i16",
    "int2": "i16",
    "smallserial": "i16",
    "serial2": "i16",
    "integer": "i32",
    "int": "i32",
    "int4": "i32",
    "serial": "i32",
    "serial4": "i32",
    "bigint": "i64",
    "int8": "i64",
    "bigserial": "i64",
    "serial8": "i64",
    "oid": "u32",
    "real": "f32",
    "float4": "f32",
    "double precision": "f64",
    "float8": "f64",
    "bool": "bool",
    "boolean": "bool",
}

NUMERIC_TYPES: Final[frozenset[str]] = frozenset({"numeric", "decimal"})
TIMESTAMP_TYPES: Final[frozenset[str]] = frozenset({"timestamp", "timestamptz"})

DECIMAL_TYPE: Final[str] = "Decimal"
DATETIME_TYPE: Final[str] = "DateTime<Utc>"
FALLBACK_TYPE: Final[str] = "String"


@dataclass(frozen=True, slots=True)
class TypeMapOptions:
    """Feature toggles that change how numeric and timestamp columns map."""

    use_rust_decimal: bool = False
    use_chrono: bool = False


def _primitive_base(native: str, options: TypeMapOptions) -> str | None:
    mapped = PRIMITIVE_TYPES.get(native)
    if mapped is not None:
        return mapped
    if native in NUMERIC_TYPES:
        return DECIMAL_TYPE if options.use_rust_decimal else FALLBACK_TYPE
    if native in TIMESTAMP_TYPES:
        return DATETIME_TYPE if options.use_chrono else FALLBACK_TYPE
    return None


def map_type(
    native: str,
    nullable: bool,
    options: TypeMapOptions | None = None,
) -> TypeExpr:
    """Resolve the Rust type for a catalog type name.

    Never fails: a name outside the fixed table is assumed to be a
    user-defined type (usually an enum generated alongside) and is
    referenced by its PascalCase name.
    """
    options = options or TypeMapOptions()
    base = _primitive_base(native, options)
    if base is not None:
        return TypeExpr(base=base, nullable=nullable, kind=TypeKind.PRIMITIVE, native=native)
    return TypeExpr(
        base=sanitize_type_name(native),
        nullable=nullable,
        kind=TypeKind.USER_DEFINED,
        native=native,
    )
