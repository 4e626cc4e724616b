"""Schema model assembled from the catalog and consumed by the emitter."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Iterator


class TypeKind(enum.Enum):
    """Whether a type expression came from the fixed table or the fallback."""

    PRIMITIVE = "primitive"
    USER_DEFINED = "user_defined"


@dataclass(frozen=True, slots=True)
class TypeExpr:
    """Resolved Rust type of a column, nullability included."""

    base: str
    nullable: bool
    kind: TypeKind
    native: str

    @property
    def rust(self) -> str:
        return f"Option<{self.base}>" if self.nullable else self.base

    @property
    def is_user_defined(self) -> bool:
        return self.kind is TypeKind.USER_DEFINED

    def __str__(self) -> str:
        return self.rust


@dataclass(frozen=True, slots=True)
class ColumnDef:
    """A table column with its catalog name and generated field."""

    name: str
    field_name: str
    type: TypeExpr


@dataclass(frozen=True, slots=True)
class TableDef:
    """A base table and its columns in ordinal order."""

    name: str
    type_name: str
    columns: tuple[ColumnDef, ...] = ()


@dataclass(frozen=True, slots=True)
class EnumVariant:
    label: str
    name: str


@dataclass(frozen=True, slots=True)
class EnumDef:
    """A database enum type and its labels in sort order."""

    name: str
    type_name: str
    variants: tuple[EnumVariant, ...] = ()

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(variant.label for variant in self.variants)


@dataclass(frozen=True)
class SchemaModel:
    """Everything generated for one schema.

    ``tables`` and ``enums`` are keyed by catalog name and iterate in
    alphabetical key order, whatever order they were collected in.
    """

    tables: dict[str, TableDef] = field(default_factory=dict)
    enums: dict[str, EnumDef] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        tables: Iterable[TableDef],
        enums: Iterable[EnumDef] = (),
    ) -> SchemaModel:
        return cls(
            tables={table.name: table for table in sorted(tables, key=lambda t: t.name)},
            enums={item.name: item for item in sorted(enums, key=lambda e: e.name)},
        )

    def iter_columns(self) -> Iterator[tuple[TableDef, ColumnDef]]:
        for table in self.tables.values():
            for column in table.columns:
                yield table, column

    def unresolved_types(self) -> list[tuple[TableDef, ColumnDef]]:
        """Columns whose fallback type does not name a generated enum."""
        enum_types = {item.type_name for item in self.enums.values()}
        return [
            (table, column)
            for table, column in self.iter_columns()
            if column.type.is_user_defined and column.type.base not in enum_types
        ]
