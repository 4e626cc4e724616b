"""
DB Code Generator - Generates Rust types from a live PostgreSQL schema.

This module drives the generation run:
- Table discovery (or a single explicitly named table)
- Parallel per-table column queries over one shared connection
- Enum discovery
- Rendering through the Rust emitter
"""

from __future__ import annotations

import argparse
import sys
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterable, Mapping, Sequence

import psycopg

from ..shared import (
    ConfigError,
    Diagnostics,
    GeneratorConfig,
    GeneratorError,
    add_config_arguments,
    sanitize_field_name,
    sanitize_type_name,
    singularize,
)
from .catalog import CatalogReader, connect
from .emitter import EmitOptions, RustEmitter, write_output
from .model import ColumnDef, EnumDef, EnumVariant, SchemaModel, TableDef
from .type_mapper import TypeMapOptions, map_type

NO_TABLES_MESSAGE = "No tables found in specified schema"


def _build_table(
    reader: CatalogReader,
    table_name: str,
    config: GeneratorConfig,
    type_options: TypeMapOptions,
) -> TableDef:
    """Fetch one table's columns and resolve their names and types.

    Runs on a worker thread; touches nothing but the shared reader.
    """
    columns = tuple(
        ColumnDef(
            name=column.name,
            field_name=sanitize_field_name(column.name),
            type=map_type(column.native_type, column.nullable, type_options),
        )
        for column in reader.list_columns(table_name)
    )
    struct_source = singularize(table_name) if config.singularize else table_name
    return TableDef(
        name=table_name,
        type_name=sanitize_type_name(struct_source),
        columns=columns,
    )


def _build_enum(name: str, labels: Sequence[str]) -> EnumDef:
    return EnumDef(
        name=name,
        type_name=sanitize_type_name(name),
        variants=tuple(
            EnumVariant(label=label, name=sanitize_type_name(label)) for label in labels
        ),
    )


def _collisions(pairs: Iterable[tuple[str, str]]) -> dict[str, list[str]]:
    """Group catalog names by generated identifier, keeping only shared ones."""
    groups: defaultdict[str, list[str]] = defaultdict(list)
    for source, generated in pairs:
        groups[generated].append(source)
    return {generated: sources for generated, sources in groups.items() if len(sources) > 1}


def _warn_name_collisions(model: SchemaModel, diagnostics: Diagnostics) -> None:
    """Warn about distinct catalog names that render to the same Rust identifier."""
    type_names = [(table.name, table.type_name) for table in model.tables.values()]
    type_names += [(item.name, item.type_name) for item in model.enums.values()]
    for generated, sources in _collisions(type_names).items():
        diagnostics.warning(
            "Types %s all map to Rust type '%s'",
            ", ".join(f"'{source}'" for source in sources),
            generated,
        )

    for table in model.tables.values():
        fields = _collisions((column.name, column.field_name) for column in table.columns)
        for generated, sources in fields.items():
            diagnostics.warning(
                "Columns %s of table '%s' all map to field '%s'",
                ", ".join(f"'{source}'" for source in sources),
                table.name,
                generated,
            )

    for item in model.enums.values():
        variants = _collisions((variant.label, variant.name) for variant in item.variants)
        for generated, sources in variants.items():
            diagnostics.warning(
                "Labels %s of enum '%s' all map to variant '%s'",
                ", ".join(f"'{source}'" for source in sources),
                item.name,
                generated,
            )


def build_schema_model(
    reader: CatalogReader,
    config: GeneratorConfig,
    diagnostics: Diagnostics,
) -> SchemaModel | None:
    """Collect tables and enums of the configured schema.

    Returns:
        The assembled model, or None when the schema has no tables.
    """
    if config.table:
        # Trust the caller that the table exists
        table_names = [config.table]
    else:
        table_names = reader.list_tables()
    if not table_names:
        return None
    diagnostics.debug("Tables: %s", table_names)

    type_options = TypeMapOptions(
        use_rust_decimal=config.use_rust_decimal,
        use_chrono=config.use_chrono,
    )

    tables: list[TableDef] = []
    if len(table_names) > 1 and config.max_workers > 1:
        workers = min(config.max_workers, len(table_names))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(_build_table, reader, name, config, type_options)
                for name in table_names
            ]
            for future in as_completed(futures):
                tables.append(future.result())
    else:
        for name in table_names:
            tables.append(_build_table(reader, name, config, type_options))

    enums = [_build_enum(name, labels) for name, labels in reader.list_enums().items()]
    diagnostics.debug("Enums: %s", [item.name for item in enums])

    model = SchemaModel.build(tables, enums)
    for table, column in model.unresolved_types():
        diagnostics.warning(
            "Column '%s.%s' has type '%s' which is not a known primitive or "
            "an enum of schema '%s'; referencing it as '%s'",
            table.name,
            column.name,
            column.type.native,
            config.schema,
            column.type.base,
        )
    _warn_name_collisions(model, diagnostics)
    return model


def generate(
    conn: psycopg.Connection,
    config: GeneratorConfig,
    diagnostics: Diagnostics,
    emitter: RustEmitter | None = None,
) -> str | None:
    """Generate Rust source for the configured schema.

    Args:
        conn: Open psycopg connection.
        config: Validated run configuration.
        diagnostics: Process diagnostic context.
        emitter: Emitter to reuse; a fresh one is created when omitted.

    Returns:
        The generated source, or None when no tables were found.
    """
    reader = CatalogReader(conn, config.schema, diagnostics.child("catalog"))
    model = build_schema_model(reader, config, diagnostics)
    if model is None:
        return None

    emitter = emitter or RustEmitter()
    return emitter.render(
        model,
        EmitOptions(
            postgres_crate=config.postgres_crate,
            use_chrono=config.use_chrono,
            use_rust_decimal=config.use_rust_decimal,
        ),
    )


def build_parser(env: Mapping[str, str] | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pgtypegen",
        description="Generate Rust types from a PostgreSQL schema",
    )
    add_config_arguments(parser, env)
    return parser


def main(argv: list[str] | None = None, env: Mapping[str, str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser(env).parse_args(argv)
    diagnostics = Diagnostics.from_env(env)

    try:
        config = GeneratorConfig.from_args(args)
        diagnostics.debug("Using schema: %s", config.schema)
        diagnostics.debug("Using Postgres crate: %s", config.postgres_crate)
        diagnostics.debug("Singularize table names: %s", config.singularize)
        diagnostics.debug("Use chrono crate: %s", config.use_chrono)
        diagnostics.debug("Use rust-decimal: %s", config.use_rust_decimal)
        diagnostics.debug("Output file: \"%s\"", config.output_file or "")

        with connect(config.conninfo, diagnostics) as conn:
            output = generate(conn, config, diagnostics)

        if output is None:
            print(NO_TABLES_MESSAGE, file=sys.stderr)
            return 0

        write_output(output, config.output_file)
        if config.output_file is not None:
            diagnostics.info("Wrote %s", config.output_file)
    except ConfigError as e:
        raise SystemExit(f"Configuration error: {e}") from e
    except GeneratorError as e:
        raise SystemExit(f"Error: {e}") from e
    except OSError as e:
        raise SystemExit(f"Error: cannot write output: {e}") from e

    return 0


if __name__ == "__main__":
    sys.exit(main())
