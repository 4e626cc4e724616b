"""Render a schema model into a single Rust source unit."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Final, TextIO

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .model import SchemaModel

# Template configuration
TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"
SCHEMA_TEMPLATE: Final[str] = "schema.rs.j2"


@dataclass(frozen=True, slots=True)
class EmitOptions:
    """Settings that change the header of the generated file."""

    postgres_crate: str = "postgres"
    use_chrono: bool = False
    use_rust_decimal: bool = False


@lru_cache(maxsize=256)
def rust_str(value: str) -> str:
    """Quote a string for Rust literal embedding."""
    return json.dumps(value, ensure_ascii=False)


class RustEmitter:
    """Jinja environment holding the pre-compiled schema template."""

    def __init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
            autoescape=False,
        )
        self.template_env.filters["rust_str"] = rust_str
        self._template = self.template_env.get_template(SCHEMA_TEMPLATE)

    def render(self, model: SchemaModel, options: EmitOptions | None = None) -> str:
        """Render header, enums, then tables, each group in alphabetical order."""
        options = options or EmitOptions()
        return self._template.render(
            model=model,
            postgres_crate=options.postgres_crate,
            use_chrono=options.use_chrono,
            use_rust_decimal=options.use_rust_decimal,
        )


def write_output(text: str, output_file: Path | None = None, stdout: TextIO | None = None) -> None:
    """Write generated code to ``output_file``, or to standard output when absent."""
    if output_file is None:
        (stdout or sys.stdout).write(text)
        return
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(text, encoding="utf-8")
