import runpy
from unittest.mock import patch

import pytest

ENV_VARS = (
    "POSTGRES_CONNECTION_STRING",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_DATABASE",
    "POSTGRES_SCHEMA",
    "POSTGRES_TABLE",
    "POSTGRES_CRATE",
    "SINGULARIZE_TABLE_NAMES",
    "USE_CHRONO_CRATE",
    "USE_RUST_DECIMAL",
    "OUTPUT_FILE",
    "PGTYPEGEN_WORKERS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestModuleEntry:
    def test_run_module(self, people_conn, capsys):
        argv = ["pgtypegen", "-c", "postgresql://a:b@h:1/d", "-s", "public"]
        with patch("sys.argv", argv), patch(
            "pgtypegen.db_codegen.main.connect", return_value=people_conn
        ):
            with pytest.raises(SystemExit) as exc_info:
                runpy.run_module("pgtypegen", run_name="__main__")

        assert exc_info.value.code == 0
        assert "pub struct People {" in capsys.readouterr().out

    def test_run_module_missing_schema(self, capsys):
        argv = ["pgtypegen", "-c", "postgresql://a:b@h:1/d"]
        with patch("sys.argv", argv), patch("pgtypegen.db_codegen.main.connect") as mock_connect:
            with pytest.raises(SystemExit) as exc_info:
                runpy.run_module("pgtypegen", run_name="__main__")

        assert "schema" in str(exc_info.value.code)
        mock_connect.assert_not_called()
