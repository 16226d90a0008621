from pathlib import Path

from src.checkin_penalty.checkin_penalty.database.bootstrap import (
    _strip_create_db_and_use,
    _strip_line_comments,
    iter_sql_statements,
)

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");\nSELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_schema_file_yields_only_table_statements():
    sql = _strip_line_comments(_strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8")))

    statements = list(iter_sql_statements(sql))

    assert len(statements) == 5
    assert all(stmt.startswith("CREATE TABLE IF NOT EXISTS") for stmt in statements)
    joined = " ".join(statements)
    for table in ("events", "users", "photographers_data", "attendance_records", "ledger_deductions"):
        assert f"EXISTS {table} (" in joined
