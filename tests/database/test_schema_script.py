from pathlib import Path

from src.shiftdesk.shiftdesk.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from src.shiftdesk.shiftdesk.main import SCHEMA_PATH


def test_split_ignores_semicolons_in_strings_and_comments():
    sql = """
    -- setup; not a statement
    CREATE TABLE a (x VARCHAR(10) DEFAULT 'a;b');
    INSERT INTO a VALUES ('it\\'s; fine');
    SELECT 1
    """

    stmts = list(iter_sql_statements(sql))

    assert len(stmts) == 3
    assert stmts[0].startswith("CREATE TABLE a")
    assert "'a;b'" in stmts[0]
    assert stmts[2] == "SELECT 1"


def test_create_database_and_use_are_stripped():
    sql = "CREATE DATABASE foo;\nUSE foo;\nCREATE TABLE t (id INT);\n"
    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]


def test_bundled_schema_defines_core_tables():
    text = Path(SCHEMA_PATH).read_text(encoding="utf-8")
    stmts = list(iter_sql_statements(_strip_create_db_and_use(text)))

    joined = "\n".join(stmts)
    for table in ("shift_attendance", "attendance_settings", "shift_configurations", "task_columns", "tasks"):
        assert f"CREATE TABLE IF NOT EXISTS {table}" in joined or f"CREATE TABLE IF NOT EXISTS `{table}`" in joined
