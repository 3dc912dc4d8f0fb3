"""
Tests for migrate.py - Schema migration runner.
"""
from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import OperationalError

import migrate
from migrate import (
    MigrationError,
    SCHEMA_FILE,
    normalize_database_url,
    run_migration
)


@pytest.fixture
def sqlite_url(temp_dir) -> str:
    return f"sqlite:///{temp_dir / 'test.db'}"


def test_schema_file_ships():
    """Test schema.sql is present next to the script."""
    assert SCHEMA_FILE.exists()
    assert "CREATE TABLE" in SCHEMA_FILE.read_text()


def test_normalize_database_url():
    """Test the legacy postgres:// scheme is rewritten."""
    assert normalize_database_url("postgres://u:p@h/db") == "postgresql://u:p@h/db"
    assert normalize_database_url("postgresql://u:p@h/db") == "postgresql://u:p@h/db"
    assert normalize_database_url("sqlite:///x.db") == "sqlite:///x.db"


def test_run_migration_creates_table(temp_dir, sqlite_url):
    """Test executing a schema file against SQLite."""
    schema = temp_dir / "schema.sql"
    schema.write_text("CREATE TABLE videos (id INTEGER PRIMARY KEY, title TEXT NOT NULL);")

    run_migration(sqlite_url, schema)

    engine = create_engine(sqlite_url)
    try:
        assert "videos" in inspect(engine).get_table_names()
    finally:
        engine.dispose()


def test_run_migration_sql_error(temp_dir, sqlite_url):
    """Test invalid SQL raises MigrationError."""
    schema = temp_dir / "schema.sql"
    schema.write_text("CREATE TABEL oops (")

    with pytest.raises(MigrationError):
        run_migration(sqlite_url, schema)


def test_run_migration_missing_schema(temp_dir, sqlite_url):
    """Test an unreadable schema file raises MigrationError."""
    with pytest.raises(MigrationError, match="Cannot read"):
        run_migration(sqlite_url, temp_dir / "missing.sql")


def test_run_migration_disposes_engine_on_failure(temp_dir, monkeypatch):
    """Test the connection pool is released even when the SQL fails."""
    class FailingConnection:
        def exec_driver_sql(self, sql):
            raise OperationalError(sql, None, Exception("boom"))

    class FakeEngine:
        disposed = False

        @contextmanager
        def begin(self):
            yield FailingConnection()

        def dispose(self):
            FakeEngine.disposed = True

    monkeypatch.setattr(migrate, "make_engine", lambda url: FakeEngine())
    schema = temp_dir / "schema.sql"
    schema.write_text("SELECT 1;")

    with pytest.raises(MigrationError, match="boom"):
        run_migration("postgresql://u:p@localhost/db", schema)

    assert FakeEngine.disposed


def test_run_migration_sends_whole_file_in_one_call(temp_dir, monkeypatch):
    """Test a multi-statement schema goes to the driver as a single batch."""
    executed = []

    class RecordingConnection:
        def exec_driver_sql(self, sql):
            executed.append(sql)

    class FakeEngine:
        @contextmanager
        def begin(self):
            yield RecordingConnection()

        def dispose(self):
            pass

    monkeypatch.setattr(migrate, "make_engine", lambda url: FakeEngine())
    schema = temp_dir / "schema.sql"
    schema.write_text(
        "CREATE TABLE videos (id TEXT PRIMARY KEY, title TEXT NOT NULL);\n"
        "CREATE TABLE reports (video_id TEXT REFERENCES videos(id), body TEXT);\n"
        "CREATE INDEX idx_reports_video ON reports(video_id);\n"
    )

    run_migration("postgresql://u:p@localhost/db", schema)

    assert executed == [schema.read_text()]


def test_run_migration_sends_shipped_schema_in_one_call(monkeypatch):
    """Test the bundled schema.sql is executed verbatim in one call."""
    executed = []

    class RecordingConnection:
        def exec_driver_sql(self, sql):
            executed.append(sql)

    class FakeEngine:
        @contextmanager
        def begin(self):
            yield RecordingConnection()

        def dispose(self):
            pass

    monkeypatch.setattr(migrate, "make_engine", lambda url: FakeEngine())

    run_migration("postgresql://u:p@localhost/db")

    assert executed == [SCHEMA_FILE.read_text(encoding="utf-8")]


def test_main_without_database_url(monkeypatch, capsys):
    """Test a missing DATABASE_URL exits non-zero without connecting."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setattr(migrate, "load_dotenv", lambda *args, **kwargs: False)

    def fail_make_engine(url):
        raise AssertionError("should not connect")

    monkeypatch.setattr(migrate, "make_engine", fail_make_engine)

    with pytest.raises(SystemExit) as exc_info:
        migrate.main()

    assert exc_info.value.code == 1
    out = capsys.readouterr().out
    assert "DATABASE_URL environment variable is not set" in out
    assert "Usage: DATABASE_URL=..." in out


def test_main_migration_failure_exits(monkeypatch, sqlite_url, temp_dir, capsys):
    """Test a failing migration exits non-zero."""
    schema = temp_dir / "bad.sql"
    schema.write_text("GARBAGE")
    monkeypatch.setenv("DATABASE_URL", sqlite_url)
    monkeypatch.setattr(migrate, "load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setattr(migrate, "SCHEMA_FILE", schema)

    with pytest.raises(SystemExit) as exc_info:
        migrate.main()

    assert exc_info.value.code == 1
    assert "Migration failed" in capsys.readouterr().out


def test_main_success(monkeypatch, sqlite_url, temp_dir, capsys):
    """Test a successful run prints the completion line."""
    schema = temp_dir / "ok.sql"
    schema.write_text("CREATE TABLE t (id INTEGER PRIMARY KEY);")
    monkeypatch.setenv("DATABASE_URL", sqlite_url)
    monkeypatch.setattr(migrate, "load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setattr(migrate, "SCHEMA_FILE", schema)

    migrate.main()

    assert "Migration completed successfully!" in capsys.readouterr().out
