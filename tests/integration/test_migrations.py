import sqlite3

import pytest

from src.adapters.sqlite.migrator import SQLiteMigrator


@pytest.fixture
def temp_db_path(tmp_path):
    return str(tmp_path / "test_db.sqlite")


@pytest.fixture
def migrations_dir():
    # Real migrations, so the SQL itself is exercised
    return "migrations"


def test_migrator_creates_migration_table(temp_db_path, migrations_dir):
    migrator = SQLiteMigrator(temp_db_path, migrations_dir)
    migrator.run_migrations()

    conn = sqlite3.connect(temp_db_path)
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='_migrations'"
    )
    assert cursor.fetchone() is not None
    conn.close()


def test_migrator_applies_documents_schema(temp_db_path, migrations_dir):
    migrator = SQLiteMigrator(temp_db_path, migrations_dir)
    assert migrator.run_migrations() == 2

    conn = sqlite3.connect(temp_db_path)
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='documents'"
    )
    assert cursor.fetchone() is not None

    indexes = {
        row[0]
        for row in conn.execute("SELECT name FROM sqlite_master WHERE type='index'")
    }
    assert {"idx_portfolios_owner", "idx_portfolios_slug"} <= indexes
    conn.close()


def test_migrator_is_idempotent(temp_db_path, migrations_dir):
    migrator = SQLiteMigrator(temp_db_path, migrations_dir)

    migrator.run_migrations()
    assert migrator.run_migrations() == 0
    assert migrator.pending() == []

    conn = sqlite3.connect(temp_db_path)
    cursor = conn.execute(
        "SELECT count(*) FROM _migrations WHERE filename='0001_documents.sql'"
    )
    assert cursor.fetchone()[0] == 1
    conn.close()


def test_documents_primary_key_rejects_duplicates(temp_db_path, migrations_dir):
    SQLiteMigrator(temp_db_path, migrations_dir).run_migrations()
    conn = sqlite3.connect(temp_db_path)
    conn.execute("INSERT INTO documents (collection, id, body) VALUES ('c', 'a', '{}')")
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute("INSERT INTO documents (collection, id, body) VALUES ('c', 'a', '{}')")
    conn.close()


def test_failed_migration_is_reported(tmp_path, temp_db_path):
    bad_dir = tmp_path / "bad_migrations"
    bad_dir.mkdir()
    (bad_dir / "0001_broken.sql").write_text("-- Up\nCREATE TABLE (;\n")

    with pytest.raises(RuntimeError, match="0001_broken.sql"):
        SQLiteMigrator(temp_db_path, str(bad_dir)).run_migrations()
