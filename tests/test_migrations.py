import os

import pytest
from sqlalchemy import create_engine, inspect, select, text
from sqlalchemy.exc import OperationalError

from jobsolution.db.migration_db import migration_history, run_migrations, split_statements


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'migrations.db'}")
    yield engine
    engine.dispose()


@pytest.fixture
def migrations_dir(tmp_path):
    path = tmp_path / "migrations"
    path.mkdir()
    return path


def test_split_statements_respects_quotes_and_comments():
    sql = """
    -- schema; with a semicolon in a comment
    CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT);
    INSERT INTO notes (body) VALUES ('a;b'), ('it''s');  -- trailing comment
    INSERT INTO notes (body) VALUES ('tail')
    """
    assert split_statements(sql) == [
        "CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT)",
        "INSERT INTO notes (body) VALUES ('a;b'), ('it''s')",
        "INSERT INTO notes (body) VALUES ('tail')",
    ]
    assert split_statements("  ;\n-- only a comment\n;") == []


def test_split_statements_keeps_function_bodies_whole():
    sql = """
    /* trigger helper; shared by every table */
    CREATE FUNCTION touch_updated_at() RETURNS trigger AS $$
    BEGIN
        NEW.updated_at = now();
        RETURN NEW;
    END;
    $$ LANGUAGE plpgsql;
    DO $body$ BEGIN PERFORM 1; END $body$;
    SELECT 1/* inline; comment */;
    PREPARE find_user AS SELECT * FROM users WHERE id = $1;
    """
    statements = split_statements(sql)
    assert len(statements) == 4
    assert statements[0].startswith("CREATE FUNCTION touch_updated_at()")
    assert "RETURN NEW;" in statements[0]
    assert statements[0].endswith("$$ LANGUAGE plpgsql")
    assert statements[1] == "DO $body$ BEGIN PERFORM 1; END $body$"
    assert statements[2] == "SELECT 1"
    assert statements[3] == "PREPARE find_user AS SELECT * FROM users WHERE id = $1"


def test_bundled_schema_splits_into_statements():
    path = os.path.join(os.path.dirname(__file__), "..", "jobsolution", "migrations", "0001_init_schema.sql")
    with open(path, encoding="utf-8") as f:
        statements = split_statements(f.read())
    tables = [s for s in statements if s.upper().startswith("CREATE TABLE")]
    assert any("users" in s for s in tables)
    assert any("reviews" in s for s in tables)
    assert not any(s.endswith(";") for s in statements)


def test_migrations_apply_once_in_order(engine, migrations_dir):
    (migrations_dir / "0002_seed.sql").write_text("INSERT INTO notes (body) VALUES ('second');", encoding="utf-8")
    (migrations_dir / "0001_notes.sql").write_text(
        "CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT);", encoding="utf-8"
    )
    (migrations_dir / "README.txt").write_text("not a migration", encoding="utf-8")

    assert run_migrations(engine, str(migrations_dir)) == ["0001_notes.sql", "0002_seed.sql"]
    assert run_migrations(engine, str(migrations_dir)) == []

    with engine.connect() as conn:
        history = conn.execute(select(migration_history.c.filename).order_by(migration_history.c.id)).scalars().all()
        assert history == ["0001_notes.sql", "0002_seed.sql"]
        assert conn.execute(text("SELECT count(*) FROM notes")).scalar() == 1


def test_failed_migration_is_rolled_back(engine, migrations_dir):
    (migrations_dir / "0001_notes.sql").write_text(
        "CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT);", encoding="utf-8"
    )
    (migrations_dir / "0002_broken.sql").write_text(
        "INSERT INTO notes (body) VALUES ('kept');\nINSERT INTO missing_table (body) VALUES ('x');",
        encoding="utf-8",
    )

    with pytest.raises(OperationalError):
        run_migrations(engine, str(migrations_dir))

    with engine.connect() as conn:
        history = conn.execute(select(migration_history.c.filename)).scalars().all()
        assert history == ["0001_notes.sql"]
        assert conn.execute(text("SELECT count(*) FROM notes")).scalar() == 0


def test_missing_directory(engine, tmp_path):
    with pytest.raises(FileNotFoundError):
        run_migrations(engine, str(tmp_path / "nowhere"))
    assert "migration_history" in inspect(engine).get_table_names()
