import os
import re
import logging
from sqlalchemy import MetaData, Table, Column, Integer, String, DateTime, select
from sqlalchemy.engine import Engine
from jobsolution.utils.time_util import utcnow

logger = logging.getLogger(__name__)

history_metadata = MetaData()

migration_history = Table(
    "migration_history",
    history_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("filename", String(255), nullable=False, unique=True),
    Column("applied_at", DateTime, nullable=False),
)

DOLLAR_QUOTE = re.compile(r"\$[A-Za-z_][A-Za-z0-9_]*\$|\$\$")


def split_statements(sql: str) -> list[str]:
    """Split a SQL script on semicolons that are outside quotes and comments.

    Understands '...' literals, `--` and `/* */` comments, and PostgreSQL
    dollar-quoted bodies (`$$ ... $$`, `$tag$ ... $tag$`) so functions and
    `DO` blocks stay whole.
    """
    statements = []
    current = []
    in_quote = False
    i = 0
    while i < len(sql):
        ch = sql[i]
        if in_quote:
            current.append(ch)
            if ch == "'":
                # '' is an escaped quote inside a string literal
                if i + 1 < len(sql) and sql[i + 1] == "'":
                    current.append("'")
                    i += 1
                else:
                    in_quote = False
        elif ch == "'":
            in_quote = True
            current.append(ch)
        elif sql.startswith("--", i):
            newline = sql.find("\n", i)
            i = len(sql) if newline == -1 else newline
            continue
        elif sql.startswith("/*", i):
            end = sql.find("*/", i + 2)
            i = len(sql) if end == -1 else end + 2
            current.append(" ")
            continue
        elif ch == "$" and DOLLAR_QUOTE.match(sql, i):
            tag = DOLLAR_QUOTE.match(sql, i).group(0)
            end = sql.find(tag, i + len(tag))
            end = len(sql) if end == -1 else end + len(tag)
            current.append(sql[i:end])
            i = end
            continue
        elif ch == ";":
            statement = "".join(current).strip()
            if statement:
                statements.append(statement)
            current = []
        else:
            current.append(ch)
        i += 1

    tail = "".join(current).strip()
    if tail:
        statements.append(tail)
    return statements


def list_migration_files(migrations_dir: str) -> list[str]:
    if not os.path.isdir(migrations_dir):
        raise FileNotFoundError(f"Migrations directory not found: {migrations_dir}")
    return sorted(name for name in os.listdir(migrations_dir) if name.endswith(".sql"))


def get_applied_migrations(engine: Engine) -> set[str]:
    with engine.begin() as conn:
        migration_history.create(conn, checkfirst=True)
        return set(conn.execute(select(migration_history.c.filename)).scalars())


def run_migrations(engine: Engine, migrations_dir: str) -> list[str]:
    """Apply every pending ``.sql`` file in filename order.

    Each file runs in its own transaction together with its history row, so a
    failing file leaves neither its changes nor a history entry behind.
    Returns the filenames applied by this call.
    """
    applied = get_applied_migrations(engine)
    newly_applied = []

    for filename in list_migration_files(migrations_dir):
        if filename in applied:
            continue

        with open(os.path.join(migrations_dir, filename), encoding="utf-8") as f:
            statements = split_statements(f.read())

        logger.info(f"Applying migration {filename} ({len(statements)} statements)")
        try:
            with engine.begin() as conn:
                for statement in statements:
                    conn.exec_driver_sql(statement)
                conn.execute(migration_history.insert().values(filename=filename, applied_at=utcnow()))
        except Exception:
            logger.error(f"Migration {filename} failed, rolled back")
            raise
        newly_applied.append(filename)

    if not newly_applied:
        logger.info("Database schema is up to date")
    return newly_applied
