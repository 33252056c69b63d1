"""Alembic environment for the Habit Pet schema."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from logging.config import fileConfig
from pathlib import Path
import re
import sys

from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config
from sqlmodel import SQLModel

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app.core.config import settings  # noqa: E402
from app.db import base  # noqa: F401,E402  # registers every table on the metadata

VERSIONS_DIR = Path(__file__).parent / "versions"
REVISION_NAME = re.compile(r"^\d{8}_(\d{4})")

config = context.config

if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name)

# app.db.session.run_migrations() passes the URL in and flags url_configured
if not config.attributes.get("url_configured"):
    config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)


def next_revision_id(today: datetime | None = None) -> str:
    """Revision ids are YYYYMMDD_NNNN; the sequence keeps counting across days."""
    sequences = [0]
    for path in VERSIONS_DIR.glob("*.py"):
        match = REVISION_NAME.match(path.stem)
        if match:
            sequences.append(int(match.group(1)))
    day = (today or datetime.now(timezone.utc)).strftime("%Y%m%d")
    return f"{day}_{max(sequences) + 1:04d}"


def _name_revision(context, revision, directives) -> None:
    if directives:
        directives[0].rev_id = next_revision_id()


def _configure(**options) -> None:
    context.configure(
        target_metadata=SQLModel.metadata,
        compare_type=True,
        process_revision_directives=_name_revision,
        **options,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )


async def run_migrations_online() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section) or {},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(
                lambda sync_connection: _configure(
                    connection=sync_connection,
                    transaction_per_migration=True,
                )
            )
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
