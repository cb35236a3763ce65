# File: canvas_export/core/database/base.py

from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

# Stable constraint names, so Postgres and SQLite schemas line up
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}

# The shared registry. Export job records inherit from this.
Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))
