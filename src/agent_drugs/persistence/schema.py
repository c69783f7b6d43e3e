"""Database schema definitions using SQLAlchemy Core.

Tables:
    drugs: Modifier definitions, keyed by name. Written once at startup.
    active_drugs: Assignments, one row per (user_id, agent_id, name).
        expires_at holds integer epoch seconds.
"""

from sqlalchemy import (
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

drugs_table = Table(
    "drugs",
    metadata,
    Column("name", String(100), primary_key=True),
    Column("prompt", Text, nullable=False),
    Column("default_duration_minutes", Integer, nullable=False),
)

active_drugs_table = Table(
    "active_drugs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(200), nullable=False),
    Column("agent_id", String(200), nullable=False),
    Column("name", String(100), nullable=False),
    Column("prompt", Text, nullable=False),
    Column("expires_at", Integer, nullable=False),
    # The conflict target for the take upsert
    UniqueConstraint("user_id", "agent_id", "name", name="uq_active_drugs_scope_name"),
    Index("ix_active_drugs_scope", "user_id", "agent_id"),
)
