"""SQLAlchemy table metadata for the friend store."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import (
    TIMESTAMP,
    Column,
    Dialect,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    Table,
    Text,
    TypeDecorator,
    func,
)


class UTCDateTime(TypeDecorator[datetime]):
    """``TIMESTAMP`` column that stores UTC and returns aware datetimes."""

    impl = TIMESTAMP
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC).replace(tzinfo=None)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

player_summaries_table = Table(
    "player_summaries",
    metadata,
    Column("account_id", Integer, primary_key=True, nullable=False, autoincrement=False),
    Column("persona_name", Text, nullable=False),
    Column("profile_url", Text, nullable=False),
    Column("friend_since", UTCDateTime, nullable=False),
    Column("updated_at", UTCDateTime, nullable=False, server_default=func.current_timestamp()),
    Column("removed_at", UTCDateTime, nullable=True),
)

name_history_table = Table(
    "name_history",
    metadata,
    Column("account_id", Integer, nullable=False, autoincrement=False),
    Column("persona_name", Text, nullable=False),
    Column("updated_at", UTCDateTime, nullable=False, server_default=func.current_timestamp()),
    PrimaryKeyConstraint("account_id", "persona_name"),
)
