"""SQLAlchemy Core definition of the generic record table.

The table and column names come from :class:`RecordTableOptions`, so the table
is built per configuration instead of being declared as a fixed ORM model.
Every column is keyed by its default name, so statements address
``table.c.tenant_id`` whatever the column is called in the database.
"""

from sqlalchemy import JSON, Column, DateTime, Index, MetaData, Table, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB

from hybrid_records.config import RecordTableOptions


def build_record_table(options: RecordTableOptions, metadata: MetaData | None = None) -> Table:
    """Build the record table and its indexes on ``metadata``."""
    metadata = metadata if metadata is not None else MetaData()
    name = options.table_name

    table = Table(
        name,
        metadata,
        Column(options.id_column, Uuid, key="id", primary_key=True),
        Column(options.type_column, Text, key="type", nullable=False),
        Column(options.tenant_id_column, Uuid, key="tenant_id", nullable=True),
        Column(
            options.data_column,
            JSON().with_variant(JSONB(), "postgresql"),
            key="data",
            nullable=False,
        ),
        Column(options.created_at_column, DateTime(timezone=True), key="created_at", nullable=False),
        Column(options.created_by_column, Uuid, key="created_by", nullable=True),
        Column(options.updated_at_column, DateTime(timezone=True), key="updated_at", nullable=True),
        Column(options.updated_by_column, Uuid, key="updated_by", nullable=True),
        Column(options.deleted_at_column, DateTime(timezone=True), key="deleted_at", nullable=True),
        Column(options.deleted_by_column, Uuid, key="deleted_by", nullable=True),
    )

    Index(f"ix_{name}_tenant_id", table.c.tenant_id, table.c.id)
    Index(f"ix_{name}_tenant_type", table.c.tenant_id, table.c.type)
    # Containment queries on the document; GIN only exists on PostgreSQL.
    Index(f"ix_{name}_data", table.c.data, postgresql_using="gin").ddl_if(dialect="postgresql")

    return table
