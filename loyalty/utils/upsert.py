# loyalty/utils/upsert.py

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

_DIALECT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


async def insert_if_missing(
    db: AsyncSession,
    model,
    *,
    index_elements: list[str],
    values: dict,
) -> None:
    """INSERT ... ON CONFLICT DO NOTHING in a single round-trip."""
    dialect = db.get_bind().dialect.name
    insert_fn = _DIALECT_INSERTS.get(dialect)
    if insert_fn is None:
        raise RuntimeError(f"Upsert is not supported for dialect {dialect}")

    stmt = (
        insert_fn(model)
        .values(**values)
        .on_conflict_do_nothing(index_elements=index_elements)
    )
    await db.execute(stmt)
