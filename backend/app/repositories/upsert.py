from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

# dialects that speak INSERT ... ON CONFLICT
_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def conflict_insert(db: Session, table: Table):
    """INSERT construct that supports on_conflict_do_update / on_conflict_do_nothing."""
    dialect = db.get_bind().dialect.name
    if dialect not in _INSERTS:
        raise NotImplementedError(f"ON CONFLICT upsert not available on {dialect}")
    return _INSERTS[dialect](table)
