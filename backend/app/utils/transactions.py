from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """
    Unit of work over the session's current transaction.
    Everything done inside the block is committed together on normal exit,
    or rolled back together if the block raises.
    Usage:
        with transaction(db):
            ... DB work ...
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
