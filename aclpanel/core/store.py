"""
Parameterized read/write store over a SQLAlchemy session.

Queries are plain SQL with ``?`` positional placeholders; parameters are an
ordered sequence bound in the same order.
"""
import logging
from typing import Any, Dict, List, Sequence

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from aclpanel.core.errors import StoreError

logger = logging.getLogger(__name__)


def bind_positional(query: str, params: Sequence[Any]):
    """
    Rewrite ``?`` placeholders to ``:p0, :p1, ...`` for ``sqlalchemy.text``.

    Placeholders inside quoted literals are not supported.
    """
    parts = query.split("?")
    if len(parts) - 1 != len(params):
        raise StoreError(
            f"Query expects {len(parts) - 1} parameters, got {len(params)}"
        )
    sql = parts[0]
    bound: Dict[str, Any] = {}
    for index, part in enumerate(parts[1:]):
        name = f"p{index}"
        sql += f":{name}{part}"
        bound[name] = params[index]
    return text(sql), bound


class SqlStore:
    """Backing store used by AccessEntryStore."""

    def __init__(self, db: Session):
        self.db = db

    def read(self, query: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        statement, bound = bind_positional(query, params)
        try:
            result = self.db.execute(statement, bound)
            return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error(f"Store read failed: {e}")
            self.db.rollback()
            raise StoreError(str(e)) from e

    def write(self, query: str, params: Sequence[Any] = ()) -> None:
        statement, bound = bind_positional(query, params)
        try:
            self.db.execute(statement, bound)
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Store write failed: {e}")
            self.db.rollback()
            raise StoreError(str(e)) from e
