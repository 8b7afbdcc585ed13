"""
Health check endpoint for monitoring and diagnostics.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from aclpanel.core.config import settings
from aclpanel.core.database import get_db
from aclpanel.core.errors import StoreError
from aclpanel.core.store import SqlStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint that verifies the API is running and the
    database answers ``SELECT 1``.

    Returns 503 when the database is unreachable.
    """
    try:
        SqlStore(db).read("SELECT 1 AS ok")
    except StoreError as e:
        logger.error(f"Database health check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection failed"
        )

    return {
        "ok": True,
        "db": True,
        "environment": settings.APP_ENV,
    }
