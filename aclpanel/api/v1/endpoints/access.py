"""
Access list (ACL) management endpoints.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from aclpanel.core.config import get_settings
from aclpanel.core.database import get_db
from aclpanel.core.errors import ErrorCollector, StoreError
from aclpanel.core.store import SqlStore
from aclpanel.schemas.access import (
    AccessEntryListResponse,
    AccessEntryRequest,
    AccessEntryResponse,
)
from aclpanel.services.access_service import AccessEntryStore
from aclpanel.services.checkers import FunctionChecker, SettingsFunctionChecker

logger = logging.getLogger(__name__)

router = APIRouter()


def get_function_checker() -> FunctionChecker:
    """Dependency providing the feature checker."""
    return SettingsFunctionChecker(get_settings().ENABLED_FUNCTIONS)


def get_access_store(
    db: Session = Depends(get_db),
    function_checker: FunctionChecker = Depends(get_function_checker),
) -> AccessEntryStore:
    """Dependency providing an AccessEntryStore bound to the request session."""
    return AccessEntryStore(SqlStore(db), function_checker=function_checker)


def _raise_validation(errors: ErrorCollector):
    raise HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"errors": errors.as_dict()},
    )


@router.get("/", response_model=AccessEntryListResponse)
async def list_access_entries(store: AccessEntryStore = Depends(get_access_store)):
    """List all ACL entries."""
    try:
        entries = store.all()
        return AccessEntryListResponse(
            items=[AccessEntryResponse.from_entry(e) for e in entries],
            total=len(entries),
        )
    except StoreError:
        raise
    except Exception as e:
        logger.error(f"Error listing ACL entries: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list ACL entries"
        )


@router.get("/functions/{function}")
async def check_function(
    function: str,
    store: AccessEntryStore = Depends(get_access_store),
):
    """Report whether an optional feature is enabled."""
    try:
        return {"function": function, "enabled": store.check_function(function)}
    except Exception as e:
        logger.error(f"Error checking function {function}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to check function"
        )


@router.get("/{entry_id}", response_model=AccessEntryResponse)
async def get_access_entry(
    entry_id: int,
    store: AccessEntryStore = Depends(get_access_store),
):
    """Get an ACL entry by id."""
    try:
        entry = store.load(entry_id)
        if not entry.is_loaded:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"ACL entry with id {entry_id} not found"
            )
        return AccessEntryResponse.from_entry(entry)
    except (HTTPException, StoreError):
        raise
    except Exception as e:
        logger.error(f"Error retrieving ACL entry {entry_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve ACL entry"
        )


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_access_entry(
    request: AccessEntryRequest,
    store: AccessEntryStore = Depends(get_access_store),
):
    """
    Create an ACL entry.

    Range problems are returned as 422 with errors keyed by field (start/end).
    """
    try:
        errors = ErrorCollector()
        if not store.create(request.model_dump(), errors):
            _raise_validation(errors)
        return {"created": True}
    except (HTTPException, StoreError):
        raise
    except Exception as e:
        logger.error(f"Error creating ACL entry: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create ACL entry"
        )


@router.put("/{entry_id}")
async def update_access_entry(
    entry_id: int,
    request: AccessEntryRequest,
    store: AccessEntryStore = Depends(get_access_store),
):
    """Replace all fields of an ACL entry."""
    try:
        errors = ErrorCollector()
        if not store.update(entry_id, request.model_dump(), errors):
            _raise_validation(errors)
        return {"updated": True, "id": entry_id}
    except (HTTPException, StoreError):
        raise
    except Exception as e:
        logger.error(f"Error updating ACL entry {entry_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update ACL entry"
        )
