"""
User administration page actions.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from aclpanel.core.config import Settings, get_settings
from aclpanel.schemas.confirmation import Confirmation
from aclpanel.services.user_actions import ShowGenerateRssTokenAction

router = APIRouter()


@router.get(f"/{ShowGenerateRssTokenAction.REQUEST_KEY}", response_model=Confirmation)
async def show_generate_rsstoken(
    user_id: Optional[str] = Query(None, description="User whose RSS token would be replaced"),
    settings: Settings = Depends(get_settings),
):
    """Confirmation dialog shown before regenerating a user's RSS token."""
    return ShowGenerateRssTokenAction(settings).handle(user_id)
