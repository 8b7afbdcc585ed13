"""
User administration page actions.
"""
import html
import logging
from typing import Any, Optional

from aclpanel.core.config import Settings
from aclpanel.schemas.confirmation import Confirmation

logger = logging.getLogger(__name__)


class ShowGenerateRssTokenAction:
    """Ask for confirmation before a user's RSS token is replaced."""

    REQUEST_KEY = "show_generate_rsstoken"
    FORM_NAME = "generate_rsstoken"

    def __init__(self, settings: Settings):
        self.settings = settings

    def handle(self, user_id: Optional[Any]) -> Confirmation:
        scrubbed = html.escape(str(user_id)) if user_id is not None else ""
        logger.debug(f"RSS token regeneration confirmation requested for user {scrubbed!r}")

        return Confirmation(
            title="Are You Sure?",
            text=(
                "This will replace your existing RSS token. "
                "Feeds with the old token might not work properly"
            ),
            next_url=(
                f"{self.settings.WEB_PATH}/admin/users.php"
                f"?action=generate_rsstoken&user_id={scrubbed}"
            ),
            cancel=1,
            form_name=self.FORM_NAME,
        )
