"""
Feature and privilege checker interfaces.

AccessEntryStore forwards its check_function/check calls to instances of
these, handed to it by the caller.
"""
import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class FunctionChecker(ABC):
    """Answers whether an optional feature is enabled."""

    @abstractmethod
    def check(self, function: str) -> bool:
        """
        Check if a feature is enabled.

        Args:
            function: Feature name (e.g. download, batch_download)

        Returns:
            True if the feature is enabled
        """
        pass


class PrivilegeChecker(ABC):
    """Answers whether a user holds at least a given level for a feature type."""

    @abstractmethod
    def check(self, access_type: str, level: int, user_id: Optional[int] = None) -> bool:
        """
        Check a user's privilege.

        Args:
            access_type: Feature type (interface, rpc, network, stream)
            level: Minimum access level required (0, 5, 25, 50, 75, 100)
            user_id: User to check; None means the current user

        Returns:
            True if the user has the required level
        """
        pass


class SettingsFunctionChecker(FunctionChecker):
    """FunctionChecker backed by the ENABLED_FUNCTIONS setting."""

    def __init__(self, enabled_functions: Iterable[str]):
        self.enabled_functions = {f.strip().lower() for f in enabled_functions if f and f.strip()}

    def check(self, function: str) -> bool:
        enabled = function.strip().lower() in self.enabled_functions
        logger.debug(f"Function check: {function} -> {enabled}")
        return enabled
