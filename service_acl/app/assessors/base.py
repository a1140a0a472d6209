"""
Role assessor capability.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from shared.logging import get_logger
from ..rules.models import Decision


class RoleAssessor(ABC):
    """Answers whether a context holds one role.

    Subclasses set ``role`` (the registration key) and ``priority``
    (population tier, higher runs first). ``init_context`` may write facts
    into the context for later tiers and for ``has_role``; ``has_role``
    returns ``False``, ``True`` or a conditions dict.
    """

    role: str = ""
    priority: int = 0

    def __init__(self):
        self.repos: Optional[Any] = None
        self.logger = get_logger(f"acl.assessor.{self.role or type(self).__name__}")

    def set_repos(self, repos: Optional[Any]) -> None:
        """Receive the shared repository handle."""
        self.repos = repos

    async def init_context(self, request: Any, context: Any, remote_object: Any = None) -> bool:
        """Populate ``context`` before any rule is evaluated."""
        return True

    @abstractmethod
    async def has_role(self, context: Any) -> Decision:
        """Check the role against the populated context."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(role={self.role!r}, priority={self.priority})"
