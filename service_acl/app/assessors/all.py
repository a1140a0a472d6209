"""
Default assessor matching every caller.
"""

from typing import Any

from .base import RoleAssessor


class RoleAssessorAll(RoleAssessor):
    """Role ``all``: everyone holds it."""

    role = "all"
    priority = 0

    async def has_role(self, context: Any) -> bool:
        return True
