"""
Role assessor registry.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from shared.logging import get_logger
from shared.errors import ConfigurationError
from .assessors.base import RoleAssessor


class RoleAssessorRegistry:
    """Maps each role name to the one assessor responsible for it."""

    def __init__(self, repos: Optional[Any] = None):
        self.logger = get_logger("acl.registry")
        self.assessors: Dict[str, RoleAssessor] = {}
        self.repos = repos

    def register(self, assessor: RoleAssessor) -> RoleAssessor:
        """Register an assessor under its role, replacing any previous one.

        The current repository handle is handed over straight away, even
        when it has not been set yet.
        """
        priority = assessor.priority
        if isinstance(priority, bool) or not isinstance(priority, int) or priority < 0:
            raise ConfigurationError(
                "Assessor priority must be a non-negative integer",
                {"role": assessor.role, "priority": priority}
            )

        replaced = self.assessors.get(assessor.role)
        self.assessors[assessor.role] = assessor
        assessor.set_repos(self.repos)

        self.logger.info(
            "Role assessor registered",
            role=assessor.role,
            priority=priority,
            replaced=replaced is not None
        )
        return assessor

    def set_repos(self, repos: Optional[Any]) -> None:
        """Store the repository handle and forward it to every assessor."""
        for assessor in self.assessors.values():
            assessor.set_repos(repos)
        self.repos = repos
        self.logger.debug("Repository handle propagated", assessors=len(self.assessors))

    def resolve(self, role: str) -> Optional[RoleAssessor]:
        """Get the assessor for a role, or None if nobody can grant it."""
        return self.assessors.get(role)

    def roles(self) -> List[str]:
        return list(self.assessors)

    def tiers(self) -> List[Tuple[int, List[RoleAssessor]]]:
        """Assessors grouped by priority, highest priority first."""
        groups: Dict[int, List[RoleAssessor]] = {}
        for assessor in self.assessors.values():
            groups.setdefault(assessor.priority, []).append(assessor)
        return sorted(groups.items(), key=lambda item: item[0], reverse=True)

    def __contains__(self, role: str) -> bool:
        return role in self.assessors

    def __len__(self) -> int:
        return len(self.assessors)

    def __iter__(self) -> Iterator[RoleAssessor]:
        return iter(list(self.assessors.values()))
