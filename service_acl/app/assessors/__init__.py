"""
Role assessors.

- base: The RoleAssessor capability every variant implements.
- all: RoleAssessorAll, registered by default under the role ``all``.
"""

from .base import RoleAssessor
from .all import RoleAssessorAll

__all__ = ["RoleAssessor", "RoleAssessorAll"]
