"""
Server ACL package.

Decides whether a request may use a named endpoint, returning ``False``,
``True``, or a conditions dict describing the scope of the grant.

- app.acl: ServerAcl facade (populate_context, is_permitted, has_role).
- app.registry: Role name to assessor mapping and repository propagation.
- app.population: Priority tiered context population.
- app.rules: Rule model, rule source, resolution engine and config loading.
- app.assessors: RoleAssessor capability and the default ``all`` role.
- app.guard: FastAPI dependency wrapping the above.

Guidelines:
- A denial is a return value; assessor failures are raised.
- Assessors in one priority tier run concurrently and must not write the
  same context keys.
"""

from .acl import ServerAcl
from .assessors import RoleAssessor, RoleAssessorAll
from .rules.models import AclConfig, Decision, Rule

__all__ = [
    "ServerAcl",
    "RoleAssessor",
    "RoleAssessorAll",
    "AclConfig",
    "Decision",
    "Rule",
]
