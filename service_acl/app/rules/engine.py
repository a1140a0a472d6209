"""
Rule resolution engine for the Server ACL.
"""

import asyncio
from typing import Any, Iterable, Optional

from shared.logging import get_logger
from shared.errors import AccessLayerException, AssessorError
from shared.metrics import AclMetrics
from ..registry import RoleAssessorRegistry
from .models import Decision, Rule, is_conditions


class RuleResolver:
    """Folds an ordered rule list into one decision.

    Starts from ``False``. A rule whose role does not hold leaves the
    decision alone, so a denied or unknown role never revokes a grant.
    When the role holds:

    - a conditions dict is merged key by key over the conditions gathered
      so far (or becomes them if there are none yet);
    - a plain ``True`` keeps gathered conditions, otherwise sets the
      decision to the rule's ``allow`` value (default ``True``).

    Conditions, once gathered, are never lost. A plain boolean decision is
    not protected the same way: a later held rule with ``allow: false``
    turns an earlier ``True`` back into ``False``.
    """

    def __init__(self, registry: RoleAssessorRegistry, metrics: Optional[AclMetrics] = None):
        self.logger = get_logger("acl.rule_engine")
        self.registry = registry
        self.metrics = metrics

    async def has_role(self, role: str, context: Any = None) -> Decision:
        """Credential for a single role; False when no assessor is registered."""
        assessor = self.registry.resolve(role)
        if assessor is None:
            return False

        try:
            return await assessor.has_role(context)
        except asyncio.CancelledError:
            raise
        except AccessLayerException:
            self._record_failure(role)
            raise
        except Exception as e:
            self._record_failure(role, error=str(e))
            raise AssessorError(role, str(e)) from e

    async def evaluate(self, rules: Iterable[Rule], context: Any = None) -> Decision:
        """Evaluate rules strictly in order."""
        decision: Decision = False

        for rule in rules:
            credential = await self.has_role(rule.role, context)
            decision = self._apply(decision, credential, rule)

        return decision

    def _apply(self, decision: Decision, credential: Any, rule: Rule) -> Decision:
        # An empty dict is still a grant with (no) conditions
        if not is_conditions(credential) and not credential:
            return decision

        prior_conditions = decision if is_conditions(decision) else None

        if is_conditions(credential):
            if prior_conditions is not None:
                prior_conditions.update(credential)
                return prior_conditions
            # Copied so later merges never write into the assessor's object
            return dict(credential)

        if credential is True:
            if prior_conditions is not None:
                return prior_conditions
            return rule.granted_value

        # Truthy but neither True nor conditions: not understood, ignored
        self.logger.warning(
            "Unsupported credential ignored",
            role=rule.role,
            credential_type=type(credential).__name__
        )
        return decision

    def _record_failure(self, role: str, error: Optional[str] = None) -> None:
        self.logger.error("Role assessor failed to check role", role=role, error=error)
        if self.metrics is not None:
            self.metrics.record_assessor_error(role, "has_role")
