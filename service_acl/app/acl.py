"""
Server ACL facade.
"""

import asyncio
import time
from typing import Any, Dict, Iterable, List, Optional, Union

from shared.config import AclSettings
from shared.logging import configure_logging, get_logger, set_endpoint
from shared.errors import AclTimeoutError
from shared.metrics import AclMetrics
from .assessors.base import RoleAssessor
from .assessors.all import RoleAssessorAll
from .population import ContextPopulator
from .registry import RoleAssessorRegistry
from .rules.engine import RuleResolver
from .rules.loader import load_acl_config
from .rules.models import AclConfig, Decision, Rule, describe_decision
from .rules.source import RuleInput, RuleSource


class ServerAcl:
    """Decides whether a populated request context may use an endpoint.

    Typical use per request::

        await acl.populate_context(request, context, remote_object)
        decision = await acl.is_permitted("post-create", context)

    ``decision`` is ``False``, ``True`` or a conditions dict.
    """

    def __init__(
        self,
        config: Union[AclConfig, Dict[str, Any], None] = None,
        repos: Optional[Any] = None,
        population_timeout: Optional[float] = None,
        decision_timeout: Optional[float] = None,
        metrics: Optional[AclMetrics] = None,
    ):
        self.logger = get_logger("acl.server")
        self.metrics = metrics
        self.decision_timeout = decision_timeout

        self.rule_source = RuleSource(config)
        self.registry = RoleAssessorRegistry(repos)
        self.populator = ContextPopulator(self.registry, timeout=population_timeout, metrics=metrics)
        self.resolver = RuleResolver(self.registry, metrics=metrics)

        self.load_default_role_assessors()

    @classmethod
    def from_settings(cls, settings: AclSettings, repos: Optional[Any] = None) -> "ServerAcl":
        """Build an engine from settings, loading the rules file if one is set."""
        configure_logging("acl", settings.log_level)
        config = load_acl_config(settings.rules_file) if settings.rules_file else None
        return cls(
            config,
            repos=repos,
            population_timeout=settings.population_timeout_seconds,
            decision_timeout=settings.decision_timeout_seconds,
            metrics=AclMetrics() if settings.metrics_enabled else None,
        )

    @property
    def config(self) -> AclConfig:
        return self.rule_source.config

    @property
    def repos(self) -> Optional[Any]:
        return self.registry.repos

    def load_default_role_assessors(self) -> None:
        self.add_role_assessor(RoleAssessorAll())

    async def populate_context(self, request: Any, context: Any = None, remote_object: Any = None) -> bool:
        """Let every assessor seed the context, highest priority tier first."""
        return await self.populator.populate(request, context, remote_object)

    async def is_permitted(self, endpoint_name: Optional[str] = None, context: Any = None) -> Decision:
        """Resolve the endpoint's rules against a populated context."""
        endpoint_name = endpoint_name or ""
        context = context if context is not None else {}
        set_endpoint(endpoint_name)

        rules = self.rule_source.get_rules(endpoint_name)
        start_time = time.time()

        if self.decision_timeout is None:
            decision = await self.resolver.evaluate(rules, context)
        else:
            try:
                decision = await asyncio.wait_for(
                    self.resolver.evaluate(rules, context),
                    timeout=self.decision_timeout
                )
            except asyncio.TimeoutError:
                self.logger.error("Decision timed out", timeout=self.decision_timeout)
                raise AclTimeoutError("is_permitted", self.decision_timeout)

        outcome = describe_decision(decision)
        self.logger.debug(
            "Decision made",
            rules=len(rules),
            outcome=outcome,
            evaluation_time_ms=(time.time() - start_time) * 1000
        )
        if self.metrics is not None:
            self.metrics.record_decision(endpoint_name, outcome)
            self.metrics.get_metric("acl_decision_duration_seconds").observe(time.time() - start_time)

        return decision

    async def has_role(self, role: str, context: Any = None) -> Decision:
        """Credential for one role; False if no assessor handles it."""
        return await self.resolver.has_role(role, context)

    def add_rule(self, rule: Union[RuleInput, Iterable[RuleInput]]) -> None:
        """Append a rule or a list of rules to the global rules."""
        self.rule_source.add_rule(rule)

    def add_endpoint_rules(self, endpoint_name: str, rules: Iterable[RuleInput]) -> None:
        self.rule_source.add_endpoint_rules(endpoint_name, rules)

    def get_rules(self, endpoint_name: Optional[str] = None) -> List[Rule]:
        return self.rule_source.get_rules(endpoint_name)

    def set_repos(self, repos: Optional[Any]) -> None:
        """Share a repository handle with every registered assessor."""
        self.registry.set_repos(repos)

    def add_role_assessor(self, assessor: RoleAssessor) -> RoleAssessor:
        return self.registry.register(assessor)

    def get_role_assessor(self, role: str) -> Optional[RoleAssessor]:
        return self.registry.resolve(role)
