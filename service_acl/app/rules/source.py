"""
Rule source: global rules followed by endpoint rules.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from shared.logging import get_logger
from .models import AclConfig, EndpointAcl, EndpointConfig, Rule

RuleInput = Union[Rule, Dict[str, Any]]


class RuleSource:
    """Builds the ordered rule list for an endpoint."""

    def __init__(self, config: Union[AclConfig, Dict[str, Any], None] = None):
        self.logger = get_logger("acl.rule_source")
        self.config = AclConfig.coerce(config)

    def add_rule(self, rule: Union[RuleInput, Iterable[RuleInput]]) -> None:
        """Append one rule, or a batch, to the global rules."""
        if isinstance(rule, (Rule, dict)):
            new_rules = [Rule.coerce(rule)]
        else:
            new_rules = [Rule.coerce(r) for r in rule]
        self.config.rules.extend(new_rules)
        self.logger.debug("Global rules added", count=len(new_rules), total=len(self.config.rules))

    def add_endpoint_rules(self, endpoint_name: str, rules: Iterable[RuleInput]) -> None:
        """Append rules to an endpoint, creating its entry if needed."""
        new_rules = [Rule.coerce(r) for r in rules]
        endpoint = self.config.endpoints.get(endpoint_name)
        if endpoint is None:
            endpoint = self.config.endpoints[endpoint_name] = EndpointConfig()
        if endpoint.acl is None:
            endpoint.acl = EndpointAcl()
        endpoint.acl.rules.extend(new_rules)
        self.logger.debug("Endpoint rules added", endpoint=endpoint_name, count=len(new_rules))

    def get_rules(self, endpoint_name: Optional[str] = None) -> List[Rule]:
        """Global rules first, then the endpoint's, so the endpoint has the last word."""
        global_rules = list(self.config.rules)

        endpoint = self.config.endpoints.get(endpoint_name) if endpoint_name else None
        if endpoint is None or endpoint.acl is None:
            return global_rules

        return global_rules + list(endpoint.acl.rules)

