"""
Rule data models for the Server ACL.
"""

from typing import Dict, Any, Optional, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from shared.errors import ConfigurationError

# A decision is False (denied), True (permitted) or a conditions dict
# (permitted within the scope the dict describes).
Conditions = Dict[str, Any]
Decision = Union[bool, Conditions]


class Rule(BaseModel):
    """ACL rule pairing a role with an optional allow value.

    Any other keys (e.g. ``contextArgs``) are kept untouched for assessors.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    role: str = Field(default="", description="Role the rule applies to")
    allow: Optional[bool] = Field(default=None, description="Value granted when the role holds")

    @property
    def auxiliary(self) -> Dict[str, Any]:
        """Assessor specific fields the engine does not interpret."""
        return dict(self.model_extra or {})

    @property
    def granted_value(self) -> bool:
        """Value a plain grant of this rule produces."""
        return self.allow if self.allow is not None else True

    @classmethod
    def coerce(cls, rule: Union["Rule", Dict[str, Any]]) -> "Rule":
        """Accept a Rule or a plain dict of the config shape."""
        if isinstance(rule, cls):
            return rule
        try:
            return cls.model_validate(rule)
        except PydanticValidationError as e:
            raise ConfigurationError("Invalid ACL rule", {"errors": e.errors()}) from e


class EndpointAcl(BaseModel):
    """The ``acl`` block of an endpoint."""

    model_config = ConfigDict(extra="allow")

    rules: List[Rule] = Field(default_factory=list)

    @field_validator("rules", mode="before")
    @classmethod
    def _null_rules(cls, value: Any) -> Any:
        return [] if value is None else value


class EndpointConfig(BaseModel):
    """Endpoint definition; only ``acl`` is read, routing keys pass through."""

    model_config = ConfigDict(extra="allow")

    acl: Optional[EndpointAcl] = None


class AclConfig(BaseModel):
    """Global rules plus per endpoint overrides."""

    model_config = ConfigDict(extra="allow")

    rules: List[Rule] = Field(default_factory=list)
    endpoints: Dict[str, EndpointConfig] = Field(default_factory=dict)

    # A bare `rules:` or `endpoints:` key in YAML means none
    @field_validator("rules", mode="before")
    @classmethod
    def _null_rules(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("endpoints", mode="before")
    @classmethod
    def _null_endpoints(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def coerce(cls, config: Union["AclConfig", Dict[str, Any], None]) -> "AclConfig":
        if config is None:
            return cls()
        if isinstance(config, cls):
            return config
        try:
            return cls.model_validate(config)
        except PydanticValidationError as e:
            raise ConfigurationError("Invalid ACL config", {"errors": e.errors()}) from e


def is_conditions(value: Any) -> bool:
    """True when a credential or decision carries conditions."""
    return isinstance(value, dict)


def describe_decision(decision: Decision) -> str:
    """Outcome label used in logs and metrics."""
    if is_conditions(decision):
        return "conditional"
    return "granted" if decision else "denied"
