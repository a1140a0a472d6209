"""
Unit tests for the rule source.
"""

import pytest

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
sys.path.append(os.path.dirname(__file__))

from service_acl.app.rules.models import AclConfig, Rule
from service_acl.app.rules.source import RuleSource
from helpers import AclConfigFactory


class TestRuleSource:
    """Test cases for RuleSource."""

    @pytest.fixture
    def source(self):
        return RuleSource(AclConfigFactory.create_acl_config())

    def roles(self, rules):
        return [rule.role for rule in rules]

    def test_empty_config(self):
        source = RuleSource()

        assert source.get_rules("anything") == []
        assert source.get_rules() == []

    def test_global_then_endpoint(self, source):
        rules = source.get_rules("post-create")

        assert self.roles(rules) == ["all", "owner", "teamAdmin"]

    def test_unknown_endpoint_uses_global(self, source):
        assert self.roles(source.get_rules("missing")) == ["all"]

    def test_endpoint_without_acl_uses_global(self, source):
        assert self.roles(source.get_rules("post-list")) == ["all"]

    def test_empty_name_uses_global(self, source):
        assert self.roles(source.get_rules("")) == ["all"]
        assert self.roles(source.get_rules(None)) == ["all"]

    def test_auxiliary_fields_preserved(self, source):
        team_admin = source.get_rules("post-create")[-1]

        assert team_admin.auxiliary == {"contextArgs": {"order": "order"}}
        assert team_admin.allow is True

    def test_add_single_rule(self, source):
        source.add_rule({"role": "authed", "allow": True})

        assert self.roles(source.get_rules("post-create")) == ["all", "authed", "owner", "teamAdmin"]

    def test_add_rule_batch(self, source):
        source.add_rule([Rule(role="authed"), {"role": "unauthed", "allow": False}])

        rules = source.get_rules()
        assert self.roles(rules) == ["all", "authed", "unauthed"]
        assert rules[2].allow is False

    def test_add_rule_tuple_batch(self, source):
        source.add_rule((Rule(role="authed"),))

        assert self.roles(source.get_rules()) == ["all", "authed"]

    def test_get_rules_returns_new_list(self, source):
        rules = source.get_rules("post-create")
        rules.append(Rule(role="injected"))

        assert "injected" not in self.roles(source.get_rules("post-create"))

    def test_add_endpoint_rules_new_endpoint(self, source):
        source.add_endpoint_rules("get-item", [{"role": "owner"}])

        assert self.roles(source.get_rules("get-item")) == ["all", "owner"]

    def test_add_endpoint_rules_endpoint_without_acl(self, source):
        source.add_endpoint_rules("post-list", [{"role": "authed"}])

        assert self.roles(source.get_rules("post-list")) == ["all", "authed"]

    def test_add_endpoint_rules_appends(self, source):
        source.add_endpoint_rules("post-create", [{"role": "rolename"}])

        assert self.roles(source.get_rules("post-create"))[-1] == "rolename"

    def test_accepts_config_model(self):
        source = RuleSource(AclConfig(rules=[Rule(role="all")]))

        assert self.roles(source.get_rules()) == ["all"]


class TestRuleModel:
    """Test cases for the Rule model."""

    def test_defaults(self):
        rule = Rule.coerce({"role": "all"})

        assert rule.allow is None
        assert rule.granted_value is True
        assert rule.auxiliary == {}

    def test_explicit_allow(self):
        assert Rule(role="all", allow=False).granted_value is False

    def test_missing_role(self):
        assert Rule.coerce({"allow": True}).role == ""

    def test_coerce_keeps_instance(self):
        rule = Rule(role="all")

        assert Rule.coerce(rule) is rule

    def test_rule_is_immutable(self):
        rule = Rule(role="all")

        with pytest.raises(Exception):
            rule.role = "other"
