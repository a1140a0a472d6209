"""
Shared utilities for the Server ACL.

This package aggregates common building blocks consumed by the engine:

- config: Engine settings via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Do not import from service_acl into shared/.
"""
