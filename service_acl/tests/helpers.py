"""
Test doubles and factory methods for the Server ACL tests.
"""

import asyncio
from typing import Any, Dict, List, Optional

from service_acl.app.assessors.base import RoleAssessor


class StubAssessor(RoleAssessor):
    """Assessor returning a fixed credential."""

    def __init__(self, role: str, credential: Any = True, priority: int = 0):
        self.role = role
        self.priority = priority
        self.credential = credential
        self.calls = 0
        super().__init__()

    async def has_role(self, context: Any) -> Any:
        self.calls += 1
        return self.credential


class ContextAssessor(RoleAssessor):
    """Assessor writing one fact into the context and granting when it is set.

    ``events`` is a shared list; start and end markers let tests check how
    tiers interleave.
    """

    def __init__(self, role: str, priority: int = 0, key: Optional[str] = None,
                 value: Any = True, requires: Optional[str] = None,
                 events: Optional[List[str]] = None, delay: float = 0.0):
        self.role = role
        self.priority = priority
        self.key = key or role
        self.value = value
        self.requires = requires
        self.events = events if events is not None else []
        self.delay = delay
        self.seen: Dict[str, Any] = {}
        super().__init__()

    async def init_context(self, request: Any, context: Any, remote_object: Any = None) -> bool:
        self.events.append(f"start:{self.role}")
        if self.requires is not None:
            self.seen[self.requires] = context.get(self.requires)
        await asyncio.sleep(self.delay)
        context[self.key] = self.value
        self.events.append(f"end:{self.role}")
        return True

    async def has_role(self, context: Any) -> Any:
        return context.get(self.key, False)


class FailingAssessor(RoleAssessor):
    """Assessor raising from one of its steps."""

    def __init__(self, role: str, priority: int = 0, fail_on: str = "init_context",
                 error: Optional[Exception] = None):
        self.role = role
        self.priority = priority
        self.fail_on = fail_on
        self.error = error or RuntimeError(f"{role} exploded")
        super().__init__()

    async def init_context(self, request: Any, context: Any, remote_object: Any = None) -> bool:
        if self.fail_on == "init_context":
            raise self.error
        return True

    async def has_role(self, context: Any) -> Any:
        if self.fail_on == "has_role":
            raise self.error
        return True


class SlowAssessor(RoleAssessor):
    """Assessor that takes ``delay`` seconds in both steps."""

    def __init__(self, role: str, delay: float, priority: int = 0):
        self.role = role
        self.priority = priority
        self.delay = delay
        super().__init__()

    async def init_context(self, request: Any, context: Any, remote_object: Any = None) -> bool:
        await asyncio.sleep(self.delay)
        return True

    async def has_role(self, context: Any) -> Any:
        await asyncio.sleep(self.delay)
        return True


class AclConfigFactory:
    """Factory for ACL configs used across tests."""

    @staticmethod
    def create_acl_config() -> Dict[str, Any]:
        return {
            "rules": [
                {"allow": True, "role": "all"},
            ],
            "endpoints": {
                "post-create": {
                    "path": "/create",
                    "method": "create",
                    "verbs": ["post"],
                    "acl": {
                        "rules": [
                            {"allow": True, "role": "owner"},
                            {"allow": True, "role": "teamAdmin", "contextArgs": {"order": "order"}},
                        ]
                    }
                },
                "post-list": {
                    "path": "/list",
                    "verbs": ["post"],
                },
            },
        }
