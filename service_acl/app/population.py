"""
Context population.

Every registered assessor gets to seed the context before rules are
evaluated. Assessors are grouped into tiers by priority. Tiers run one after
the other, highest priority first, so facts written by one tier are visible
to every lower tier. Assessors inside a tier run concurrently and must not
depend on each other's writes.
"""

import asyncio
import time
from typing import Any, List, Optional

from shared.logging import get_logger
from shared.errors import AccessLayerException, AclTimeoutError, PopulationError
from shared.metrics import AclMetrics
from .assessors.base import RoleAssessor
from .registry import RoleAssessorRegistry


class ContextPopulator:
    """Runs ``init_context`` of every assessor, tier by tier."""

    def __init__(self, registry: RoleAssessorRegistry, timeout: Optional[float] = None,
                 metrics: Optional[AclMetrics] = None):
        self.logger = get_logger("acl.population")
        self.registry = registry
        self.timeout = timeout
        self.metrics = metrics

    async def populate(self, request: Any, context: Any = None, remote_object: Any = None) -> bool:
        """Populate ``context`` in place; True once every tier has finished."""
        start_time = time.time()
        try:
            if self.timeout is None:
                await self._run_tiers(request, context, remote_object)
            else:
                try:
                    await asyncio.wait_for(
                        self._run_tiers(request, context, remote_object),
                        timeout=self.timeout
                    )
                except asyncio.TimeoutError:
                    self.logger.error("Context population timed out", timeout=self.timeout)
                    raise AclTimeoutError("populate_context", self.timeout)
        finally:
            if self.metrics is not None:
                self.metrics.get_metric("acl_population_duration_seconds").observe(
                    time.time() - start_time
                )

        self.logger.debug(
            "Context populated",
            assessors=len(self.registry),
            duration_ms=(time.time() - start_time) * 1000
        )
        return True

    async def _run_tiers(self, request: Any, context: Any, remote_object: Any) -> None:
        for priority, group in self.registry.tiers():
            self.logger.debug(
                "Running population tier",
                priority=priority,
                roles=[assessor.role for assessor in group]
            )
            results = await asyncio.gather(
                *(self._init_one(assessor, request, context, remote_object) for assessor in group),
                return_exceptions=True
            )
            # The whole tier has settled; surface the first failure
            failures: List[BaseException] = [r for r in results if isinstance(r, BaseException)]
            if failures:
                raise failures[0]

    async def _init_one(self, assessor: RoleAssessor, request: Any, context: Any,
                        remote_object: Any) -> None:
        try:
            result = await assessor.init_context(request, context, remote_object)
        except asyncio.CancelledError:
            raise
        except AccessLayerException as e:
            self._record_failure(assessor, error=str(e))
            raise
        except Exception as e:
            self._record_failure(assessor, error=str(e))
            raise PopulationError(assessor.role, assessor.priority, str(e)) from e

        if result is False:
            self._record_failure(assessor, error="init_context reported failure")
            raise PopulationError(assessor.role, assessor.priority, "init_context reported failure")

    def _record_failure(self, assessor: RoleAssessor, error: Optional[str] = None) -> None:
        self.logger.error(
            "Role assessor failed to initialise context",
            role=assessor.role,
            priority=assessor.priority,
            error=error
        )
        if self.metrics is not None:
            self.metrics.record_assessor_error(assessor.role, "init_context")
