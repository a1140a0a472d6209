"""
Shared metrics configuration for the Server ACL.
"""

from typing import Any, Dict, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram


class AclMetrics:
    """Prometheus metrics for decisions and context population."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        # A private registry keeps several engines in one process apart
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up ACL metrics."""
        self._metrics["acl_decisions_total"] = Counter(
            "acl_decisions_total",
            "Total ACL decisions",
            ["endpoint", "outcome"],
            registry=self.registry
        )

        self._metrics["acl_decision_duration_seconds"] = Histogram(
            "acl_decision_duration_seconds",
            "ACL decision duration in seconds",
            registry=self.registry
        )

        self._metrics["acl_population_duration_seconds"] = Histogram(
            "acl_population_duration_seconds",
            "Context population duration in seconds",
            registry=self.registry
        )

        self._metrics["acl_assessor_errors_total"] = Counter(
            "acl_assessor_errors_total",
            "Total role assessor failures",
            ["role", "phase"],
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_decision(self, endpoint: str, outcome: str):
        """Record a decision outcome."""
        self._metrics["acl_decisions_total"].labels(
            endpoint=endpoint or "",
            outcome=outcome
        ).inc()

    def record_assessor_error(self, role: str, phase: str):
        """Record an assessor failure."""
        self._metrics["acl_assessor_errors_total"].labels(role=role, phase=phase).inc()

    def sample(self, name: str, labels: Optional[Dict[str, str]] = None) -> Optional[float]:
        """Read back a sample value from the registry."""
        return self.registry.get_sample_value(name, labels or {})
