"""Per-operation metrics for the conversion tools.

Counts calls, failures and latencies for each tool so health_check can
report them.
"""

import asyncio
import time
from dataclasses import dataclass, field

OPERATIONS = ("path_to_url", "url_to_path", "encode_component", "decode_component")


@dataclass
class ConversionMetrics:
    """Metrics for a single operation. Latencies are in milliseconds."""

    operation: str
    count: int = 0
    errors: int = 0
    times: list[float] = field(default_factory=list)

    def avg_ms(self) -> float:
        """Calculate average latency in milliseconds."""
        return sum(self.times) / len(self.times) if self.times else 0.0

    def max_ms(self) -> float:
        return max(self.times, default=0.0)

    def to_dict(self) -> dict:
        """Convert metrics to a JSON-serializable dictionary."""
        return {
            "count": self.count,
            "errors": self.errors,
            "avg_ms": self.avg_ms(),
            "max_ms": self.max_ms(),
        }


class MetricsCollector:
    """Metrics collector shared by all tool calls.

    Uses asyncio.Lock since the tools run on the server's event loop.
    """

    def __init__(self) -> None:
        self._metrics: dict[str, ConversionMetrics] = {
            operation: ConversionMetrics(operation) for operation in OPERATIONS
        }
        self._start_time = time.time()
        self._lock = asyncio.Lock()

    async def record(self, operation: str, duration_ms: float, success: bool) -> None:
        """Record one call of an operation.

        Args:
            operation: One of OPERATIONS
            duration_ms: Duration in milliseconds
            success: Whether the conversion succeeded

        Raises:
            ValueError: If operation is not a valid operation name
        """
        if operation not in self._metrics:
            raise ValueError(f"Invalid operation: {operation}")

        async with self._lock:
            metrics = self._metrics[operation]
            metrics.count += 1
            metrics.times.append(duration_ms)
            if not success:
                metrics.errors += 1

    def get_metrics(self, operation: str) -> ConversionMetrics | None:
        return self._metrics.get(operation)

    def to_dict(self) -> dict[str, dict]:
        """Return metrics for every operation keyed by operation name."""
        return {name: metrics.to_dict() for name, metrics in self._metrics.items()}

    def uptime_seconds(self) -> float:
        """Time elapsed since the collector was created."""
        return time.time() - self._start_time


_collector: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Get the process-wide collector, creating it on first use."""
    global _collector
    if _collector is None:
        _collector = MetricsCollector()
    return _collector


def reset_metrics_collector() -> None:
    """Discard the process-wide collector (for testing only)."""
    global _collector
    _collector = None
