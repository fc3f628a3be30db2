"""Tests for conversion metrics collection."""

import asyncio

import pytest

from file_url.metrics import (
    OPERATIONS,
    ConversionMetrics,
    MetricsCollector,
    get_metrics_collector,
)


@pytest.fixture
def metrics_collector():
    """Create a fresh metrics collector for each test."""
    return MetricsCollector()


class TestConversionMetrics:
    """Test ConversionMetrics data structure."""

    def test_initialization(self):
        """Test ConversionMetrics initializes with zeros."""
        metrics = ConversionMetrics("path_to_url")
        assert metrics.count == 0
        assert metrics.errors == 0
        assert metrics.times == []
        assert metrics.avg_ms() == 0.0
        assert metrics.max_ms() == 0.0

    def test_averages(self):
        """Test average and max latency."""
        metrics = ConversionMetrics("url_to_path", count=3, times=[1.0, 2.0, 6.0])
        assert metrics.avg_ms() == 3.0
        assert metrics.max_ms() == 6.0

    def test_to_dict(self):
        """Test dictionary form."""
        metrics = ConversionMetrics("url_to_path", count=1, errors=1, times=[4.0])
        assert metrics.to_dict() == {
            "count": 1,
            "errors": 1,
            "avg_ms": 4.0,
            "max_ms": 4.0,
        }


class TestMetricsCollector:
    """Test MetricsCollector."""

    def test_all_operations_present(self, metrics_collector):
        """Test every operation is reported even before any call."""
        assert set(metrics_collector.to_dict()) == set(OPERATIONS)

    @pytest.mark.asyncio
    async def test_record_success(self, metrics_collector):
        """Test recording a successful call."""
        await metrics_collector.record("path_to_url", 1.5, success=True)

        metrics = metrics_collector.get_metrics("path_to_url")
        assert metrics.count == 1
        assert metrics.errors == 0
        assert metrics.times == [1.5]

    @pytest.mark.asyncio
    async def test_record_failure(self, metrics_collector):
        """Test recording a failed call counts an error."""
        await metrics_collector.record("url_to_path", 0.5, success=False)
        assert metrics_collector.get_metrics("url_to_path").errors == 1

    @pytest.mark.asyncio
    async def test_record_invalid_operation(self, metrics_collector):
        """Test unknown operations are rejected."""
        with pytest.raises(ValueError, match="Invalid operation"):
            await metrics_collector.record("hover", 1.0, success=True)

    @pytest.mark.asyncio
    async def test_concurrent_records(self, metrics_collector):
        """Test concurrent recording loses no calls."""
        await asyncio.gather(
            *(
                metrics_collector.record("encode_component", 1.0, success=True)
                for _ in range(50)
            )
        )
        assert metrics_collector.get_metrics("encode_component").count == 50

    def test_uptime(self, metrics_collector):
        """Test uptime is non-negative."""
        assert metrics_collector.uptime_seconds() >= 0


class TestGetMetricsCollector:
    """Test the process-wide collector."""

    def test_singleton(self):
        """Test the same collector is returned."""
        assert get_metrics_collector() is get_metrics_collector()
