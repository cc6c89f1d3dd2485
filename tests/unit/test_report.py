"""Unit tests for status classification and summaries."""
from __future__ import annotations

from healthfactor.config import ThresholdsConfig
from healthfactor.fixed_point import ONE_Q64
from healthfactor.models import HealthFactor, ValuationTotals
from healthfactor.report import build_summary, get_status


def _hf(value: float) -> HealthFactor:
    return HealthFactor.finite(int(value * ONE_Q64))


class TestGetStatus:
    def test_unbounded(self, sample_thresholds: ThresholdsConfig) -> None:
        assert "no debt" in get_status(HealthFactor.infinite(), sample_thresholds)

    def test_liquidatable(self, sample_thresholds: ThresholdsConfig) -> None:
        assert "LIQUIDATABLE" in get_status(_hf(0.99), sample_thresholds)

    def test_critical(self, sample_thresholds: ThresholdsConfig) -> None:
        assert "CRITICAL" in get_status(_hf(1.02), sample_thresholds)

    def test_warning(self, sample_thresholds: ThresholdsConfig) -> None:
        assert "WARNING" in get_status(_hf(1.2), sample_thresholds)

    def test_healthy(self, sample_thresholds: ThresholdsConfig) -> None:
        assert get_status(_hf(3.2), sample_thresholds) == "✅ Healthy"


class TestBuildSummary:
    def test_contains_values(self, sample_thresholds: ThresholdsConfig) -> None:
        totals = ValuationTotals(collateral_q64=2 * ONE_Q64, debt_q64=ONE_Q64)
        summary = build_summary(_hf(2.0), totals, sample_thresholds, label="alice")
        assert "alice" in summary
        assert "HF: 2.0000" in summary
        assert f"Q64.64: {2 * ONE_Q64}" in summary
        assert "Weighted collateral: 2.000000" in summary
        assert "UTC" in summary

    def test_unbounded(self, sample_thresholds: ThresholdsConfig) -> None:
        summary = build_summary(
            HealthFactor.infinite(), ValuationTotals(), sample_thresholds
        )
        assert "HF: ∞" in summary
        assert summary.startswith("✅")
