"""Human-readable health factor status and summaries."""
from __future__ import annotations

from datetime import datetime, timezone

from .config import ThresholdsConfig
from .fixed_point import q64_to_float
from .models import HealthFactor, ValuationTotals


def get_status(hf: HealthFactor, thresholds: ThresholdsConfig) -> str:
    if hf.unbounded:
        return "✅ Healthy (no debt)"
    if hf.is_liquidatable:
        return "💀 LIQUIDATABLE"
    value = hf.to_float()
    if value <= thresholds.hf_critical:
        return "🚨 CRITICAL"
    if value <= thresholds.hf_warning:
        return "⚠️ WARNING"
    return "✅ Healthy"


def _now_str() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def build_summary(
    hf: HealthFactor,
    totals: ValuationTotals,
    thresholds: ThresholdsConfig,
    label: str = "",
) -> str:
    """Multi-line report of one computation."""
    header = f"📊 {label}\n\n" if label else ""
    return (
        f"{header}"
        f"{get_status(hf, thresholds)}\n"
        f"\n"
        f"Weighted collateral: {q64_to_float(totals.collateral_q64):,.6f}\n"
        f"Debt: {q64_to_float(totals.debt_q64):,.6f}\n"
        f"HF: {hf} (Q64.64: {hf.to_q64()})\n"
        f"\n"
        f"{_now_str()} UTC"
    )
