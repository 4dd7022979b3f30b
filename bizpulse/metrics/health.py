"""
Business health score: a bounded 0-100 heuristic over KPI results.
"""
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List

from bizpulse.config import NO_PRODUCT
from bizpulse.metrics.kpis import KpiResult


BASE_SCORE = 50
MAX_DRIVERS = 4

# Upper score bounds per label; anything at or above the last bound is Growing
LABEL_BANDS = [
    (35, "Critical"),
    (55, "At-Risk"),
    (75, "Stable"),
]
TOP_LABEL = "Growing"

LABEL_TONES = {
    "Critical": "bad",
    "At-Risk": "warning",
    "Stable": "neutral",
    "Growing": "good",
}


@dataclass(frozen=True)
class HealthResult:
    score: int
    label: str
    summary: str
    drivers: tuple = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["drivers"] = list(self.drivers)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HealthResult":
        return cls(
            score=int(data["score"]),
            label=str(data["label"]),
            summary=str(data.get("summary", "")),
            drivers=tuple(data.get("drivers", [])),
        )


def cost_ratio(kpis: KpiResult) -> float:
    return kpis.cost / kpis.revenue if kpis.revenue > 0 else 1.0


def score_adjustments(kpis: KpiResult) -> List[tuple]:
    """
    Rule table, in evaluation order.

    Returns [(delta, driver)] for every rule that fired.
    """
    fired = []
    margin = kpis.margin_pct
    ratio = cost_ratio(kpis)
    aov = kpis.avg_order_value

    if kpis.profit < 0:
        fired.append((-30, "Negative profit (loss)."))
    else:
        fired.append((20, "Positive profit."))

    if margin < 0:
        fired.append((-10, "Negative margin."))
    elif margin < 10:
        fired.append((-10, "Thin margin (<10%)."))
    elif margin < 25:
        fired.append((5, "Healthy margin (10–25%)."))
    else:
        fired.append((15, "Strong margin (25%+)."))

    if ratio > 0.95:
        fired.append((-15, "Costs consuming most revenue."))
    elif ratio > 0.8:
        fired.append((-5, "Costs relatively high."))
    elif ratio < 0.6:
        fired.append((10, "Costs well-controlled."))

    if kpis.order_count >= 200:
        fired.append((5, "Sufficient volume."))
    elif kpis.order_count < 20:
        fired.append((-5, "Low volume (noisy)."))

    if 0 < aov < 20:
        fired.append((-3, "Low AOV."))
    elif aov >= 100:
        fired.append((3, "High AOV."))

    return fired


def health_label(score: int) -> str:
    for bound, label in LABEL_BANDS:
        if score < bound:
            return label
    return TOP_LABEL


def health_tone(label: str) -> str:
    """Status key ('bad', 'warning', 'neutral', 'good') for a label."""
    return LABEL_TONES.get(label, "neutral")


def health_summary(kpis: KpiResult) -> str:
    parts = []
    if kpis.profit < 0:
        parts.append("Business is currently operating at a loss.")
        parts.append("Main priority: reduce the largest costs and protect margin.")
    else:
        parts.append("Business is profitable.")
        if kpis.margin_pct < 10:
            parts.append("However, margin is thin: small cost increases can flip profit.")
        else:
            parts.append("Margin looks healthy, so you can scale the best-performing channels.")
    if kpis.top_product != NO_PRODUCT:
        parts.append(f'Top product: "{kpis.top_product}" (focus inventory & promotion).')
    return " ".join(parts)


def compute_health(kpis: KpiResult) -> HealthResult:
    """Score a KPI snapshot: base 50 plus rule adjustments, clamped to 0-100."""
    fired = score_adjustments(kpis)
    raw = BASE_SCORE + sum(delta for delta, _ in fired)
    score = max(0, min(100, int(round(raw))))

    return HealthResult(
        score=score,
        label=health_label(score),
        summary=health_summary(kpis),
        drivers=tuple(driver for _, driver in fired[:MAX_DRIVERS]),
    )
