"""
Export utilities for the analysis report and trend table.
"""
import json
import numpy as np
import pandas as pd
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Union

from bizpulse.analysis import Analysis
from bizpulse.config import config
from bizpulse.metrics.health import HealthResult
from bizpulse.metrics.kpis import KpiResult
from bizpulse.metrics.trend import CostBreakdownEntry, TrendPoint, trend_frame


def _json_default(value: Any) -> Any:
    """Serialise cell values json cannot handle natively."""
    if isinstance(value, (pd.Timestamp, datetime, date)):
        return value.isoformat()
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        return float(value)
    if isinstance(value, np.bool_):
        return bool(value)
    return str(value)


def build_report(analysis: Analysis,
                 generated_at: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Assemble the downloadable report payload.

    Contains the timestamp, source, active mapping, KPIs, health, trend,
    cost breakdown, the first sample rows and the full column list.
    """
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)

    table = analysis.table
    return {
        "generated_at": generated_at.isoformat(),
        "source": table.source_name or "unknown",
        "mapping": analysis.mapping.to_dict(),
        "kpis": analysis.kpis.to_dict(),
        "health": analysis.health.to_dict(),
        "trend": [p.to_dict() for p in analysis.trend],
        "cost_breakdown": [e.to_dict() for e in analysis.cost_breakdown],
        "sample_rows": table.head(config.report_sample_rows),
        "columns": table.columns,
    }


def export_report_json(analysis: Analysis,
                       generated_at: Optional[datetime] = None) -> tuple:
    """
    Export the analysis report to JSON.

    Returns: (json_bytes, filename)
    """
    report = build_report(analysis, generated_at=generated_at)
    day = report["generated_at"][:10]

    filename = f"report_{day}.json"
    json_bytes = json.dumps(report, indent=2, default=_json_default).encode("utf-8")

    return json_bytes, filename


def read_report_json(data: Union[bytes, str]) -> Dict[str, Any]:
    """
    Re-read an exported report.

    KPI, health, trend and breakdown sections come back as their result types.
    """
    report = json.loads(data)
    report["kpis"] = KpiResult.from_dict(report["kpis"])
    report["health"] = HealthResult.from_dict(report["health"])
    report["trend"] = [TrendPoint.from_dict(p) for p in report.get("trend", [])]
    report["cost_breakdown"] = [
        CostBreakdownEntry.from_dict(e) for e in report.get("cost_breakdown", [])
    ]
    return report


def export_trend_csv(trend: List[TrendPoint], filename: Optional[str] = None) -> tuple:
    """
    Export the daily trend to CSV bytes.

    Returns: (csv_bytes, filename)
    """
    if filename is None:
        filename = f"trend_{datetime.now().strftime('%Y%m%d')}.csv"

    csv_bytes = trend_frame(trend).to_csv(index=False).encode("utf-8")

    return csv_bytes, filename
