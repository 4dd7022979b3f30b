"""
Column role mapping: which uploaded columns hold revenue, cost, product and date.

Auto-mapping is a best-effort name heuristic; every role stays user-overridable.
"""
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence

from bizpulse.config import ROLE_CANDIDATES


_SEPARATORS = re.compile(r"[\s_\-]+")


def normalize_key(name: str) -> str:
    """Lower-case, trim and drop whitespace, underscores and hyphens."""
    return _SEPARATORS.sub("", (name or "").lower().strip())


def suggest_column(columns: Sequence[str], candidates: Sequence[str]) -> Optional[str]:
    """
    Pick the column best matching a candidate keyword list.

    Pass 1 looks for an exact normalized match, walking candidates in order.
    Pass 2 accepts a substring match in either direction. Candidate order,
    not column order, breaks ties.
    """
    normalized = [(col, normalize_key(col)) for col in columns]
    normalized = [(col, key) for col, key in normalized if key]

    for cand in candidates:
        cand_key = normalize_key(cand)
        for col, key in normalized:
            if key == cand_key:
                return col

    for cand in candidates:
        cand_key = normalize_key(cand)
        for col, key in normalized:
            if cand_key in key or key in cand_key:
                return col

    return None


@dataclass(frozen=True)
class ColumnRoleMapping:
    """Assignment of table columns to semantic roles."""
    revenue_column: Optional[str] = None
    cost_columns: tuple = field(default_factory=tuple)
    product_column: Optional[str] = None
    date_column: Optional[str] = None

    def __post_init__(self):
        # Ordered set semantics for cost columns
        object.__setattr__(
            self, "cost_columns",
            tuple(dict.fromkeys(c for c in self.cost_columns if c)),
        )
        for role in ("revenue_column", "product_column", "date_column"):
            if not getattr(self, role):
                object.__setattr__(self, role, None)

    def resolve(self, columns: Sequence[str]) -> "ColumnRoleMapping":
        """Drop references to columns that are not in the table."""
        available = set(columns)

        def keep(col: Optional[str]) -> Optional[str]:
            return col if col in available else None

        return ColumnRoleMapping(
            revenue_column=keep(self.revenue_column),
            cost_columns=tuple(c for c in self.cost_columns if c in available),
            product_column=keep(self.product_column),
            date_column=keep(self.date_column),
        )

    def toggle_cost_column(self, column: str) -> "ColumnRoleMapping":
        if column in self.cost_columns:
            costs = tuple(c for c in self.cost_columns if c != column)
        else:
            costs = self.cost_columns + (column,)
        return replace(self, cost_columns=costs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "revenue_column": self.revenue_column,
            "cost_columns": list(self.cost_columns),
            "product_column": self.product_column,
            "date_column": self.date_column,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColumnRoleMapping":
        costs = data.get("cost_columns") or []
        if not isinstance(costs, (list, tuple)):
            costs = []
        return cls(
            revenue_column=data.get("revenue_column") or None,
            cost_columns=tuple(str(c) for c in costs),
            product_column=data.get("product_column") or None,
            date_column=data.get("date_column") or None,
        )


def suggest_mapping(columns: Sequence[str]) -> ColumnRoleMapping:
    """
    Best-guess role mapping for a column list.

    Only the single best cost column is auto-selected; more can be added by hand.
    """
    cost = suggest_column(columns, ROLE_CANDIDATES["cost"])
    return ColumnRoleMapping(
        revenue_column=suggest_column(columns, ROLE_CANDIDATES["revenue"]),
        cost_columns=(cost,) if cost else (),
        product_column=suggest_column(columns, ROLE_CANDIDATES["product"]),
        date_column=suggest_column(columns, ROLE_CANDIDATES["date"]),
    )


def mapping_summary(mapping: ColumnRoleMapping) -> List[str]:
    """Human-readable lines describing the active mapping."""
    return [
        f"Date: {mapping.date_column or '—'}",
        f"Revenue: {mapping.revenue_column or '—'}",
        f"Costs: {', '.join(mapping.cost_columns) if mapping.cost_columns else '—'}",
        f"Product: {mapping.product_column or '—'}",
    ]
