"""
Synthetic cafe dataset for trying the dashboard without a file.

Randomised on purpose; pass a seed for a reproducible table.
"""
import numpy as np
import pandas as pd
from datetime import date, timedelta
from typing import Optional

from bizpulse.data.schema import Table


DEMO_DAYS = 60
DEMO_PRODUCTS = ["Latte", "Espresso", "Cappuccino", "Croissant", "Sandwich"]
DEMO_COLUMNS = ["Date", "Product", "Revenue", "COGS", "Marketing", "Rent", "Salary"]

# Daily baselines per scenario
DEMO_BASELINES = {
    "growth": {"revenue": 120.0, "marketing": 8.0, "rent": 25.0, "salary": 35.0, "cogs": 35.0},
    "loss": {"revenue": 90.0, "marketing": 18.0, "rent": 25.0, "salary": 45.0, "cogs": 48.0},
}


def demo_source_name(kind: str) -> str:
    return f"demo_{kind}.csv"


def build_demo_data(kind: str = "growth",
                    seed: Optional[int] = None,
                    start: Optional[date] = None) -> Table:
    """
    Build DEMO_DAYS of daily sales rows.

    'growth' trends revenue up ~1%/day; 'loss' trends it down 0.5%/day with
    heavier costs.
    """
    if kind not in DEMO_BASELINES:
        raise ValueError(f"Unknown demo kind: {kind}. Must be one of: {', '.join(DEMO_BASELINES)}")

    rng = np.random.default_rng(seed)
    base = DEMO_BASELINES[kind]
    if start is None:
        start = date.today() - timedelta(days=DEMO_DAYS)

    rows = []
    for i in range(DEMO_DAYS):
        day = start + timedelta(days=i)
        trend = 1 + i * 0.01 if kind == "growth" else 1 - i * 0.005
        noise = 0.85 + rng.random() * 0.3

        revenue = max(10.0, base["revenue"] * trend * noise)
        cogs = max(1.0, base["cogs"] * trend * (0.9 + rng.random() * 0.25))
        marketing = max(1.0, base["marketing"] * (0.8 + rng.random() * 0.5))
        rent = base["rent"]
        salary = max(1.0, base["salary"] * (0.95 + rng.random() * 0.1))

        rows.append({
            "Date": day.isoformat(),
            "Product": DEMO_PRODUCTS[int(rng.integers(len(DEMO_PRODUCTS)))],
            "Revenue": f"{revenue:.2f}",
            "COGS": f"{cogs:.2f}",
            "Marketing": f"{marketing:.2f}",
            "Rent": f"{rent:.2f}",
            "Salary": f"{salary:.2f}",
        })

    df = pd.DataFrame(rows, columns=DEMO_COLUMNS)
    return Table.from_frame(df, source_name=demo_source_name(kind))
