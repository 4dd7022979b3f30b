"""
Uploaded table structure and column normalisation.
"""
import pandas as pd
from dataclasses import dataclass, field
from typing import Any, Dict, List


def normalise_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Coerce a parsed sheet into the uniform table shape.

    Column names become unique, non-empty strings (insertion order kept) and
    every missing cell becomes "".
    """
    df = df.copy()

    names: List[str] = []
    seen: Dict[str, int] = {}
    for i, col in enumerate(df.columns):
        name = str(col).strip() if col is not None else ""
        if not name:
            name = f"column_{i + 1}"
        if name in seen:
            seen[name] += 1
            name = f"{name}_{seen[name]}"
        else:
            seen[name] = 0
        names.append(name)
    df.columns = names

    df = df.astype(object).where(df.notna(), "")
    return df.reset_index(drop=True)


@dataclass(frozen=True, eq=False)
class Table:
    """An uploaded sheet: ordered columns plus ordered rows of raw cells."""
    frame: pd.DataFrame
    source_name: str = ""

    @classmethod
    def from_frame(cls, df: pd.DataFrame, source_name: str = "") -> "Table":
        return cls(frame=normalise_frame(df), source_name=source_name)

    @classmethod
    def from_records(cls, records: List[Dict[str, Any]],
                     columns: List[str], source_name: str = "") -> "Table":
        df = pd.DataFrame.from_records(records, columns=columns)
        return cls.from_frame(df, source_name=source_name)

    @property
    def columns(self) -> List[str]:
        return list(self.frame.columns)

    @property
    def row_count(self) -> int:
        return len(self.frame)

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return self.frame.to_dict(orient="records")

    def head(self, n: int) -> List[Dict[str, Any]]:
        return self.frame.head(n).to_dict(orient="records")

    def preview(self, n_rows: int, n_cols: int) -> pd.DataFrame:
        return self.frame.iloc[:n_rows, :n_cols]


def get_column_info(table: Table) -> pd.DataFrame:
    """Get summary info about all columns (filled cells, distinct values)."""
    info = []
    for col in table.columns:
        series = table.frame[col]
        filled = series.astype(str).str.strip() != ""
        info.append({
            "column": col,
            "filled": int(filled.sum()),
            "empty_pct": f"{(1 - filled.mean()) * 100:.1f}%" if len(series) else "0.0%",
            "unique": int(series[filled].nunique()),
        })
    return pd.DataFrame(info)
