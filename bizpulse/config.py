"""
Application configuration management.
"""
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional


def _default_data_dir() -> Path:
    env_dir = os.getenv("DATA_DIR")
    if env_dir:
        return Path(env_dir)
    return Path("./data")


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


@dataclass
class AppConfig:
    """Application configuration with environment overrides."""

    # Paths
    data_dir: Path = field(default_factory=_default_data_dir)

    # Environment
    app_env: str = field(default_factory=lambda: os.getenv("APP_ENV", "dev"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Remote sheet import (None = wait for the response)
    sheets_timeout_seconds: Optional[float] = field(
        default_factory=lambda: _optional_float("SHEETS_TIMEOUT_SECONDS")
    )

    # Feedback log retention
    feedback_limit: int = field(default_factory=lambda: int(os.getenv("FEEDBACK_LIMIT", "50")))

    # Trend rendering
    trend_max_points: int = field(default_factory=lambda: int(os.getenv("TREND_MAX_POINTS", "30")))

    # Preview / export sizes
    preview_rows: int = 8
    preview_columns: int = 8
    report_sample_rows: int = 10

    @property
    def mapping_store_path(self) -> Path:
        return self.data_dir / STORE_FILES["mappings"]

    @property
    def feedback_store_path(self) -> Path:
        return self.data_dir / STORE_FILES["feedback"]

    @property
    def is_prod(self) -> bool:
        return self.app_env.lower() == "prod"


# Global config instance
config = AppConfig()


# Local JSON stores
STORE_FILES = {
    "mappings": "mappings.json",
    "feedback": "feedback.json",
}

# Accepted upload extensions
UPLOAD_EXTENSIONS = ["csv", "xlsx", "xls"]

GOOGLE_SHEETS_EXPORT_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv&gid={gid}"
GOOGLE_SHEETS_SOURCE_NAME = "google-sheets.csv"

# Column role candidates, in priority order
ROLE_CANDIDATES = {
    "revenue": [
        "revenue", "sales", "amount", "total", "price",
        "value", "ordertotal", "net", "income",
    ],
    "cost": [
        "cost", "expense", "expenses", "cogs", "spend", "fees",
        "shipping", "delivery", "tax", "rent", "salary", "marketing",
    ],
    "product": ["product", "item", "name", "sku", "category"],
    "date": ["date", "day", "timestamp", "createdat", "orderdate"],
}

# Value used when no product column is mapped
NO_PRODUCT = "N/A"
UNKNOWN_PRODUCT = "Unknown"
