#!/usr/bin/env python
"""
Analyze a spreadsheet from the command line.

Usage:
    python scripts/analyze_file.py sales.csv
    python scripts/analyze_file.py sales.xlsx --revenue "Net Sales" --cost COGS --cost Rent
    python scripts/analyze_file.py --sheet https://docs.google.com/spreadsheets/d/<id>/edit
    python scripts/analyze_file.py --demo growth --seed 7 --report report.json
"""
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bizpulse.analysis import AnalysisContext, run_analysis
from bizpulse.config import config
from bizpulse.data.loader import IngestionError, fetch_google_sheet, load_upload
from bizpulse.data.mapping import mapping_summary, suggest_mapping
from bizpulse.demo import build_demo_data
from bizpulse.exports import export_report_json
from bizpulse.ui.formatting import fmt_count, fmt_currency, fmt_percent


def load_source(args):
    """Resolve the CLI source arguments to a Table."""
    if args.demo:
        return build_demo_data(args.demo, seed=args.seed)
    if args.sheet:
        return fetch_google_sheet(args.sheet)
    path = Path(args.path)
    if not path.exists():
        raise IngestionError(f"File not found: {path}")
    return load_upload(path.name, path.read_bytes())


def apply_overrides(mapping, args):
    """Command-line role choices win over the suggested mapping."""
    overrides = {}
    if args.revenue is not None:
        overrides["revenue_column"] = args.revenue or None
    if args.cost:
        overrides["cost_columns"] = tuple(args.cost)
    if args.product is not None:
        overrides["product_column"] = args.product or None
    if args.date is not None:
        overrides["date_column"] = args.date or None
    return replace(mapping, **overrides) if overrides else mapping


def main():
    parser = argparse.ArgumentParser(description="Compute KPIs and health for a spreadsheet")
    parser.add_argument("path", nargs="?", help="CSV/XLSX/XLS file to analyze")
    parser.add_argument("--sheet", help="Google Sheets URL or spreadsheet ID")
    parser.add_argument("--demo", choices=["loss", "growth"], help="Use a synthetic dataset")
    parser.add_argument("--seed", type=int, default=None, help="Seed for --demo")
    parser.add_argument("--revenue", help="Revenue column (empty string to unset)")
    parser.add_argument("--cost", action="append", help="Cost column (repeatable)")
    parser.add_argument("--product", help="Product column (empty string to unset)")
    parser.add_argument("--date", help="Date column (empty string to unset)")
    parser.add_argument("--report", type=str, default=None, help="Write JSON report to this path")
    parser.add_argument("--verbose", action="store_true", help="Log ingestion details")

    args = parser.parse_args()

    if sum(bool(x) for x in (args.path, args.sheet, args.demo)) != 1:
        parser.error("Provide exactly one of: a file path, --sheet, or --demo")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        table = load_source(args)
    except IngestionError as e:
        print(f"✗ {e}")
        sys.exit(1)

    mapping = apply_overrides(suggest_mapping(table.columns), args)
    analysis = run_analysis(AnalysisContext(table=table, mapping=mapping))
    kpis = analysis.kpis
    health = analysis.health

    print("=" * 60)
    print(f"Business Pulse: {table.source_name}")
    print("=" * 60)
    print(f"Rows: {fmt_count(table.row_count)}    Columns: {len(table.columns)}")
    print()
    print("Mapping")
    print("-" * 40)
    for line in mapping_summary(analysis.mapping):
        print(f"  {line}")
    print()

    for warning in kpis.warnings:
        print(f"  ⚠ {warning}")
    if kpis.warnings:
        print()

    print("KPIs")
    print("-" * 40)
    print(f"  Revenue:    {fmt_currency(kpis.revenue)}")
    print(f"  Cost:       {fmt_currency(kpis.cost)}")
    print(f"  Profit:     {fmt_currency(kpis.profit)}")
    print(f"  Margin:     {fmt_percent(kpis.margin_pct)}")
    print(f"  Orders:     {fmt_count(kpis.order_count)}")
    print(f"  Avg order:  {fmt_currency(kpis.avg_order_value)}")
    print(f"  Top product: {kpis.top_product}")
    print()

    print(f"Health: {health.score}/100 ({health.label})")
    print("-" * 40)
    print(f"  {health.summary}")
    for driver in health.drivers:
        print(f"  • {driver}")
    print()

    if analysis.trend:
        first, last = analysis.trend[0], analysis.trend[-1]
        print(f"Trend: {len(analysis.trend)} days ({first.bucket_label} → {last.bucket_label})")
        print()

    print("Recommendations")
    print("-" * 40)
    for i, rec in enumerate(kpis.recommendations, start=1):
        print(f"  {i}. {rec}")

    if args.report:
        report_bytes, _ = export_report_json(analysis)
        Path(args.report).write_bytes(report_bytes)
        print()
        print(f"✓ Report written to {args.report}")


if __name__ == "__main__":
    main()
