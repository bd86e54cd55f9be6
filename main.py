# main.py
"""
Entry Point — Rent vs. Sell Calculator

Purpose
-------
Project, year by year, keeping a mortgaged home as a rental ("hold") against
selling it today and investing the proceeds ("sell"), then emit a Markdown report:
  1) Load form values (defaults, --config JSON, then --query / --years overrides).
  2) Recalculate: repair inputs, project Years 0..N, summarize the final year.
  3) Write the report (and the chart series JSON if requested).
  4) Print the summary and the share link that restores the scenario.

Usage
-----
    python main.py
    python main.py --config data/sample/inputs.json --out out.md --chart chart.json
    python main.py --query "purchasePrice=300000&yearsToHold=5" --as-of 2026-01-15
"""

from __future__ import annotations

import argparse
import logging
from datetime import date

from rent_or_sell.core.normalize import default_form
from rent_or_sell.inputs.inputs import AppInputs, InputsLoader, RunOptions
from rent_or_sell.inputs.url_state import from_query_string, share_url
from rent_or_sell.orchestrator.logs import configure_logging
from rent_or_sell.orchestrator.recalc import recalculate
from rent_or_sell.reports.generator import build_chart_series, fmt_currency, write_chart_json, write_report

logger = logging.getLogger("rent_or_sell.main")


def _iso_date(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {text!r}") from e


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for configurable runs."""
    p = argparse.ArgumentParser(description="Rent vs. Sell Calculator")
    p.add_argument("--config", type=str, default=None, help="Path to JSON inputs (form fields or {form, run}).")
    p.add_argument("--query", type=str, default=None, help="Share-link query string (or full URL) to restore a scenario.")
    p.add_argument("--years", type=str, default=None, help="Years to hold (overrides config/query).")
    p.add_argument("--as-of", type=_iso_date, default=None, help="Reference date YYYY-MM-DD (default: today).")
    p.add_argument("--out", type=str, default=None, help="Output Markdown path (overrides config).")
    p.add_argument("--chart", type=str, default=None, help="Write chart series JSON to this path.")
    p.add_argument("--base-url", type=str, default=None, help="Page URL for the printed share link.")
    p.add_argument("--verbose", action="store_true", help="Log repairs and debug details to stderr.")
    return p.parse_args(argv)


def load_app_inputs(args: argparse.Namespace, loader: InputsLoader | None = None) -> AppInputs:
    """
    Resolve form + run options: documented defaults < config file < --query < --years,
    with CLI flags overriding run options.
    """
    loader = loader or InputsLoader()
    if args.config:
        cfg = loader.load(args.config)
    else:
        try:
            cfg = loader.load()
        except FileNotFoundError:
            logger.debug("main: no default inputs found, using form defaults")
            cfg = AppInputs(form={}, run=RunOptions())

    as_of = args.as_of or cfg.run.as_of or date.today()
    form = {**default_form(as_of), **cfg.form}
    if args.query:
        form = from_query_string(args.query, base=form)
    if args.years is not None:
        form["yearsToHold"] = args.years

    return loader.with_overrides(
        cfg.model_copy(update={"form": form}),
        out=args.out,
        chart=args.chart,
        as_of=as_of,
        base_url=args.base_url,
    )


def main(argv: list[str] | None = None) -> int:
    """Run one recalculation and write rent_vs_sell.md (or chosen output)."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        cfg = load_app_inputs(args)
        logger.debug("main: as_of=%s out=%s chart=%s", cfg.run.as_of, cfg.run.out, cfg.run.chart)
        result = recalculate(cfg.form, as_of=cfg.run.as_of)

        write_report(cfg.run.out, result.inputs, result.years, result.summary, share_query=result.share_query)
        if cfg.run.chart:
            write_chart_json(cfg.run.chart, build_chart_series(result.years))
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}")
        raise

    s = result.summary
    print(f"Summary at Year {s.final_year}")
    print(f"  Rent Now + Sell Later:      {fmt_currency(s.hold_net_worth)}")
    print(f"  Sell Now + Invest Proceeds: {fmt_currency(s.sell_value)}")
    print(f"  Difference (Rent - Sell):   {fmt_currency(s.difference)}")
    print(f"  Better option:              {'Rent' if s.better_option == 'hold' else 'Sell'}")
    if result.repaired:
        print(f"Adjusted inputs: {', '.join(result.repaired)}")
    print(f"Report written to {cfg.run.out}")
    if cfg.run.chart:
        print(f"Chart data written to {cfg.run.chart}")
    print(f"Share: {share_url(cfg.run.base_url, result.form)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
