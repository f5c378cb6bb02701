from __future__ import annotations

import argparse
import json
import sys
import os
import logging
from typing import Any, Dict, List

from rich.console import Console
from rich.table import Table

from event_rotator.core.config import RotatorConfig, load_config
from event_rotator.core.fetch import FeedError, FeedFetcher
from event_rotator.core.filters import PREDICATES
from event_rotator.core.models import EventView
from event_rotator.core.output import write_csv, write_json
from event_rotator.core import pipeline

console = Console()

def parse_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch an event feed and build display-ready event views")
    p.add_argument("--config", default="rotator.yml", help="Path to rotator.yml (skipped if missing)")
    p.add_argument("--url", default="", help="Feed base URL")
    p.add_argument("--since", default="", help="First day, YYYY-MM-DD")
    p.add_argument("--until", default="", help="Last day, YYYY-MM-DD")
    p.add_argument("--filter", default="", choices=["", *sorted(PREDICATES)], help="Eligibility filter")
    p.add_argument("--input", default="", help="Read the batch from a local JSON file instead of the feed")
    p.add_argument("--out", default="out/events.json", help="JSON output path")
    p.add_argument("--csv", default="", help="Optional CSV output path")
    p.add_argument("--log", default="out/rotator.log", help="Log output path")
    p.add_argument("--limit", type=int, default=20, help="Rows shown in the preview")
    return p.parse_args(argv)

def setup_logging(log_path: str) -> logging.Logger:
    os.makedirs(os.path.dirname(log_path) or ".", exist_ok=True)
    logger = logging.getLogger("event_rotator")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(message)s")

    # stdout
    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    # file
    fh = logging.FileHandler(log_path, encoding="utf-8")
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    return logger

def build_config(args: argparse.Namespace) -> RotatorConfig:
    options: Dict[str, Any] = {}
    if args.config and os.path.exists(args.config):
        options.update(load_config(args.config))

    if args.url:
        options["url"] = args.url
    if args.filter:
        options["filter_fn"] = args.filter

    cfg = RotatorConfig.from_options(options)
    if args.since or args.until:
        query = dict(cfg.query)
        if args.since:
            query["since"] = args.since
        if args.until:
            query["until"] = args.until
        cfg = RotatorConfig(url=cfg.url, query=query, filter_fn=cfg.filter_fn)
    return cfg

def read_batch(path: str) -> List[Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)

def render_preview(views: List[EventView], limit: int = 20) -> None:
    t = Table(title=f"Preview (first {min(limit, len(views))} of {len(views)})")
    t.add_column("location")
    t.add_column("period")
    t.add_column("website")
    for v in views[:limit]:
        t.add_row(v.location, v.period, v.website_url if v.has_website else "")
    console.print(t)

def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    log = setup_logging(args.log)

    try:
        cfg = build_config(args)
    except ValueError as e:
        log.error("Bad configuration: %s", e)
        return 2

    try:
        if args.input:
            log.info("Reading events from %s", args.input)
            batch = read_batch(args.input)
        else:
            with FeedFetcher(log=log) as fetcher:
                batch = fetcher.get_batch(cfg.request_url())
        views = pipeline.run(batch, cfg.filter_fn)
    except (FeedError, OSError, TypeError, ValueError) as e:
        log.error("Could not load events: %s", e)
        return 2

    write_json(args.out, views)
    if args.csv:
        write_csv(args.csv, views)

    render_preview(views, args.limit)
    log.info("Wrote JSON: %s", args.out)
    if args.csv:
        log.info("Wrote CSV: %s", args.csv)
    log.info("Wrote LOG: %s", args.log)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
