from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import ConfigError, Settings, load_settings
from .figure import build_sankey_figure, fig_to_html_bytes
from .pipeline import run_pipeline

"""Command line entrypoint.

    sankey-flows flows.csv                      # graph JSON on stdout
    sankey-flows flows.csv --format html -o out.html
"""

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

LOGGER_NAME = "sankey_flows"


class LabeledFormatter(logging.Formatter):
    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def setup_logging(verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sankey-flows", description="Turn a flows CSV into a Sankey graph.")
    p.add_argument("input", type=Path, help="CSV file in pair (source,target,value) or path (path,value) form")
    p.add_argument("--config", type=Path, default=None, help="YAML settings file")
    p.add_argument("--format", choices=["json", "html"], default="json")
    p.add_argument("-o", "--output", type=Path, default=None, help="write here instead of stdout")
    p.add_argument("--title", default=None, help="chart title (html only)")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logging(args.verbose)

    try:
        settings = load_settings(args.config) if args.config else Settings()
    except ConfigError as e:
        logger.error("%s", e)
        return EXIT_FAILURE

    try:
        text = args.input.read_text(encoding="utf-8-sig")
    except OSError as e:
        logger.error("cannot read %s: %s", args.input, e)
        return EXIT_FAILURE

    result = run_pipeline(text=text, settings=settings)
    if not result.ok:
        logger.error("%s", result.error)
        return EXIT_FAILURE

    logger.info(
        "graph: %d nodes, %d links, total flow %g",
        len(result.graph.nodes),
        len(result.graph.links),
        result.graph.total_flow,
    )

    if args.format == "html":
        fig = build_sankey_figure(result.graph, title=args.title or settings.title, value_suffix=settings.value_suffix)
        data = fig_to_html_bytes(fig)
    else:
        data = json.dumps(result.graph.to_dict(), ensure_ascii=False, indent=2).encode("utf-8")

    if args.output:
        args.output.write_bytes(data)
        logger.info("wrote %s", args.output)
    else:
        sys.stdout.write(data.decode("utf-8") + "\n")
    return EXIT_SUCCESS
