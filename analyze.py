"""
CSV analyst: CLI entry point.

Usage:
    python analyze.py <csv_file> [<csv_file> ...] -q <question> [-m <model>] [-o <output.json>]

The first file is the primary dataset.  When several files are given they
are all offered for comparison; a question containing "compare" then gets
the comparison prompt.  The result is written as JSON in the same shape
the HTTP endpoint returns ({response, chart?} or {error}).
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from analysis_flow.orchestrator import AnalysisOrchestrator
from dto.analysis import AnalysisRequest, AnalysisResponse
from dto.dataset import Dataset
from errors import AnalysisError
from settings import Settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
logger = logging.getLogger(__name__)


def _load_dataset(path: str) -> Dataset:
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return Dataset(name=Path(path).name, raw_text=text)


def build_request(paths: List[str], question: str, model: Optional[str] = None) -> AnalysisRequest:
    datasets = [_load_dataset(p) for p in paths]
    primary = datasets[0]
    return AnalysisRequest(
        question=question,
        primary_dataset=primary,
        file_name=primary.name,
        model_id=model,
        comparison_datasets=datasets if len(datasets) > 1 else [],
    )


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Ask a natural-language question about one or more CSV files.",
    )
    parser.add_argument(
        "csv_files",
        nargs="+",
        help="CSV file(s) to analyse; the first is the primary dataset",
    )
    parser.add_argument(
        "-q",
        "--question",
        required=True,
        help="Question to ask about the data",
    )
    parser.add_argument(
        "-m",
        "--model",
        default=None,
        help="Model identifier (default: ANALYSIS_MODEL or the provider default)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output JSON file path (default: print to stdout)",
    )
    args = parser.parse_args(argv)

    for path in args.csv_files:
        if not os.path.isfile(path):
            logger.error("File not found: %s", path)
            return 1

    request = build_request(args.csv_files, args.question, args.model)
    try:
        settings = Settings.from_env()
    except AnalysisError as exc:
        logger.error("Configuration error: %s", exc.message)
        result = AnalysisResponse.failure(exc.message, exc.status_code)
    else:
        result = AnalysisOrchestrator(settings).analyze(request)

    json_str = json.dumps(result.to_body(), indent=2, ensure_ascii=False)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(json_str)
        logger.info("Output written to %s", args.output)
    else:
        print(json_str)

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
