"""
Command-line entrypoint: classify image files as CT or MRI.

Decodes each image (Pillow), runs the analysis pipeline and prints the
verdicts as text or JSON, or writes them to CSV.

Usage:
  ctmri-analyze slice1.png slice2.jpg
  ctmri-analyze scans/*.png --format csv --output verdicts.csv
  py -m ctmri_analyzer.cli slice.png --format json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence

import pandas as pd

from ctmri_analyzer.analysis_engine import (
    AnalysisResult,
    analyze_raster,
    modality_name,
    probability_label,
)
from ctmri_analyzer.config import get_settings
from ctmri_analyzer.core.exceptions import AnalysisError
from ctmri_analyzer.ctmri_logging import configure_structlog, get_logger
from ctmri_analyzer.ingestion import load_raster

logger = get_logger(__name__)

USER_ERROR_MESSAGE = "We could not analyse this file. Please try a different image."


def analyze_file(path: Path, *, max_side: int, min_side: int) -> AnalysisResult:
    """Decode one image and analyse it."""
    raster = load_raster(path, max_side=max_side, min_side=min_side)
    return analyze_raster(raster)


def _result_row(path: Path, result: AnalysisResult) -> dict[str, Any]:
    """Flat CSV/JSON row: verdict, likelihood, top reasons and one column per feature."""
    row: dict[str, Any] = {
        "file": str(path),
        "label": result.label,
        "modality": modality_name(result.label),
        "probability": round(result.probability, 6),
        "likelihood": probability_label(result.label, result.probability),
        "rationale": " | ".join(result.rationale),
    }
    for item in result.feature_contributions():
        row[item.feature] = round(item.value, 6)
    row["error"] = ""
    return row


def _error_row(path: Path, message: str) -> dict[str, Any]:
    return {"file": str(path), "label": "", "error": message}


def _render_text(path: Path, result: AnalysisResult) -> str:
    lines = [
        f"{path}: {modality_name(result.label)} ({probability_label(result.label, result.probability)})",
    ]
    lines.extend(f"  - {line}" for line in result.rationale)
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="ctmri-analyze",
        description="Estimate whether imaging slices are CT or MRI and explain why",
    )
    parser.add_argument("images", nargs="+", type=Path, help="PNG/JPEG slices to analyse")
    parser.add_argument(
        "--format",
        choices=("text", "json", "csv"),
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write output to this file instead of stdout")
    parser.add_argument(
        "--max-side",
        type=int,
        default=settings.max_side,
        help=f"Longest side after downscaling (default: {settings.max_side}, env CTMRI_MAX_SIDE)",
    )
    parser.add_argument(
        "--min-side",
        type=int,
        default=settings.min_side,
        help=f"Minimum side after resizing (default: {settings.min_side}, env CTMRI_MIN_SIDE)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint. Returns 0 when every image was analysed, 1 otherwise."""
    settings = get_settings()
    configure_structlog(settings.log_level, settings.log_format)
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_side < 1 or args.min_side < 1:
        parser.error("--max-side and --min-side must be positive")

    rows: list[dict[str, Any]] = []
    blocks: list[str] = []
    failures = 0
    for path in args.images:
        try:
            result = analyze_file(path, max_side=args.max_side, min_side=args.min_side)
        except AnalysisError as e:
            failures += 1
            logger.warning("image_analysis_failed", image=str(path), error=str(e))
            rows.append(_error_row(path, str(e)))
            blocks.append(f"{path}: {USER_ERROR_MESSAGE}")
            continue
        logger.info("image_analyzed", image=str(path), label=result.label, probability=round(result.probability, 4))
        row = _result_row(path, result)
        row["result"] = result.to_dict()
        rows.append(row)
        blocks.append(_render_text(path, result))

    if args.format == "csv":
        df = pd.DataFrame([{k: v for k, v in r.items() if k != "result"} for r in rows])
        if args.output is not None:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(args.output, index=False)
            logger.info("cli_csv_saved", path=str(args.output), rows=len(df))
        else:
            df.to_csv(sys.stdout, index=False)
    else:
        if args.format == "json":
            payload = [
                {"file": r["file"], **r["result"]} if "result" in r else r
                for r in rows
            ]
            text = json.dumps(payload, indent=2)
        else:
            text = "\n\n".join(blocks)
        if args.output is not None:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(text + "\n", encoding="utf-8")
        else:
            print(text)

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
