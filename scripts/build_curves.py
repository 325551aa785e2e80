"""Build slider curves from a JSON batch file.

Usage:
  uv run python scripts/build_curves.py \\
      --input sliders.json \\
      --output curves.json \\
      --workers 4

Input format::

    {"sliders": [{"x": 0, "y": 0, "curve": "B|50:100|100:0", "repeat_count": 1, "length": 140}]}

Engine settings come from ``SLIDERCURVE_*`` environment variables (a local
``.env`` file is loaded first).
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from slidercurve.batch.builder import CurveBatchBuilder
from slidercurve.chart.parser import ChartFormatError, parse_slider
from slidercurve.chart.schemas import BatchResponse, CurveResponse, SliderBatchRequest
from slidercurve.config import CurveSettings
from slidercurve.geometry.models import SliderSpec

load_dotenv()


def main() -> None:
    ap = argparse.ArgumentParser(description="Build equal-distance slider curves")
    ap.add_argument("--input", required=True, help="JSON file with a 'sliders' list")
    ap.add_argument("--output", default="curves.json", help="Output JSON file path")
    ap.add_argument("--workers", type=int, default=None, help="Worker count (default: env/auto)")
    ap.add_argument("--processes", action="store_true", help="Use a process pool instead of threads")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = CurveSettings.from_env()
        if args.workers is not None:
            settings = replace(settings, max_workers=args.workers)
    except ValueError as exc:
        print(f"  [!] Invalid settings: {exc}", file=sys.stderr)
        sys.exit(1)

    # ------------------------------------------------------------------
    # 1. Load and validate input
    # ------------------------------------------------------------------
    print(f"1/3  Loading {args.input}...")
    try:
        request = SliderBatchRequest.model_validate_json(Path(args.input).read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        print(f"  [!] Could not read input: {exc}", file=sys.stderr)
        sys.exit(1)

    specs: dict[int, SliderSpec] = {}
    failures: dict[int, str] = {}
    for i, slider in enumerate(request.sliders):
        try:
            specs[i] = parse_slider(slider.start, slider.curve, slider.length, slider.repeat_count)
        except ChartFormatError as exc:
            failures[i] = str(exc)
    print(f"     {len(specs)} sliders parsed, {len(failures)} rejected")

    # ------------------------------------------------------------------
    # 2. Build curves
    # ------------------------------------------------------------------
    print("2/3  Building curves...")
    batch = CurveBatchBuilder(settings, use_processes=args.processes).build_all(specs)
    failures.update(batch.failures)

    # ------------------------------------------------------------------
    # 3. Write output
    # ------------------------------------------------------------------
    print(f"3/3  Writing {args.output}")
    response = BatchResponse(
        curves={i: CurveResponse.from_curve(curve) for i, curve in sorted(batch.curves.items())},
        failures=dict(sorted(failures.items())),
    )
    Path(args.output).write_text(response.model_dump_json(indent=2), encoding="utf-8")
    print(f"\n[OK] {len(response.curves)} curves built, {len(response.failures)} failed")


if __name__ == "__main__":
    main()
