"""Score one candidate against one job from a JSON file.

Usage:
    python -m skillmatch input.json [--minimum-score 60] [--no-taxonomy] [--no-partial]

The input file holds ``{"attributes": [...], "requirements": [...], "options": {...}}``;
the result is printed as camelCase JSON.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from skillmatch.config import settings
from skillmatch.models.requests import MatchOptions
from skillmatch.services.matching_engine import enhanced_skill_match

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Weighted skill match of candidate attributes against job requirements")
    parser.add_argument("input", help="JSON file with attributes, requirements and optional options")
    parser.add_argument("--minimum-score", type=float, default=None)
    parser.add_argument("--no-taxonomy", action="store_true", help="ignore category/subcategory weights")
    parser.add_argument("--no-partial", action="store_true", help="disable partial matches")
    parser.add_argument("--indent", type=int, default=2)
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


def _load_payload(path: Path) -> dict:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("top-level JSON value must be an object")
    return payload


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(message)s")

    try:
        payload = _load_payload(Path(args.input))
    except (OSError, ValueError) as e:
        logger.error("Could not read %s: %s", args.input, e)
        return 2

    raw_options = payload.get("options") or {}
    if not isinstance(raw_options, dict):
        logger.error("\"options\" must be an object")
        return 2
    overrides = {}
    if args.minimum_score is not None:
        overrides["minimum_score"] = args.minimum_score
    if args.no_taxonomy:
        overrides["use_taxonomy"] = False
    if args.no_partial:
        overrides["include_partial_matches"] = False

    options = MatchOptions.model_validate({**raw_options, **overrides})

    result = enhanced_skill_match(payload.get("attributes"), payload.get("requirements"), options)
    sys.stdout.write(result.model_dump_json(by_alias=True, indent=args.indent) + "\n")
    return 0
