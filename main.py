"""
Solar bill advisor entry point.

Three modes:
  1. serve      Run the HTTP API (POST /api/analyze-bill, POST /api/solar-suggestions).
  2. analyze    Bill text and/or known fields -> LLM parse -> recommendation, printed as JSON.
  3. recommend  Known numbers only -> deterministic recommendation (no LLM call).

Usage:
  python main.py [--config PATH] [--log-level LEVEL] serve [--host H] [--port P]
  python main.py analyze (--text TEXT | --text-file PATH) [--fields JSON] [--budget N] [--city NAME]
  python main.py recommend --units N [--total-cost N] [--cost-per-unit N] [--location S] [--budget N]
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from core.exceptions import ConfigError, SolarAdvisorError, StructuredOutputError
from core.schema import AnalyzeRequest
from services.recommendation_service import RecommendationService
from utils.config import AppConfig, load_config
from utils.logger import setup_logging

logger = logging.getLogger(__name__)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _fields_arg(raw: str | None) -> dict[str, Any] | None:
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SystemExit(f"--fields must be a JSON object: {e}")
    if not isinstance(data, dict):
        raise SystemExit("--fields must be a JSON object")
    return data


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_serve(args: argparse.Namespace, config: AppConfig) -> int:
    import uvicorn

    from api.app import create_app

    host = args.host or config.host
    port = args.port or config.port
    logger.info("Starting API on %s:%s (provider=%s)", host, port, config.llm.provider)
    uvicorn.run(create_app(config), host=host, port=port, log_level=config.log_level.lower())
    return 0


def cmd_analyze(args: argparse.Namespace, config: AppConfig) -> int:
    from pipeline.factory import build_pipeline

    text = args.text
    if args.text_file:
        text = Path(args.text_file).read_text(encoding="utf-8")
    request = AnalyzeRequest(
        text=text,
        fields=_fields_arg(args.fields),
        budget=args.budget,
        city=args.city,
    )
    try:
        result = build_pipeline(config).process(request)
    except StructuredOutputError as e:
        print(f"{e}\n--- raw reply ---\n{e.raw}", file=sys.stderr)
        return 1
    except SolarAdvisorError as e:
        print(str(e), file=sys.stderr)
        return 1
    _print_json(result.to_response())
    return 0


def cmd_recommend(args: argparse.Namespace, config: AppConfig) -> int:
    fields = {
        "unitsKWh": args.units,
        "totalCost": args.total_cost,
        "costPerUnit": args.cost_per_unit,
        "location": args.location,
    }
    outcome = RecommendationService(config.market).recommend(fields, budget=args.budget)
    _print_json(
        {
            "recommendation": outcome.recommendation.to_response(),
            "meta": {"usedDefaults": outcome.used_defaults},
        }
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Electric bill -> solar system recommendation")
    parser.add_argument("--config", default=None, help="YAML config path (default: config.yaml / CONFIG_PATH)")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(func=cmd_serve)

    analyze = sub.add_parser("analyze", help="Parse a bill with the LLM and size a system")
    source = analyze.add_mutually_exclusive_group()
    source.add_argument("--text", default=None, help="Bill text (e.g. OCR output)")
    source.add_argument("--text-file", default=None, help="File containing bill text")
    analyze.add_argument("--fields", default=None, help='Known fields as JSON, e.g. \'{"unitsKWh": 600}\'')
    analyze.add_argument("--budget", type=float, default=None)
    analyze.add_argument("--city", default=None)
    analyze.set_defaults(func=cmd_analyze)

    recommend = sub.add_parser("recommend", help="Size a system from known numbers (no LLM)")
    recommend.add_argument("--units", type=float, required=True, help="Monthly consumption, kWh")
    recommend.add_argument("--total-cost", type=float, default=None, help="Monthly bill amount")
    recommend.add_argument("--cost-per-unit", type=float, default=None, help="Currency per kWh")
    recommend.add_argument("--location", default=None)
    recommend.add_argument("--budget", type=float, default=None)
    recommend.set_defaults(func=cmd_recommend)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2
    setup_logging(args.log_level or config.log_level, stream=sys.stderr)
    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
