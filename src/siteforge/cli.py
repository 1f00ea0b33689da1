"""Command line interface: build a site, estimate its cost, or print the routing table."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

from .business import BusinessInfo
from .config import load_settings
from .engine import GenerationEngine
from .llm.routing import TaskRouter
from .llm.types import CostEstimate
from .utils import slugify
from .validators import BusinessValidationError

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate local business websites with Claude and Groq")
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings.yaml")

    subparsers = parser.add_subparsers(dest="command")
    build = subparsers.add_parser("build", help="Generate a site for a business")
    build.add_argument("--business", required=True, help="Business info file (YAML or JSON)")
    build.add_argument("--output", default=None, help="Output directory (default: ./<slug>)")
    build.add_argument("--dry-run", action="store_true", help="Print planned tasks and cost, make no calls")

    estimate = subparsers.add_parser("estimate", help="Estimate LLM cost for a business")
    estimate.add_argument("--business", required=True, help="Business info file (YAML or JSON)")

    subparsers.add_parser("routes", help="Print the task routing table")
    return parser


def load_business(path: str) -> BusinessInfo:
    # JSON is a subset of YAML, so one loader covers both formats.
    with Path(path).open("r", encoding="utf-8") as f:
        data: Dict[str, Any] = yaml.safe_load(f) or {}
    return BusinessInfo.from_dict(data)


def _print_estimate(estimate: CostEstimate) -> None:
    print(f"Claude: {estimate.claude_tokens} tokens, ${estimate.claude_cost:.4f}")
    print(f"Groq:   {estimate.groq_tokens} tokens, ${estimate.groq_cost:.4f}")
    print(f"Total:  ${estimate.total_cost:.4f} (saves ${estimate.savings:.4f}, {estimate.savings_percent:.1f}%)")


def _warn_missing_keys() -> None:
    for name in ("ANTHROPIC_API_KEY", "GROQ_API_KEY"):
        if not os.getenv(name):
            logger.warning("%s is not set; tasks on that provider will use template defaults", name)


def main() -> None:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args()
    command = args.command or "routes"

    config = load_settings(args.settings)
    logging.basicConfig(
        level=str(config.get("logging", {}).get("level", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if command == "routes":
        for task_type, provider in TaskRouter(config).table().items():
            print(f"{task_type.value:<36} {provider.value}")
        return

    info = load_business(args.business)
    engine = GenerationEngine(config)

    if command == "estimate" or args.dry_run:
        planned = engine.planned_task_types(info)
        print(f"{info.name}: {len(planned)} task(s)")
        if command == "build":
            for task_type in planned:
                print(f"- {task_type.value} -> {engine.router.get_provider(task_type).value}")
        _print_estimate(engine.estimate(info))
        return

    _warn_missing_keys()
    output_dir = args.output or str(Path(config["output"]["default_dir"]) / slugify(info.name))
    try:
        result = engine.run(info, output_dir, on_phase=lambda phase: print(f"[{phase}]"))
    except BusinessValidationError as exc:
        parser.exit(2, f"{exc}\n")

    stats = result["stats"]
    print(f"Wrote {stats.total_files} file(s), {stats.total_lines} lines to {output_dir}")
    print(f"LLM cost: ${stats.total_cost:.4f} in {stats.duration_ms} ms")
    if not result["ok"]:
        print("Missing files: " + ", ".join(result["validation"]["missing"]))


if __name__ == "__main__":
    main()
