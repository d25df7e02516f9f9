"""CLI entrypoint for inspecting and invoking hook plans."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from collections.abc import Callable
from typing import Any

import yaml

from hookwork.config import load_effective_config, load_hook_plan
from hookwork.deprecation import CONTEXT_DEPRECATION
from hookwork.errors import HookError
from hookwork.hook import Hook
from hookwork.logging_utils import configure_logging
from hookwork.models import DEMO_PLAN, HookPlan, TapKind, TapPlan
from hookwork.sequential import SequentialCompiler

logger = logging.getLogger(__name__)


def _recording_fn(tap_plan: TapPlan) -> Callable[..., Any]:
    name = tap_plan.name

    if tap_plan.kind is TapKind.CALLBACK:

        def on_callback(*args: Any) -> None:
            *values, done = args
            print(name, *values)
            done()

        return on_callback

    if tap_plan.kind is TapKind.DEFERRED:

        async def on_deferred(*values: Any) -> None:
            print(name, *values)

        return on_deferred

    def on_sync(*values: Any) -> None:
        print(name, *values)

    return on_sync


def build_hook(plan: HookPlan) -> Hook:
    hook = Hook(plan.args, plan.name, compiler=SequentialCompiler())
    for tap_plan in plan.taps:
        options = tap_plan.to_options()
        fn = _recording_fn(tap_plan)
        if tap_plan.kind is TapKind.CALLBACK:
            hook.tap_async(options, fn)
        elif tap_plan.kind is TapKind.DEFERRED:
            hook.tap_promise(options, fn)
        else:
            hook.tap(options, fn)
    return hook


def _run_order(plan: HookPlan, output_format: str) -> int:
    hook = build_hook(plan)
    if output_format == "json":
        payload = [
            {"name": tap.name, "kind": tap.kind.value, "stage": tap.stage, "before": tap.before or []}
            for tap in hook.taps
        ]
        print(json.dumps(payload, indent=2))
        return 0

    for position, tap in enumerate(hook.taps, start=1):
        line = f"{position}. {tap.name} stage={tap.stage} kind={tap.kind.value}"
        if tap.before:
            line += f" before={','.join(tap.before)}"
        print(line)
    return 0


def _run_invoke(plan: HookPlan, values: list[str]) -> int:
    if len(values) != len(plan.args):
        logger.error("Hook %s expects %s arguments (%s), got %s", plan.name, len(plan.args), ", ".join(plan.args), len(values))
        return 2

    hook = build_hook(plan)
    logger.info("Invoking hook %s with %s taps", plan.name, len(hook.taps))
    asyncio.run(hook.promise(*values))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ordered hook inspection and invocation")
    parser.add_argument("--log-level", help="Logging level override (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument("--config-dir", default=".", help="Directory containing .hookwork.yaml")

    sub = parser.add_subparsers(dest="command", required=True)

    order = sub.add_parser("order", help="Print the resolved execution order of a hook plan")
    order.add_argument("--plan", help="Hook plan YAML (defaults to the built-in demo plan)")
    order.add_argument("--format", choices=["text", "json"], default="text", help="Output format")

    run = sub.add_parser("run", help="Invoke a hook plan with the given argument values")
    run.add_argument("--plan", help="Hook plan YAML (defaults to the built-in demo plan)")
    run.add_argument("values", nargs="*", help="One value per declared hook argument")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_effective_config(args.config_dir)
    except (ValueError, yaml.YAMLError) as exc:
        configure_logging(level=args.log_level)
        logger.error("Invalid configuration in %s: %s", args.config_dir, exc)
        return 1
    configure_logging(config.logging, args.log_level)
    CONTEXT_DEPRECATION.reset(enabled=config.deprecations.warn_context)

    try:
        plan = load_hook_plan(args.plan) if args.plan else DEMO_PLAN
        if args.command == "order":
            return _run_order(plan, args.format)
        if args.command == "run":
            return _run_invoke(plan, args.values)
    except (HookError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
