from __future__ import annotations

import argparse
from typing import List, Optional

from rulerun import __version__
from rulerun.cli.rule_commands import load_settings, rule_list, rule_run, rule_trigger
from rulerun.utils.logging import configure_logging


def _add_connection_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--url", help="Base URL of the rules API (env: RULERUN_URL)")
    parser.add_argument("--api-key", dest="api_key", help="Bearer token (env: RULERUN_API_KEY)")
    parser.add_argument(
        "--output",
        choices=["table", "json"],
        default="table",
        help="Output format",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rulerun", description="Run and list remote rules")
    parser.add_argument("--version", action="version", version=f"rulerun {__version__}")
    parser.add_argument("--log-level", dest="log_level", help="Override RULERUN_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Start a rule execution and wait for it")
    run.add_argument("rule_id")
    run.add_argument("--interval", type=int, help="Seconds between status checks")
    run.add_argument("--timeout", type=int, help="Maximum seconds to wait")
    _add_connection_args(run)
    run.set_defaults(func=rule_run)

    lst = sub.add_parser("list", help="List one page of rules")
    lst.add_argument("--page-size", dest="page_size", type=int)
    lst.add_argument("--page-number", dest="page_number", type=int, default=1)
    _add_connection_args(lst)
    lst.set_defaults(func=rule_list)

    trig = sub.add_parser("trigger", help="Fire a rule execution without waiting")
    trig.add_argument("rule_id")
    _add_connection_args(trig)
    trig.set_defaults(func=rule_trigger)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or load_settings().log_level)
    args.func(args)


if __name__ == "__main__":
    main()
