#!/usr/bin/env python3
"""CLI for filing bug report emails as Azure DevOps work items.

Usage:
    bugtracker submit message.eml
    bugtracker resolve - < message.eml
    bugtracker submit message.eml --config config/bugtracker.yaml
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from bugtracker.email_intake import work_item_from_bytes
from bugtracker.workitem import (
    AzureDevOpsWorkItemProcessor,
    ConfigurationError,
)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Email to Azure DevOps bug CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("submit", "Create a bug from an email message"),
        ("resolve", "Show the target project and title without submitting"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("message", nargs="?", default="-", help="Path to .eml file, or - for stdin")
        sub.add_argument("--config", default=None, help="Path to bugtracker YAML config")

    return parser


def _read_message(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _parser().parse_args(argv)

    try:
        item = work_item_from_bytes(_read_message(args.message))
        processor = AzureDevOpsWorkItemProcessor.from_config(args.config)

        if args.command == "resolve":
            resolved = processor.resolve(item)
            print(f"resolved:{resolved.source}:{resolved.project}:{resolved.title}")
            return 0

        if args.command == "submit":
            resolved = asyncio.run(processor.process_work_item(item))
            print(f"created:{resolved.project}:{resolved.title}")
            return 0
    except ConfigurationError as err:
        print(f"invalid:{err}", file=sys.stderr)
        return 2
    except Exception as err:
        print(f"error:{err}", file=sys.stderr)
        return 1

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
