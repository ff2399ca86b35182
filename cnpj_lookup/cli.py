"""Command line interface for looking up CNPJ numbers."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .client import RegistryLookupError
from .cnpj import ValidationError, normalize, validate
from .config import load_configuration
from .factory import build_client
from .io import write_records
from .models import CompanyRecord
from .presenter import render_text


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description="Look up Brazilian company registry numbers (CNPJ)")
    parser.add_argument("numbers", nargs="+", metavar="CNPJ", help="Registry numbers, formatted or digits only")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the fetched records to a CSV or Excel file",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    config = load_configuration(args.config) if args.config else {}
    client = build_client(config)

    records: List[CompanyRecord] = []
    failures = 0
    for raw in args.numbers:
        number = normalize(raw)
        try:
            validate(number)
            record = client.lookup(number)
        except (ValidationError, RegistryLookupError) as exc:
            failures += 1
            print(f"{raw}: {exc}", file=sys.stderr)
            continue
        records.append(record)
        if len(records) > 1:
            print()
        print(render_text(record, number))

    if args.output:
        write_records(args.output, records)
        logging.info("%s records written to %s", len(records), Path(args.output).resolve())

    logging.info(
        "Looked up %s numbers: %s succeeded, %s failed",
        len(args.numbers),
        len(records),
        failures,
    )
    return 1 if failures else 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
