"""Package entry point for ``python -m cnpj_lookup``."""
from __future__ import annotations

import sys

from . import cli


def main(argv: list[str] | None = None) -> int:
    """Invoke the lookup CLI, printing help when no number is given."""

    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        parser = cli.build_parser(prog="python -m cnpj_lookup")
        parser.print_help()
        return 2

    return cli.main(argv)


if __name__ == "__main__":  # pragma: no cover - module entry point
    sys.exit(main())
