"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from planjira.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    ImportRunError,
    PlanLoadError,
    ProviderError,
)


def main(argv: list[str] | None = None) -> int:
    import planjira.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    commands = {
        "import": cli._run_import,
        "cleanup": cli._run_cleanup,
        "transition": cli._run_transition,
        "comment": cli._run_comment,
    }

    try:
        return cli.asyncio.run(commands[args.command](args))
    except (ConfigError, PlanLoadError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except (AuthenticationError, ProviderError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except ImportRunError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except Exception as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
