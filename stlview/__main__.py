"""Run the stlview command line with ``python -m stlview``."""

import sys
from typing import Optional

import click

from stlview.cli.app import app


def main(argv: Optional[list[str]] = None) -> int:
    """Run the CLI and return its exit code.

    Returns:
        0 on success, the command's own code for ``typer.Exit``, 2 for usage
        errors, 130 when interrupted and 1 for any other failure
    """
    try:
        result = app(argv, standalone_mode=False)
    except (KeyboardInterrupt, click.exceptions.Abort):
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
