"""
Console entry point for the `prodesc` command.

Logging and the .env credentials are set up before the click group is
imported, so messages emitted while loading them use the CLI format.
"""

import sys
import logging

import click

from .utils import setup_logging
from ..core.utils.environment import setup_environment


def main(argv=None):
    """Run the CLI and exit with its status (130 when interrupted)."""
    argv = sys.argv[1:] if argv is None else list(argv)
    setup_logging(
        verbose='-v' in argv or '--verbose' in argv,
        quiet='-q' in argv or '--quiet' in argv,
    )
    setup_environment()

    from .cli import cli
    try:
        exit_code = cli.main(args=argv, prog_name='prodesc', standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except (click.exceptions.Abort, KeyboardInterrupt):
        # Rows are flushed one by one, so the next run resumes from here
        logging.warning("Interrupted by user")
        sys.exit(130)
    sys.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == '__main__':
    main()
