"""
Command-line front end for Neutron.

    neutron [OPTIONS] SOURCE

Validates the program by default; ``--run`` also executes it.

Author: xwest
"""

import logging
import sys

import click

from . import __version__
from .errors import NeutronError
from .lexer import tokenize_string
from .parser import format_tree
from .pipeline import check_source, run_source, read_source
from .interpreter import DEFAULT_ENTRY_POINT

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Lexing, parsing and semantic analysis passed"


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("source", type=click.Path(dir_okay=False))
@click.option("--tokens", "show_tokens", is_flag=True, help="Print the token stream.")
@click.option("--ast", "show_ast", is_flag=True, help="Print the syntax tree.")
@click.option("--run", "run_program", is_flag=True, help="Interpret the program after checking it.")
@click.option("--entry", "entry_point", default=DEFAULT_ENTRY_POINT, show_default=True,
              help="Function called after the top-level statements.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="neutron")
def cli(source, show_tokens, show_ast, run_program, entry_point, verbose):
    """Check, and optionally run, the Neutron program in SOURCE."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        text = read_source(source)
    except OSError as e:
        click.secho(f"error: cannot read '{source}': {e.strerror or e}", fg="red", err=True)
        sys.exit(1)

    if run_program:
        result = run_source(text, source, entry_point=entry_point)
    else:
        result = check_source(text, source)

    if show_tokens and result.program is not None:
        for token in tokenize_string(text, source):
            click.echo(token)

    if show_ast and result.program is not None:
        click.echo(format_tree(result.program))

    if not result.ok:
        _report(result.error)
        sys.exit(1)

    click.echo(SUCCESS_MESSAGE)
    if run_program:
        click.echo(str(result.value))


def _report(error: NeutronError):
    click.secho(f"{error.kind.value} error", fg="red", bold=True, err=True)
    click.echo(str(error).rstrip(), err=True)


def main(argv=None):
    """
    Console script entry point.

    Usage errors exit with status 1 rather than click's default of 2.
    """
    try:
        cli.main(args=argv, prog_name="neutron", standalone_mode=False)
    except click.UsageError as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
