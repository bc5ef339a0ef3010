"""Main CLI interface for twig."""

import logging
import sys
from typing import Iterable, Iterator, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from twig.cli.config import ShellConfig
from twig.core.interpreter import Interpreter

# Shell output goes through click.echo so payloads are written byte for byte;
# rich only reads the prompt and renders logs.
console = Console(highlight=False, markup=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(level: str) -> logging.Logger:
    """Send the twig loggers to stderr so stdout only carries shell output."""
    logger = logging.getLogger("twig")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=err_console, show_path=False))
    logger.setLevel(level)
    logger.propagate = False
    return logger


def emit(message: str) -> None:
    click.echo(message)


def prompt_lines(prompt: str) -> Iterator[str]:
    """Read lines from the terminal, showing the prompt before each one."""
    while True:
        click.echo()
        try:
            yield console.input(prompt, markup=False, emoji=False)
        except EOFError:
            return


def input_lines(config: ShellConfig, stream) -> Iterable[str]:
    interactive = config.interactive
    if interactive is None:
        interactive = stream.isatty()
    if interactive:
        return prompt_lines(config.prompt)
    return stream


@click.command()
@click.argument("root_data", envvar="TWIG_ROOT_DATA")
@click.option("--prompt", default="> ", show_default=True, help="Prompt shown before each line")
@click.option(
    "--interactive/--batch",
    default=None,
    help="Force prompting on or off (default: prompt only on a terminal)",
)
@click.option("--verbose-errors", is_flag=True, help="Explain why a command failed")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Diagnostic log level (written to stderr)",
)
@click.version_option(package_name="twig-shell")
def main(
    root_data: str,
    prompt: str,
    interactive: Optional[bool],
    verbose_errors: bool,
    log_level: str,
):
    """twig - a toy branch and commit shell.

    ROOT_DATA is the payload of the initial commit on the master branch.
    Commands are read one per line from standard input:

    \b
      new branch <name> <branch>[~<n>]
      new commit '<data>' <branch>
      delete branch <name>
      examine
    """
    try:
        config = ShellConfig(
            root_data=root_data,
            prompt=prompt,
            interactive=interactive,
            verbose_errors=verbose_errors,
            log_level=log_level,
        )
    except ValidationError as e:
        raise click.UsageError(str(e)) from e

    logger = setup_logging(config.log_level)
    interpreter = Interpreter(config.root_data, emit, verbose_errors=config.verbose_errors)

    failures = interpreter.run(input_lines(config, sys.stdin))
    logger.info("Session finished with %d failed command(s)", failures)


if __name__ == "__main__":
    main()
