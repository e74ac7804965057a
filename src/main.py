"""Main entry point for the terminal to-do list."""
import logging

import click

from cli import CLI
from logging_setup import setup_logging
from store import TaskListStore
from view import TodoScreen

logger = logging.getLogger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--alt-screen/--no-alt-screen", default=True, envvar="TODO_ALT_SCREEN",
              show_default=True, help="Draw on the terminal's alternate screen.")
@click.option("--title-bar/--no-title-bar", default=False, envvar="TODO_TITLE_BAR",
              show_default=True, help="Show the 'Todo' title bar above the field.")
@click.option("--log-dir", type=click.Path(file_okay=False), default=".local/todo",
              envvar="TODO_LOG_DIR", show_default=True, help="Directory for todo.log.")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              default="INFO", envvar="TODO_LOG_LEVEL", show_default=True)
@click.option("--width", type=click.IntRange(min=1), default=None,
              help="Render width (defaults to the terminal width).")
def main(alt_screen: bool, title_bar: bool, log_dir: str, log_level: str, width) -> None:
    """Single-screen to-do list. Tasks live only as long as the process."""
    log_file = setup_logging(log_dir, log_level)
    logger.debug("Logging to %s", log_file)
    store = TaskListStore()
    screen = TodoScreen(store, width=width, title_bar=title_bar)
    CLI(screen, alt_screen=alt_screen).run()

if __name__ == "__main__":
    main()
