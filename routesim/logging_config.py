import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()


def configure(level: str = "INFO", verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=True,
                show_time=verbose,
                show_path=verbose,
            )
        ],
        force=True,
    )
