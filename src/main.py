import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from textual.logging import TextualHandler

from models import PackageListModel
from providers import CatalogBuildError, PackageProvider
from runner import CommandRunner
from settings import settings
from tui import PackagesApp

log = logging.getLogger(__name__)


def _configure_logging(level: str, handler: logging.Handler) -> None:
    logging.root.handlers.clear()
    logging.basicConfig(level=level, handlers=[handler], force=True)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Browse locally installed pacman packages")
    parser.add_argument(
        "--package-manager",
        default=None,
        help="Package manager executable to query (default: pacman).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for a single package manager call.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log debug messages.",
    )
    args = parser.parse_args(argv)

    level = "DEBUG" if args.debug else str(settings.get("log_level", "WARNING")).upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "WARNING"
    stderr = Console(stderr=True)
    _configure_logging(level, RichHandler(console=stderr, show_path=False))

    if args.package_manager:
        settings.set("package_manager", args.package_manager)
    if args.timeout is not None:
        settings.set("command_timeout", args.timeout)

    log.debug("querying %s", settings.get("package_manager"))
    provider = PackageProvider(runner=CommandRunner(timeout=settings.get_timeout()))
    try:
        catalog = provider.build_catalog()
    except CatalogBuildError as exc:
        stderr.print(f"[bold red]error:[/] {escape(str(exc))}")
        if exc.__cause__ is not None:
            stderr.print(f"[dim]caused by {type(exc.__cause__).__name__}[/]")
        return 1

    theme = settings.get_theme()
    _configure_logging(level, TextualHandler())
    PackagesApp(PackageListModel(catalog), provider, theme).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
