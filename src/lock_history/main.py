"""
Main CLI entry point for lock history analysis.
"""

import click
from dotenv import load_dotenv

from ..shared_utilities import configure_logging, get_logger
from .config import OUTPUT_FORMATS, HistoryConfig
from .core import LockHistoryTracker
from .errors import LockHistoryError
from .output_formatter import LockHistoryFormatter

# Load environment variables from .env file
load_dotenv()


@click.command()
@click.argument("library", required=False)
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(file_okay=False),
    help="Repository path "
    "[env: LOCK_HISTORY_REPO; default: GIT_DIR or current directory]",
)
@click.option(
    "--lock-file",
    help="Lock file path, absolute or relative to the repository root "
    "[env: LOCK_HISTORY_LOCK_FILE; default: composer.lock]",
)
@click.option(
    "--rev",
    help="Revision to walk history back from [env: LOCK_HISTORY_REV; default: HEAD]",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    help="Output format [env: LOCK_HISTORY_FORMAT; default: table]",
)
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(),
    help="Output file (default: stdout)",
)
@click.option(
    "--show-skipped",
    is_flag=True,
    help="List commits whose lock file could not be read",
)
@click.option("-q", "--quiet", is_flag=True, help="Only log errors")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def main(
    library: str | None,
    repo_path: str | None,
    lock_file: str | None,
    rev: str | None,
    output_format: str | None,
    output_file: str | None,
    show_skipped: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """
    Show when each version of LIBRARY was introduced into a lock file.

    LIBRARY falls back to LOCK_HISTORY_LIBRARY; options left out fall back to
    their LOCK_HISTORY_* environment variables, which may also come from .env.

    Supports composer.lock, Cargo.lock and package-lock.json. Only the local
    history is read.

    Examples:

        # Version timeline of a Composer package
        lock-history symfony/console

        # Cargo dependency in another checkout, as JSON
        lock-history serde --repo ../my-crate --lock-file Cargo.lock --format json

        # npm dependency, saved as CSV
        lock-history lodash --lock-file package-lock.json --format csv -o lodash.csv
    """
    if verbose:
        configure_logging(level="DEBUG")
    elif quiet:
        configure_logging(level="ERROR")
    else:
        configure_logging()

    logger = get_logger(__name__)

    try:
        config = HistoryConfig.from_env(
            library=library,
            lock_file=lock_file,
            repo_path=repo_path,
            rev=rev,
            output_format=output_format,
        )

        with LockHistoryTracker(config.repo_path) as tracker:
            result = tracker.analyze(config.lock_file, config.library, rev=config.rev)

    except (LockHistoryError, ValueError) as e:
        logger.error(f"Lock history failed: {e}")
        click.echo(f"Error: {e}", err=True)
        raise click.Abort() from e

    formatter = LockHistoryFormatter()

    if output_file:
        formatter.save_to_file(
            result, output_file, config.output_format, show_skipped=show_skipped
        )
        click.echo(f"Output saved to {output_file}")
    else:
        click.echo(
            formatter.format(result, config.output_format, show_skipped=show_skipped)
        )


if __name__ == "__main__":
    main()
