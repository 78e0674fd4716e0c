"""Main CLI entry point for postman-docs-sync command.

This module provides the Typer application that serves as the entry point
for the postman-docs-sync command-line tool. It uses options on the main
command rather than subcommands for a simpler user experience.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from src.cli.config import DEFAULT_CONFIG_PATH, ConfigLoader
from src.cli.export_command import ExportCommand
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.postman_client.errors import InvalidCredentialsError, SyncError

__version__ = "0.1.0"

app = typer.Typer(
    name="postman-docs-sync",
    help="""Export Postman collections as Markdown and track changes as GitLab issues.

QUICK START:
  postman-docs-sync                                   # Export, commit, push, reconcile issues
  postman-docs-sync --collection <uid>                # Export selected collection(s) only
  postman-docs-sync --skip-issues                     # Export and commit only
  postman-docs-sync --commit <sha>                    # Reconcile issues for an existing commit

Credentials are read from the environment or a .env file:
  POSTMAN_API_KEY, GITLAB_TOKEN, GITLAB_URL (optional)""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

# Module logger
logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"postman-docs-sync_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


@app.command()
def main_command(
    config_path: str = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Path to the YAML configuration file",
        metavar="PATH",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (a git working copy); overrides output_dir",
        metavar="DIR",
    ),
    workspace_id: Optional[str] = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Postman workspace id; overrides workspace_id",
        metavar="ID",
    ),
    collections: Optional[List[str]] = typer.Option(
        None,
        "--collection",
        help="Collection uid to export (can be used multiple times)",
        metavar="UID",
    ),
    commit: Optional[str] = typer.Option(
        None,
        "--commit",
        help="Skip the export and reconcile issues for this existing commit",
        metavar="SHA",
    ),
    skip_issues: bool = typer.Option(
        False,
        "--skip-issues",
        help="Export and commit without updating GitLab issues",
    ),
    no_push: bool = typer.Option(
        False,
        "--no-push",
        help="Commit without pushing (issues are then not reconciled)",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Export Postman collections as Markdown and track changes as GitLab issues."""
    if version:
        typer.echo(f"postman-docs-sync version {__version__}")
        raise typer.Exit()

    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    # Diffs of an unpushed commit cannot be read back from GitLab
    if no_push:
        skip_issues = True

    try:
        config = ConfigLoader.load(
            config_path,
            output_dir=output_dir,
            workspace_id=workspace_id,
            collections=collections,
            push=False if no_push else None,
            require_tracker=not skip_issues,
        )
    except InvalidCredentialsError as e:
        output.error(f"Authentication failed: {e}")
        raise typer.Exit(ExitCode.AUTH_ERROR)
    except SyncError as e:
        output.error(f"Failed to load config: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    export_cmd = ExportCommand(config, output_handler=output)
    exit_code = export_cmd.run(commit=commit, skip_issues=skip_issues)

    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
