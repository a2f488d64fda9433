"""The command-line interface for gitsync."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console
from rich.markup import escape
from structlog.typing import FilteringBoundLogger

from gitsync.config import find_project_root, safe_load_config, set_nested_key
from gitsync.exceptions import GitSyncError
from gitsync.sync import PrompterProtocol, SyncMode, SyncOrchestrator, TerminalPrompter
from gitsync.utils import create_cli_logger
from gitsync.vcs import GitCli, VcsProtocol

from ._shared import ExitCode, exit_with_error

APP_HELP = "Interactively sync a working directory with its git remote."

VcsFactory = Callable[[Path, FilteringBoundLogger], VcsProtocol]


def resolve_mode(value: str | None) -> tuple[SyncMode, bool]:
    """Map the MODE argument to a sync mode.

    Args:
        value: Raw positional argument, or None when absent.

    Returns:
        The mode, and whether ``value`` was unrecognized. Unrecognized values
        select SAFE.

    Examples:
        >>> resolve_mode("force")
        (<SyncMode.FORCE: 'force'>, False)
        >>> resolve_mode("mirror")
        (<SyncMode.SAFE: 'safe'>, True)
    """
    if value is None:
        return SyncMode.SAFE, False
    try:
        return SyncMode(value), False
    except ValueError:
        return SyncMode.SAFE, True


def build_cli_overrides(
    *,
    remote_url: str | None = None,
    remote: str | None = None,
    branch: str | None = None,
    verbose: bool = False,
) -> dict[str, object] | None:
    """Translate command-line options into configuration overrides.

    Returns:
        Nested override dictionary, or None when no option was given.
    """
    overrides: dict[str, object] = {}
    if remote_url is not None:
        set_nested_key(overrides, "remote.url", remote_url)
    if remote is not None:
        set_nested_key(overrides, "remote.name", remote)
    if branch is not None:
        set_nested_key(overrides, "remote.branch", branch)
    if verbose:
        set_nested_key(overrides, "logging.level", "debug")
    return overrides or None


def _derive_console(base: Console, *, quiet: bool, no_color: bool) -> Console:
    """Return ``base``, or a console writing to the same file with flags applied."""
    if not quiet and not no_color:
        return base
    return Console(
        file=base.file,
        width=base.width,
        force_terminal=base.is_terminal,
        color_system=None if no_color else base.color_system,  # pyright: ignore[reportArgumentType]
        no_color=no_color or base.no_color,
        highlight=False,
        quiet=quiet,
    )


def _default_vcs_factory(root: Path, logger: FilteringBoundLogger) -> VcsProtocol:
    return GitCli(root, logger=logger)


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
    prompter: PrompterProtocol | None = None,
    vcs_factory: VcsFactory | None = None,
) -> App:
    """Create the gitsync CLI application.

    Args:
        console: Console for progress output and prompts.
        error_console: Console for error messages.
        exit_on_error: Exit on argument parsing errors instead of raising.
        prompter: Source of operator answers. Defaults to the terminal.
        vcs_factory: Builds the repository adapter for a project directory.
            Defaults to the git CLI adapter.

    Returns:
        The configured cyclopts App.
    """
    if console is None:
        console = Console(highlight=False)
    if error_console is None:
        error_console = Console(stderr=True)
    make_vcs = vcs_factory or _default_vcs_factory

    app = App(
        name="gitsync",
        help=APP_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.default
    def _sync(  # pyright: ignore[reportUnusedFunction]
        mode: Annotated[
            str | None,
            Parameter(help="'safe' (default) rebases and pushes; 'force' mirrors."),
        ] = None,
        /,
        *,
        remote_url: Annotated[
            str | None, Parameter(name="--remote-url", help="URL to set on the remote")
        ] = None,
        remote: Annotated[
            str | None, Parameter(name="--remote", help="Name of the remote")
        ] = None,
        branch: Annotated[
            str | None, Parameter(name="--branch", help="Branch to pull and push")
        ] = None,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        project_root: Annotated[
            Path | None,
            Parameter(name="--project-root", help="Directory to sync (default: cwd)"),
        ] = None,
        verbose: Annotated[
            bool, Parameter(name="--verbose", help="Enable debug logging")
        ] = False,
        quiet: Annotated[
            bool, Parameter(name="--quiet", help="Suppress progress output")
        ] = False,
        no_color: Annotated[
            bool, Parameter(name="--no-color", help="Disable colored output")
        ] = False,
    ) -> None:
        """Sync the project directory with its remote.

        Args:
            mode: Sync mode.
            remote_url: URL to set on the remote before syncing.
            remote: Name of the remote to sync with.
            branch: Branch to pull from and push to.
            config: Explicit path to config file.
            project_root: Project directory.
            verbose: Enable debug logging.
            quiet: Suppress progress output.
            no_color: Disable colored output.
        """
        sync_mode, unknown_mode = resolve_mode(mode)
        out = _derive_console(console, quiet=quiet, no_color=no_color)
        err = _derive_console(error_console, quiet=False, no_color=no_color)

        loaded_config, config_error = safe_load_config(
            config_path=config,
            project_root=project_root,
            cli_overrides=build_cli_overrides(
                remote_url=remote_url,
                remote=remote,
                branch=branch,
                verbose=verbose,
            ),
        )

        cli_logger = create_cli_logger(
            level=loaded_config.logging.level.value,
            log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
            log_file=loaded_config.logging.file,
            command="sync",
        )
        if config_error is not None:
            cli_logger.warning("config_load_failed", error=config_error)

        root = project_root.resolve() if project_root else find_project_root()

        if unknown_mode:
            out.log(f"[yellow]Unknown mode '{escape(str(mode))}'; running safe sync.[/yellow]")

        terminal_prompter: TerminalPrompter | None = None
        active_prompter = prompter
        if active_prompter is None:
            terminal_prompter = TerminalPrompter(
                _derive_console(console, quiet=False, no_color=no_color)
            )
            active_prompter = terminal_prompter

        orchestrator = SyncOrchestrator(
            make_vcs(root, cli_logger),
            active_prompter,
            loaded_config,
            console=out,
            logger=cli_logger,
        )

        try:
            _ = orchestrator.run(sync_mode)
        except GitSyncError as e:
            exit_with_error(str(e), ExitCode.FAILURE, console=err)
        except KeyboardInterrupt:
            cli_logger.warning("sync_interrupted", mode=sync_mode.value)
            err.print("\n[yellow]Interrupted.[/yellow]")
            sys.exit(ExitCode.INTERRUPTED)
        finally:
            if terminal_prompter is not None:
                terminal_prompter.close()

    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `gitsync` CLI."""
    cli = create_app()
    try:
        cli()
    except KeyboardInterrupt:
        sys.exit(ExitCode.INTERRUPTED)


if __name__ == "__main__":
    main()
