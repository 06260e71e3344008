from __future__ import annotations

import json
import logging
import signal
import sys
from datetime import datetime, timezone
from typing import Optional

import typer
from typer.core import TyperCommand

from . import __version__
from .models.config import LogLevel, RunConfig, TargetMode
from .modules.targets import ArgumentError, ResolveError
from .pipeline.context import RunContext
from .pipeline.runner import ReportState, run_report

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "ignore_unknown_options": True,
}

EPILOG = (
    "Examples: lsdom cpaneluser | lsdom -d example.com | lsdom -a | "
    "lsdom -U user1,user2,user3 | lsdom -F /path/to/userlist.txt"
)

VERSION_TEXT = "\n".join(
    [
        f"lsdom {__version__}",
        'Original script by Kevin "nake89" https://github.com/nake89/lsdom',
        'Edited by Hameem "HameemDakheel" https://github.com/HameemDakheel/lsdom',
        "Modifications for table output, enhanced domain collection, and multiple input methods.",
    ]
)

NO_DATA_MESSAGE = "No domain data to display."
INTERRUPTED_MESSAGE = "Loop interrupted by user. Exiting."

MODE_OPTIONS = {
    "-d": TargetMode.domain_owner,
    "-U": TargetMode.account_list,
    "-F": TargetMode.account_file,
    "-a": TargetMode.all_accounts,
    "--all": TargetMode.all_accounts,
}
CONFIG_OPTIONS = ("--uapi", "--whoowns", "--users-dir", "--log-level")
FIRST_TOKEN_KEY = "lsdom.first_token"

# typer may bundle its own click, so take UsageError from the classes typer raises
UsageError = next(cls for cls in typer.BadParameter.__mro__ if cls.__name__ == "UsageError")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "time": datetime.now(timezone.utc).isoformat(),
        }
        return json.dumps(payload)


def setup_logging(level: LogLevel = LogLevel.warning) -> None:
    # stdout carries the table, so logs go to stderr
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=LogLevel(level).value, handlers=[handler], force=True)


class LsdomCommand(TyperCommand):
    """Prints help when called bare and reports usage errors with status 1."""

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        if not args and not ctx.resilient_parsing:
            typer.echo(ctx.get_help())
            ctx.exit(0)
        ctx.meta[FIRST_TOKEN_KEY] = first_mode_token(args)
        try:
            return super().parse_args(ctx, args)
        except UsageError as exc:
            exc.exit_code = 1
            raise


def version_callback(value: bool) -> None:
    if value:
        typer.echo(VERSION_TEXT)
        raise typer.Exit()


def first_mode_token(args: list[str]) -> Optional[str]:
    """Return the first token that is not one of the hidden configuration options."""
    tokens = iter(args)
    for token in tokens:
        if token in CONFIG_OPTIONS:
            next(tokens, None)
            continue
        if token.split("=", 1)[0] in CONFIG_OPTIONS:
            continue
        return token
    return None


def token_mode(token: Optional[str]) -> TargetMode:
    if token is None:
        return TargetMode.single
    if token in MODE_OPTIONS:
        return MODE_OPTIONS[token]
    # short option with its value attached, e.g. -dexample.com
    if not token.startswith("--") and token[:2] in MODE_OPTIONS:
        return MODE_OPTIONS[token[:2]]
    return TargetMode.single


def select_mode(
    first_token: Optional[str],
    account: Optional[str],
    domain: Optional[str],
    users: Optional[str],
    user_file: Optional[str],
) -> tuple[TargetMode, Optional[str]]:
    mode = token_mode(first_token)
    arguments = {
        TargetMode.domain_owner: domain,
        TargetMode.account_list: users,
        TargetMode.account_file: user_file,
        TargetMode.all_accounts: None,
        TargetMode.single: account,
    }
    return mode, arguments[mode]


def _raise_interrupt(signum, frame) -> None:
    raise KeyboardInterrupt


def execute(context: RunContext) -> ReportState:
    """Run the report, turning an interrupt of an all-accounts run into exit status 1."""
    state = ReportState()
    if not context.config.interruptible:
        return run_report(context, typer.echo, state)

    previous = signal.signal(signal.SIGTERM, _raise_interrupt)
    try:
        return run_report(context, typer.echo, state)
    except KeyboardInterrupt:
        logger.info("all-accounts run interrupted", extra={"skipped": len(state.skipped)})
        typer.echo("")
        typer.echo(INTERRUPTED_MESSAGE)
        raise typer.Exit(1)
    finally:
        signal.signal(signal.SIGTERM, previous)


@app.command(cls=LsdomCommand, context_settings=CONTEXT_SETTINGS, epilog=EPILOG)
def main(
    ctx: typer.Context,
    account: Optional[str] = typer.Argument(
        None, metavar="[USERNAME]", help="Lists domains for the specified cPanel username."
    ),
    domain: Optional[str] = typer.Option(
        None, "-d", metavar="DOMAIN", help="Displays domains of the cPanel user who owns the input domain."
    ),
    users: Optional[str] = typer.Option(
        None, "-U", metavar="USER1,USER2,...", help="Lists domains for a comma-separated list of cPanel users."
    ),
    user_file: Optional[str] = typer.Option(
        None, "-F", metavar="FILEPATH", help="Lists domains for cPanel users listed in a file, one per line."
    ),
    all_accounts: bool = typer.Option(False, "-a", "--all", help="Lists domains for all cPanel users on the server."),
    version: bool = typer.Option(
        False, "-v", "--version", callback=version_callback, is_eager=True, help="Displays version information."
    ),
    uapi_command: str = typer.Option("uapi", "--uapi", envvar="LSDOM_UAPI", hidden=True),
    whoowns_command: str = typer.Option("/scripts/whoowns", "--whoowns", envvar="LSDOM_WHOOWNS", hidden=True),
    users_dir: str = typer.Option("/var/cpanel/users", "--users-dir", envvar="LSDOM_USERS_DIR", hidden=True),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level", envvar="LSDOM_LOG_LEVEL", case_sensitive=False, hidden=True
    ),
) -> None:
    """Lists parked, addon, and sub-domains for cPanel users in a table format."""
    first_token = ctx.meta.get(FIRST_TOKEN_KEY)
    mode, argument = select_mode(first_token, account, domain, users, user_file)
    config = RunConfig(
        mode=mode,
        argument=argument,
        uapi_command=uapi_command,
        whoowns_command=whoowns_command,
        users_dir=users_dir,
        log_level=log_level,
    )
    setup_logging(config.log_level)
    try:
        state = execute(RunContext.from_config(config))
    except ArgumentError as exc:
        logger.info("invalid arguments", extra={"mode": mode.value, "error": str(exc)})
        typer.echo(f"Error: {exc}", err=True)
        typer.echo("Use 'lsdom --help' for usage instructions.", err=True)
        raise typer.Exit(1)
    except ResolveError as exc:
        logger.info("target resolution failed", extra={"mode": mode.value, "reason": exc.reason})
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    if not state.has_data:
        typer.echo(NO_DATA_MESSAGE)
