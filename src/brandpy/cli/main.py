"""Click-based CLI entry point for BrandPy user administration."""

import dataclasses
import sys
from collections.abc import Callable
from typing import Any

import click

from .. import __version__
from ..core.config import get_app_config
from ..core.exceptions import BrandError
from ..models.config import AppConfig
from ..utils.display_utils import print_error, print_warning
from ..utils.rich_utils import install_rich_tracebacks
from .commands import OperationHandler


class AliasedGroup(click.Group):
    """Click group whose commands can be invoked by alternative names."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.aliases: dict[str, str] = {}

    def command(
        self, *args: Any, aliases: tuple[str, ...] = (), **kwargs: Any
    ) -> Callable[[Callable[..., Any]], click.Command]:
        decorator = super().command(*args, **kwargs)

        def register(f: Callable[..., Any]) -> click.Command:
            cmd = decorator(f)
            for alias in aliases:
                self.aliases[alias] = cmd.name
            if aliases:
                cmd.help = f"{cmd.help}\n\nAliases: {', '.join(aliases)}"
            return cmd

        return register

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        cmd = super().get_command(ctx, cmd_name)
        if cmd is not None:
            return cmd
        target = self.aliases.get(cmd_name)
        if target is None:
            return None
        return super().get_command(ctx, target)

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        # Report the canonical name so invoked_subcommand never holds an alias
        _, cmd, args = super().resolve_command(ctx, args)
        return cmd.name if cmd else None, cmd, args


def _handler(ctx: click.Context) -> OperationHandler:
    return OperationHandler(ctx.obj)


def _force(field: str) -> Callable[[click.Context, click.Parameter, bool], None]:
    def callback(ctx: click.Context, param: click.Parameter, value: bool) -> None:
        if value:
            config = ctx.ensure_object(AppConfig)
            ctx.obj = dataclasses.replace(config, **{field: True})

    return callback


def identifier_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Accept the group's -e/-p flags after the command name as well."""
    f = click.option(
        "-p",
        "--phone-number",
        is_flag=True,
        expose_value=False,
        callback=_force("force_phone"),
        help="Treat every identifier as a phone number",
    )(f)
    return click.option(
        "-e",
        "--email",
        is_flag=True,
        expose_value=False,
        callback=_force("force_email"),
        help="Treat every identifier as an email address",
    )(f)


@click.group(cls=AliasedGroup, invoke_without_command=True)
@click.version_option(__version__, prog_name="brandpy")
@click.option(
    "-e",
    "--email",
    "force_email",
    is_flag=True,
    help="Treat every identifier as an email address",
)
@click.option(
    "-p",
    "--phone-number",
    "force_phone",
    is_flag=True,
    help="Treat every identifier as a phone number",
)
@click.pass_context
def cli(ctx: click.Context, force_email: bool, force_phone: bool) -> None:
    """BrandPy - disable, delete, inspect and create directory users.

    Identifiers may be user IDs, email addresses or phone numbers.
    """
    ctx.obj = get_app_config(force_email=force_email, force_phone=force_phone)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command(aliases=("ban", "suspend"))
@identifier_options
@click.argument("ids", nargs=-1, required=True)
@click.pass_context
def disable(ctx: click.Context, ids: tuple[str, ...]) -> None:
    """Disable the specified users."""
    _handler(ctx).handle_disable(ids)


@cli.command(aliases=("unban",))
@identifier_options
@click.argument("ids", nargs=-1, required=True)
@click.pass_context
def enable(ctx: click.Context, ids: tuple[str, ...]) -> None:
    """Enable the specified users."""
    _handler(ctx).handle_enable(ids)


@cli.command(aliases=("remove",))
@identifier_options
@click.argument("ids", nargs=-1, required=True)
@click.pass_context
def delete(ctx: click.Context, ids: tuple[str, ...]) -> None:
    """Delete the specified users."""
    _handler(ctx).handle_delete(ids)


@cli.command(aliases=("prevent",))
@identifier_options
@click.argument("ids", nargs=-1, required=True)
@click.pass_context
def revoke(ctx: click.Context, ids: tuple[str, ...]) -> None:
    """Revoke sessions and refresh tokens of the specified users."""
    _handler(ctx).handle_revoke(ids)


@cli.command(aliases=("fetch", "retrieve"))
@identifier_options
@click.argument("ids", nargs=-1, required=True)
@click.option(
    "-d", "--detailed", is_flag=True, help="Include claims and sign-in times"
)
@click.pass_context
def get(ctx: click.Context, ids: tuple[str, ...], detailed: bool) -> None:
    """Show the specified users as a table."""
    _handler(ctx).handle_get(ids, detailed)


@cli.command(aliases=("change",))
@identifier_options
@click.argument("id")
@click.pass_context
def update(ctx: click.Context, id: str) -> None:
    """Interactively edit one user."""
    _handler(ctx).handle_update(id)


@cli.command(aliases=("add", "new"))
@click.option(
    "-f",
    "--fake",
    type=click.IntRange(min=1),
    help="Generate this many users with random data",
)
@click.pass_context
def create(ctx: click.Context, fake: int | None) -> None:
    """Create one user interactively, or many fake users."""
    _handler(ctx).handle_create(fake)


@cli.command()
@click.option("--test-api", is_flag=True, help="Test API access")
@click.pass_context
def doctor(ctx: click.Context, test_api: bool) -> None:
    """Test Auth0 credentials and API access."""
    if not _handler(ctx).handle_doctor(test_api):
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        # Enable pretty tracebacks
        install_rich_tracebacks()
        # Let interrupts and errors reach the handlers below
        rv = cli(standalone_mode=False)
    except (KeyboardInterrupt, click.exceptions.Abort):
        print_warning("\nOperation interrupted by user.")
        sys.exit(0)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except BrandError as e:
        print_error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        sys.exit(1)

    # --help, --version and ctx.exit() return their exit code
    if isinstance(rv, int):
        sys.exit(rv)


if __name__ == "__main__":
    main()
