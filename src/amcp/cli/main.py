"""AMCP CLI main entry point."""

from __future__ import annotations

import logging

import click

from ..config import load_config
from ..protocol.errors import AMCPError
from ..protocol.messages import Argument
from . import commands
from .output import format_response, print_error, print_response


def _setup_logging(level_name: str) -> None:
    """Send ``amcp`` log records to stderr at the given level."""
    level = getattr(logging, level_name.upper(), logging.WARNING)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger("amcp")
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def _run(ctx: click.Context, name: str, args: list[Argument]) -> None:
    obj = ctx.obj
    try:
        response = commands.send_command(
            obj["host"], obj["port"], obj["timeout"], name, args
        )
    except AMCPError as e:
        print_error(str(e))
    else:
        print_response(response, obj["json"], format_response)


@click.group()
@click.option("--host", help="Server host (default from config)")
@click.option("--port", type=int, help="Server port (default 5250)")
@click.option("--timeout", type=float, help="Read/write timeout in seconds, 0 disables")
@click.option("--json", "json_output", is_flag=True, help="Output JSON")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity")
@click.pass_context
def cli(ctx, host: str | None, port: int | None, timeout: float | None,
        json_output: bool, verbose: int):
    """AMCP - send commands to a media server over AMCP."""
    try:
        config = load_config()
    except ValueError as e:
        raise click.UsageError(f"Invalid configuration: {e}")

    level = config.logging.level
    if verbose == 1:
        level = "info"
    elif verbose > 1:
        level = "debug"
    _setup_logging(level)

    ctx.ensure_object(dict)
    ctx.obj["json"] = json_output
    ctx.obj["host"] = host or config.server.host
    ctx.obj["port"] = port if port is not None else config.server.port
    ctx.obj["timeout"] = timeout if timeout is not None else config.server.timeout


@cli.command("send", context_settings={"ignore_unknown_options": True})
@click.option("--text", "text_only", is_flag=True, help="Send every argument as text")
@click.argument("name")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def send(ctx, text_only: bool, name: str, args: tuple[str, ...]):
    """Send an arbitrary command, e.g. 'send MIXER 1-0 OPACITY 0.5'."""
    _run(ctx, name, [commands.parse_token(a, text_only) for a in args])


@cli.command("version")
@click.argument("component", required=False)
@click.pass_context
def version(ctx, component: str | None):
    """Show server (or component) version."""
    args = [commands.parse_token(component, True)] if component else []
    _run(ctx, "VERSION", args)


@cli.command("info")
@click.argument("channel", required=False)
@click.pass_context
def info(ctx, channel: str | None):
    """Show channel information."""
    args = [commands.parse_token(channel)] if channel else []
    _run(ctx, "INFO", args)


@cli.command("cls")
@click.pass_context
def cls(ctx):
    """List media files."""
    _run(ctx, "CLS", [])


@cli.command("tls")
@click.pass_context
def tls(ctx):
    """List templates."""
    _run(ctx, "TLS", [])


@cli.command("play")
@click.argument("channel")
@click.argument("clip", required=False)
@click.pass_context
def play(ctx, channel: str, clip: str | None):
    """Play a clip (or the loaded one) on a channel-layer."""
    args = [commands.parse_token(channel)]
    if clip:
        args.append(commands.parse_token(clip, True))
    _run(ctx, "PLAY", args)


@cli.command("stop")
@click.argument("channel")
@click.pass_context
def stop(ctx, channel: str):
    """Stop playback on a channel-layer."""
    _run(ctx, "STOP", [commands.parse_token(channel)])


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
