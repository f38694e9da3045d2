"""
Ringtone Bridge - Command line entry point.

Usage:
    ringtone-bridge pick                      # Open the ringtone picker
    ringtone-bridge copy content://media/1    # Copy a ringtone to the cache
    ringtone-bridge call frobnicate           # Send a raw channel call
    ringtone-bridge ringtones                 # List local ringtones
    ringtone-bridge --help                    # Show help
"""

import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from ringtone_bridge import __version__
from ringtone_bridge.backends import RESULT_CANCELED, RESULT_OK, LocalBackend, get_backend
from ringtone_bridge.core.bridge import COPY_RINGTONE_TO_CACHE, PICK_RINGTONE, RingtoneBridge
from ringtone_bridge.core.channel import MethodChannel, Reply
from ringtone_bridge.core.config import BACKENDS, Config
from ringtone_bridge.core.types import MethodCall, ReplyKind
from ringtone_bridge.exceptions import BackendUnavailableError, CodecError
from ringtone_bridge.tools.file_utils import format_size

console = Console()


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def create_bridge(config: Config, backend_name: Optional[str] = None) -> tuple[RingtoneBridge, MethodChannel]:
    """Create the backend, the bridge and its channel."""
    backend = get_backend(config, backend_name)
    bridge = RingtoneBridge(backend, config)
    channel = bridge.attach(MethodChannel(config.channel.name))
    return bridge, channel


def choose_ringtone(backend: LocalBackend) -> None:
    """Interactive stand-in for the system picker."""
    intent, _ = backend.open_picker
    ringtones = backend.list_ringtones()

    table = Table(show_header=True, header_style="bold magenta", title="Select ringtone")
    table.add_column("#", style="cyan", width=4)
    table.add_column("Title", style="green")
    table.add_column("URI", style="white")
    table.add_column("Size", style="dim", justify="right")

    if intent.show_default:
        table.add_row("0", "Default", "", "")
    for i, ringtone in enumerate(ringtones, 1):
        marker = " *" if ringtone["uri"] == intent.existing_uri else ""
        table.add_row(str(i), escape(ringtone["title"]) + marker, escape(ringtone["uri"]), format_size(ringtone["size"]))

    console.print(table)
    console.print("[dim]Press Enter without a number to cancel.[/dim]")

    choice = Prompt.ask("[bold]Ringtone[/bold]", default="").strip()
    if not choice.isdigit():
        backend.finish_picker(RESULT_CANCELED)
        return

    index = int(choice)
    if index == 0 and intent.show_default:
        backend.finish_picker(RESULT_OK, "content://settings/system/ringtone")
    elif 1 <= index <= len(ringtones):
        backend.finish_picker(RESULT_OK, ringtones[index - 1]["uri"])
    else:
        console.print("[yellow]Invalid selection.[/yellow]")
        backend.finish_picker(RESULT_CANCELED)


def print_reply(reply: Reply) -> None:
    """Print a resolved reply and exit non-zero on error replies."""
    outcome = reply.outcome
    if outcome.kind == ReplyKind.SUCCESS:
        if outcome.value is None:
            console.print("[dim]null[/dim]")
        else:
            console.print(str(outcome.value), markup=False, highlight=False)
    elif outcome.kind == ReplyKind.ERROR:
        console.print(f"[red]{escape(outcome.code)}[/red]: {escape(outcome.message or '')}")
        sys.exit(1)
    else:
        console.print(f"[yellow]Not implemented:[/yellow] {escape(reply.method)}")
        sys.exit(2)


@click.group(invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None, help="Config file")
@click.option("--backend", "-b", type=click.Choice(list(BACKENDS)), default=None, help="Platform backend")
@click.option("--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx, version: bool, config_path: Optional[str], backend: Optional[str], verbose: bool):
    """
    Ringtone Bridge - OS ringtone picker for cross-platform UIs.

    Examples:
        ringtone-bridge pick
        ringtone-bridge pick --existing-uri content://media/alarm
        ringtone-bridge copy content://media/alarm
        ringtone-bridge call pickRingtone --args '{"existingUri": null}'
    """
    ctx.ensure_object(dict)

    if version:
        console.print(f"Ringtone Bridge v{__version__}")
        sys.exit(0)

    config = Config.load(config_path)
    setup_logging("DEBUG" if verbose else config.log_level)

    ctx.obj["config"] = config
    ctx.obj["config_path"] = config_path
    ctx.obj["backend"] = backend

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _bridge_from_context(ctx) -> tuple[RingtoneBridge, MethodChannel]:
    try:
        return create_bridge(ctx.obj["config"], ctx.obj["backend"])
    except BackendUnavailableError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _wait_for_picker(bridge: RingtoneBridge, reply: Reply) -> None:
    if reply.done:
        return
    if isinstance(bridge.backend, LocalBackend) and bridge.backend.open_picker:
        choose_ringtone(bridge.backend)
    else:
        console.print("[dim]Waiting for the system picker...[/dim]")
        reply.wait()


@cli.command()
@click.option("--existing-uri", "-e", default=None, help="Ringtone to pre-select")
@click.pass_context
def pick(ctx, existing_uri: Optional[str]):
    """Open the ringtone picker and print the chosen URI."""
    bridge, channel = _bridge_from_context(ctx)

    reply = channel.invoke_method(PICK_RINGTONE, {"existingUri": existing_uri})
    _wait_for_picker(bridge, reply)
    print_reply(reply)


@cli.command()
@click.argument("uri", required=True)
@click.pass_context
def copy(ctx, uri: str):
    """Copy a ringtone into the cache and print the file path."""
    _, channel = _bridge_from_context(ctx)

    reply = channel.invoke_method(COPY_RINGTONE_TO_CACHE, {"uri": uri})
    print_reply(reply)


@cli.command()
@click.argument("method", required=True)
@click.option("--args", "-a", "raw_args", default="null", help="JSON-encoded arguments")
@click.pass_context
def call(ctx, method: str, raw_args: str):
    """Send a raw JSON-codec call through the channel and print the envelope."""
    bridge, channel = _bridge_from_context(ctx)

    try:
        arguments = json.loads(raw_args)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--args") from e

    envelopes: list[bytes] = []
    try:
        message = channel.codec.encode_method_call(MethodCall(method=method, arguments=arguments))
        reply = channel.handle_message(message, envelopes.append)
    except CodecError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if method == PICK_RINGTONE:
        _wait_for_picker(bridge, reply)

    envelope = envelopes[0] if envelopes else b""
    console.print(json.dumps(channel.codec.decode_envelope(envelope).to_dict()), markup=False)
    console.print(f"envelope: {envelope.decode('utf-8') or '<empty>'}", style="dim", markup=False)


@cli.command()
@click.pass_context
def ringtones(ctx):
    """List ringtones available to the local backend."""
    config: Config = ctx.obj["config"]
    backend = LocalBackend(media_dir=config.local.media_dir, cache_dir=config.local.cache_dir)

    items = backend.list_ringtones()
    if not items:
        console.print(f"[yellow]No ringtones in {backend.media_dir}[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Title", style="green")
    table.add_column("URI", style="cyan")
    table.add_column("Size", justify="right")
    for item in items:
        table.add_row(escape(item["title"]), escape(item["uri"]), format_size(item["size"]))
    console.print(table)


@cli.command("config")
@click.option("--init", "init_config", is_flag=True, help="Write the current configuration to disk")
@click.pass_context
def config_command(ctx, init_config: bool):
    """Show current configuration."""
    cfg: Config = ctx.obj["config"]

    if init_config:
        path = cfg.save(ctx.obj["config_path"])
        cfg.ensure_directories()
        console.print(f"[green]Configuration written to {path}[/green]")
        return

    console.print("[bold]Ringtone Bridge Configuration[/bold]\n")
    console.print(f"Channel: {cfg.channel.name} (request code {cfg.channel.request_code})")
    console.print(f"Backend: {cfg.backend}")
    console.print(f"Cache: {cfg.cache.directory or '<backend cache dir>'}")
    console.print(f"  File names: {cfg.cache.prefix}<millis>{cfg.cache.suffix}")
    console.print("\nLocal backend:")
    console.print(f"  Media: {cfg.local.media_dir}")
    console.print(f"  Cache: {cfg.local.cache_dir}")


def main():
    """Entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
