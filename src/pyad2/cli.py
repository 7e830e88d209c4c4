"""Command-line interface for pyad2."""

import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

try:
    import click
    import yaml
    from rich.console import Console
    from rich.table import Table
except ImportError:
    print("CLI dependencies not installed. Install with: pip install pyad2")
    sys.exit(1)

from . import __version__
from .client import AD2Client
from .const.protocol import CONNECT_TIMEOUT_SECONDS, DEFAULT_HOST, DEFAULT_PORT, RECONNECT_DELAY_SECONDS
from .events import KeypadMessageEvent
from .exceptions import AD2ProtocolError
from .protocol import AD2Protocol, KeypadStatus, ZoneTransition
from .zones import ZoneConfig

console = Console()


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file

    Returns:
        Configuration dictionary
    """
    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {config_path}[/red]")
        sys.exit(1)
    except yaml.YAMLError as e:
        console.print(f"[red]Error parsing config: {e}[/red]")
        sys.exit(1)
    cfg = _normalize_config(raw)
    if cfg is None:
        console.print(
            "[red]Invalid config. Expected a mapping with a 'bridge' section, e.g.\n"
            "bridge:\n  host: alarmdecoder\n  port: 10000\nzones:\n  '00:07': Garage[/red]"
        )
        sys.exit(1)
    return cfg


def _normalize_config(raw: Any) -> dict | None:
    """Normalize YAML into ``{"bridge": {...}, "zones": {...} | None}``.

    Accepts these shapes:
    - {bridge: {host, port, ...}, zones: {...}}
    - {host, port, ..., zones: {...}}
    - None / empty file (all defaults, debug-log zones)
    Returns None if unknown.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        return None

    bridge = raw.get("bridge", raw)
    if not isinstance(bridge, dict):
        return None

    zones = raw.get("zones")
    if zones is not None and not isinstance(zones, dict):
        return None

    try:
        b = {
            "host": str(bridge.get("host") or DEFAULT_HOST),
            "port": int(bridge.get("port") or DEFAULT_PORT),
            "reconnect_delay": float(bridge.get("reconnect_delay", RECONNECT_DELAY_SECONDS)),
            "timeout": float(bridge.get("timeout", CONNECT_TIMEOUT_SECONDS)),
        }
    except (TypeError, ValueError):
        return None

    if zones is not None:
        zones = {str(k): v for k, v in zones.items()}
    return {"bridge": b, "zones": zones}


def _build_client(config: dict) -> AD2Client:
    bc = config["bridge"]
    return AD2Client(
        bc["host"],
        bc["port"],
        ZoneConfig.from_table(config["zones"]),
        reconnect_delay=bc["reconnect_delay"],
        timeout=bc["timeout"],
    )


def _payload(event: Any) -> Any:
    return asdict(event) if event is not None else None


def _bits_table(bits: dict[str, Any]) -> Table:
    table = Table(title="Status bits")
    table.add_column("Bit", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("Value", style="yellow")
    for position, (name, value) in enumerate(bits.items(), start=1):
        if isinstance(value, bool):
            style = "green" if value else "dim"
            text = f"[{style}]{value}[/{style}]"
        else:
            text = str(getattr(value, "value", value))
        table.add_row(str(position), name, text)
    return table


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    default="config.yaml",
    help="Configuration file path",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config: Path, debug: bool) -> None:
    """pyad2 - Talk to an AD2 serial-to-IP bridge from the command line."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config) if config.exists() else _normalize_config(None)
    ctx.obj["debug"] = debug


@cli.command()
@click.option("--duration", default=0, type=int, help="Seconds to run (0=until Ctrl+C)")
@click.option("--json", "as_json", is_flag=True, help="Output events as JSON (NDJSON)")
@click.pass_context
def listen(ctx: click.Context, duration: int, as_json: bool) -> None:
    """Connect and print bridge events."""
    config = ctx.obj["config"]

    async def run():
        client = _build_client(config)

        def printer(kind: str):
            def on_event(event: Any) -> None:
                if as_json:
                    click.echo(json.dumps({"event": kind, "data": _payload(event)}))
                elif isinstance(event, KeypadMessageEvent):
                    console.print(f"[blue]{kind}[/blue] {event.numeric} {event.message}")
                else:
                    console.print(f"[blue]{kind}[/blue] {_payload(event)}")

            return on_event

        client.on_connected(printer("connected"))
        client.on_disconnected(printer("disconnected"))
        client.on_zone_changed(printer("zoneChanged"))
        client.on_keypad_message(printer("keypadMessage"))

        await client.start()
        try:
            if duration > 0:
                await asyncio.sleep(duration)
            else:
                while True:
                    await asyncio.sleep(3600)
        finally:
            await client.stop()

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        pass


async def _send(config: dict, send: Any) -> None:
    client = _build_client(config)
    try:
        if not await client.start():
            raise click.ClickException(
                f"Unable to connect to {config['bridge']['host']}:{config['bridge']['port']}"
            )
        await send(client)
    finally:
        await client.stop()


@cli.command("send-keys")
@click.argument("keys", type=str)
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of text")
@click.pass_context
def send_keys(ctx: click.Context, keys: str, as_json: bool) -> None:
    """Send raw keypresses to the panel."""
    config = ctx.obj["config"]
    try:
        asyncio.run(_send(config, lambda client: client.send_keys(keys)))
        if as_json:
            click.echo(json.dumps({"ok": True, "action": "send_keys"}))
        else:
            console.print(f"[green]Sent {len(keys)} key(s)[/green]")
    except Exception as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e)}))
        else:
            console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)


@cli.command("enter-code")
@click.argument("code", type=str)
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of text")
@click.pass_context
def enter_code(ctx: click.Context, code: str, as_json: bool) -> None:
    """Enter a user code on the keypad."""
    config = ctx.obj["config"]
    try:
        asyncio.run(_send(config, lambda client: client.enter_code(code)))
        if as_json:
            click.echo(json.dumps({"ok": True, "action": "enter_code"}))
        else:
            console.print("[green]Code entered[/green]")
    except Exception as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e)}))
        else:
            console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)


@cli.command()
@click.argument("line", type=str)
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of text")
def decode(line: str, as_json: bool) -> None:
    """Decode a single protocol line without connecting."""
    try:
        message = AD2Protocol().decode_line(line)
    except AD2ProtocolError as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e)}))
        else:
            console.print(f"[red]Malformed: {e}[/red]")
        raise SystemExit(1)

    if isinstance(message, ZoneTransition):
        if as_json:
            click.echo(json.dumps({"ok": True, "type": "zone", **asdict(message)}))
        else:
            state = "[red]faulted[/red]" if message.faulted else "[green]restored[/green]"
            console.print(f"Zone {message.expander}:{message.channel} {state}")
    elif isinstance(message, KeypadStatus):
        bits = message.bits.as_dict()
        if as_json:
            click.echo(
                json.dumps(
                    {
                        "ok": True,
                        "type": "keypad",
                        "numeric": message.numeric,
                        "message": message.message,
                        "bits": bits,
                    }
                )
            )
        else:
            console.print(f"Keypad {message.numeric}: [magenta]{message.message}[/magenta]")
            console.print(_bits_table(bits))
    else:
        if as_json:
            click.echo(json.dumps({"ok": True, "type": None}))
        else:
            console.print("[yellow]Unrecognized line (ignored by the client)[/yellow]")


def main() -> None:
    """CLI entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
