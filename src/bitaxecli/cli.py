from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .api import Client
from .config import default_sources, resolve_sources
from .const import CONFIG_PATH, DEFAULT_TIMEOUT, ENV_TIMEOUT, STATUS_HEADER
from .exceptions import BitaxeError, ConfigError
from .render import render, render_table
from .telemetry import extract


def _env_default(name: str, default: str) -> str:
    return os.environ.get(name, default)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _client(args: argparse.Namespace) -> Client:
    return Client(base_url=args.url, timeout=args.timeout)


def cmd_status(args: argparse.Namespace) -> int:
    record = extract(_client(args).get_system_info())
    if args.json:
        json.dump(record.as_dict(), sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
        return 0
    console = Console()
    console.print(f"[bold]{STATUS_HEADER}[/bold]")
    for line in render(record):
        console.print(str(line), markup=False, highlight=False, soft_wrap=True)
    return 0


def cmd_dashboard(args: argparse.Namespace) -> int:
    record = extract(_client(args).get_system_info())
    Console().print(render_table(record, title=f"Bitaxe @ {args.url}"))
    return 0


def cmd_restart(args: argparse.Namespace) -> int:
    _client(args).restart()
    Console().print(f"[green]Restart command sent to {escape(args.url)}[/green]", highlight=False)
    return 0


def cmd_config_show(args: argparse.Namespace) -> int:
    info = {"url": args.url, "source": args.url_source, "config": args.config}
    if args.json:
        json.dump(info, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        Console().print(info)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="bitaxe", description="Bitaxe monitor & restart CLI")
    p.add_argument("--host", default=None, help="Device base URL, e.g. http://192.168.1.123 (overrides env/config)")
    p.add_argument("--config", default=CONFIG_PATH, help="Path to TOML config file")
    p.add_argument(
        "--timeout",
        type=float,
        default=float(_env_default(ENV_TIMEOUT, str(DEFAULT_TIMEOUT))),
        help="HTTP timeout seconds",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    st = sub.add_parser("status", help="Show device telemetry")
    st.add_argument("--json", action="store_true", help="Output JSON instead of text")
    st.set_defaults(func=cmd_status)

    db = sub.add_parser("dashboard", help="Show device telemetry as a table")
    db.set_defaults(func=cmd_dashboard)

    rs = sub.add_parser("restart", help="Restart the device")
    rs.set_defaults(func=cmd_restart)

    cp = sub.add_parser("config", help="Client configuration")
    csub = cp.add_subparsers(dest="action", required=True)
    cshow = csub.add_parser("show", help="Show resolved device URL and its source")
    cshow.add_argument("--json", action="store_true")
    cshow.set_defaults(func=cmd_config_show)

    return p


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    err = Console(stderr=True)
    try:
        # Resolve URL from arg > env > config
        resolved = resolve_sources(default_sources(args.host, os.environ, args.config), args.config)
        args.url, args.url_source = resolved.url, resolved.source
        return args.func(args)
    except ConfigError as e:
        err.print(f"[red]{escape(str(e))}[/red]", highlight=False, soft_wrap=True)
        return 2
    except BitaxeError as e:
        err.print(f"[red]Error: {escape(str(e))}[/red]", highlight=False, soft_wrap=True)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
