"""Command-line interface for dnsdirect.

Usage:
    dnsdirect up -n 100.100.100.100 -s corp.example.com
    dnsdirect status
    dnsdirect base
    dnsdirect clear
    dnsdirect down
"""

import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

import typer
import yaml
from loguru import logger

from dnsdirect import __version__
from dnsdirect.core.config import Config
from dnsdirect.core.direct_manager import DirectManager
from dnsdirect.core.filesystem import DirectFS
from dnsdirect.core.logger import setup_logging
from dnsdirect.core.resolved import ResolvedRestarter
from dnsdirect.core.types import OSConfig, ResolvOwner, ResolvState
from dnsdirect.core.validators import ValidationError, without_trailing_dot

app = typer.Typer(
    name="dnsdirect",
    help="Take over /etc/resolv.conf and give it back cleanly",
    add_completion=False,
)
config_app = typer.Typer(help="Manage configuration.")
app.add_typer(config_app, name="config")


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to configuration file"),
    root: Optional[str] = typer.Option(
        None, "--root", help="Operate on files below this directory instead of /"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """dnsdirect - manage resolv.conf directly when no resolver daemon does."""
    ctx.ensure_object(dict)
    cfg = Config(config)
    level = "DEBUG" if verbose else str(cfg.get("log_level", "info"))
    try:
        setup_logging(level)
    except ValueError:
        # Teardown must still work with a broken config file
        setup_logging("INFO")
        logger.warning(f"Unknown log level {level!r} in {cfg.config_path}, using INFO")

    ctx.obj["config"] = cfg
    ctx.obj["root"] = root if root is not None else cfg.get("root", "")


def _build_manager(ctx: typer.Context) -> DirectManager:
    """Create a DirectManager from settings."""
    cfg: Config = ctx.obj["config"]
    root: str = ctx.obj["root"]

    # Under a prefix the real systemd-resolved is not ours to restart
    restart = bool(cfg.get("restart_resolved", True)) and not root
    return DirectManager(
        fs=DirectFS(root),
        app_name=cfg.get("app_name"),
        resolv_conf=cfg.get("resolv_conf"),
        restarter=ResolvedRestarter(enabled=restart),
    )


def _require_privileges(ctx: typer.Context) -> None:
    """Exit unless we can write the real /etc."""
    if ctx.obj["root"] or os.geteuid() == 0:
        return

    typer.echo("⚠️  Changing resolv.conf requires root privileges", err=True)
    typer.echo("💡 Please run with sudo:")
    typer.echo(f"   sudo {' '.join(sys.argv)}")
    raise typer.Exit(1)


@contextmanager
def _fail_on_error(action: str):
    """Turn library errors into a message and exit status 1."""
    try:
        yield
    except (OSError, ValidationError) as e:
        logger.debug(f"{action} failed: {e!r}")
        typer.echo(f"✗ Failed to {action}: {e}", err=True)
        raise typer.Exit(1)


def _echo_config(config: OSConfig) -> None:
    for ns in config.nameservers:
        typer.echo(f"nameserver {ns}")
    if config.search_domains:
        typer.echo("search " + " ".join(without_trailing_dot(d) for d in config.search_domains))


@app.command()
def up(
    ctx: typer.Context,
    nameserver: Optional[List[str]] = typer.Option(None, "--nameserver", "-n", help="Nameserver IP (repeatable)"),
    search: Optional[List[str]] = typer.Option(None, "--search", "-s", help="Search domain (repeatable)"),
):
    """Write a generated resolv.conf, backing up the current one."""
    cfg: Config = ctx.obj["config"]

    if not nameserver and not search:
        nameserver = cfg.get_nameservers()
        search = cfg.get_search_domains()

    with _fail_on_error("parse DNS settings"):
        dns_config = OSConfig.from_strings(nameserver or [], search or [])

    if dns_config.is_zero():
        typer.echo("Error: No nameservers or search domains given", err=True)
        raise typer.Exit(1)

    _require_privileges(ctx)
    manager = _build_manager(ctx)
    with _fail_on_error("configure DNS"):
        manager.set_dns(dns_config)

    typer.echo(f"✓ DNS configured in {manager.resolv_conf}")
    _echo_config(dns_config)


@app.command()
def clear(ctx: typer.Context):
    """Drop our configuration and put back the previous one."""
    _require_privileges(ctx)
    manager = _build_manager(ctx)
    with _fail_on_error("clear DNS"):
        manager.set_dns(OSConfig())
    typer.echo("✓ DNS configuration cleared")


@app.command()
def down(ctx: typer.Context):
    """Restore the previous resolv.conf (shutdown path)."""
    _require_privileges(ctx)
    manager = _build_manager(ctx)
    with _fail_on_error("restore resolv.conf"):
        manager.close()
    typer.echo("✓ resolv.conf restored")


@app.command()
def base(ctx: typer.Context):
    """Show the DNS configuration that applies without dnsdirect."""
    manager = _build_manager(ctx)
    with _fail_on_error("read base configuration"):
        base_config = manager.get_base_config()

    if base_config.is_zero():
        typer.echo("No base DNS configuration")
        return
    _echo_config(base_config)


@app.command()
def status(ctx: typer.Context):
    """Show who owns resolv.conf and whether a backup exists."""
    manager = _build_manager(ctx)
    with _fail_on_error("inspect resolv.conf"):
        snapshot = manager.snapshot()
        owner = manager.owner() if snapshot.resolv is ResolvState.FOREIGN else ResolvOwner.UNKNOWN

    labels = {
        ResolvState.ABSENT: "absent",
        ResolvState.FOREIGN: "foreign",
        ResolvState.OWNED: f"managed by {manager.app_name}",
    }
    typer.echo(f"resolv.conf: {manager.resolv_conf} ({labels[snapshot.resolv]})")
    if owner is not ResolvOwner.UNKNOWN:
        typer.echo(f"  Owner: {owner}")
    typer.echo(f"Backup: {manager.backup_conf} ({'present' if snapshot.has_backup else 'none'})")


@app.command()
def version():
    """Show version."""
    typer.echo(f"dnsdirect v{__version__}")


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Show current configuration."""
    cfg: Config = ctx.obj["config"]
    typer.echo(f"Configuration file: {cfg.config_path}")
    typer.echo(f"Log level: {cfg.get('log_level')}")
    typer.echo(f"resolv.conf: {cfg.get('resolv_conf')}")
    typer.echo(f"Root: {ctx.obj['root'] or '/'}")
    typer.echo(f"Restart systemd-resolved: {cfg.get('restart_resolved')}")
    typer.echo(f"Nameservers: {', '.join(cfg.get_nameservers()) or '-'}")
    typer.echo(f"Search domains: {', '.join(cfg.get_search_domains()) or '-'}")


@config_app.command("set")
def config_set(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Setting name (dot notation)"),
    value: str = typer.Argument(..., help="Value, parsed as YAML (e.g. false, [1.1.1.1, 9.9.9.9])"),
):
    """Change a setting and save the configuration file."""
    cfg: Config = ctx.obj["config"]
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError as e:
        typer.echo(f"✗ Invalid value for {key}: {e}", err=True)
        raise typer.Exit(1)

    cfg.set(key, parsed)
    try:
        cfg.save()
    except OSError as e:
        typer.echo(f"✗ Failed to save configuration: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"✓ {key} = {parsed!r}")


@config_app.command("import")
def config_import(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False),
    file_format: str = typer.Option("json", "--format", help="File format: json or yaml"),
):
    """Import configuration from file."""
    cfg: Config = ctx.obj["config"]
    if cfg.import_config(file, file_format):
        typer.echo(f"✓ Configuration imported from {file}")
    else:
        typer.echo("✗ Failed to import configuration", err=True)
        raise typer.Exit(1)


@config_app.command("export")
def config_export(
    ctx: typer.Context,
    file: Path = typer.Argument(...),
    file_format: str = typer.Option("json", "--format", help="File format: json or yaml"),
):
    """Export configuration to file."""
    cfg: Config = ctx.obj["config"]
    if cfg.export_config(file, file_format):
        typer.echo(f"✓ Configuration exported to {file}")
    else:
        typer.echo("✗ Failed to export configuration", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
