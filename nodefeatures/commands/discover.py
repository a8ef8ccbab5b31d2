"""Discovery commands — discover, sources."""

from __future__ import annotations

import json
import sys
import time
from typing import Optional

import click

from nodefeatures.config import SOURCE_NAMES, ConfigError, DiscoveryConfig
from nodefeatures.sources import DiscoveryError, FeatureDiscovery, build_sources
from nodefeatures.sources._network import NETWORK_MODES
from nodefeatures.sources._types import DiscoveryResult


def register(cli: click.Group) -> None:
    cli.add_command(discover)
    cli.add_command(sources)


def _format_text(result: DiscoveryResult) -> str:
    return "\n".join(
        f"{name}: {' '.join(feats)}".rstrip()
        for name, feats in result.features.items()
    )


def _emit(result: DiscoveryResult, output_format: str) -> None:
    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        click.echo(_format_text(result))
    for name, reason in result.errors.items():
        click.echo(f"warning: source {name} failed: {reason}", err=True)


@click.command()
@click.option(
    "--sources",
    "sources_opt",
    default=None,
    help=f"Comma-separated sources to run (default: {','.join(SOURCE_NAMES)}).",
)
@click.option("--rdt-bin", default=None, help="Directory holding the RDT helper programs.")
@click.option(
    "--helper-timeout",
    default=None,
    type=float,
    help="Seconds to wait for each RDT helper before treating it as absent.",
)
@click.option(
    "--sysfs-root",
    default=None,
    help="sysfs mount point (default: /sys, or /hostsys in mounted mode).",
)
@click.option(
    "--network-mode",
    default=None,
    type=click.Choice(NETWORK_MODES),
    help="host: query live interfaces. mounted: scan a mounted host sysfs.",
)
@click.option(
    "--format",
    "output_format",
    default="text",
    type=click.Choice(["text", "json"]),
    help="Output format.",
)
@click.option(
    "--oneshot/--no-oneshot",
    default=True,
    help="Run a single discovery pass (default) or repeat forever.",
)
@click.option(
    "--sleep-interval",
    default=60.0,
    type=click.FloatRange(min=0, min_open=True),
    help="Seconds between passes with --no-oneshot.",
)
def discover(
    sources_opt: Optional[str],
    rdt_bin: Optional[str],
    helper_timeout: Optional[float],
    sysfs_root: Optional[str],
    network_mode: Optional[str],
    output_format: str,
    oneshot: bool,
    sleep_interval: float,
) -> None:
    """Run the feature sources and print the discovered features."""
    source_names = None
    if sources_opt is not None:
        source_names = [s.strip() for s in sources_opt.split(",") if s.strip()]
    try:
        config = DiscoveryConfig.from_env(
            sources=source_names,
            rdt_bin=rdt_bin,
            helper_timeout=helper_timeout,
            sysfs_root=sysfs_root,
            network_mode=network_mode,
        )
    except ConfigError as exc:
        raise click.BadParameter(str(exc)) from exc

    discovery = FeatureDiscovery(build_sources(config))
    while True:
        try:
            result = discovery.discover()
        except DiscoveryError as exc:
            for name, reason in exc.result.errors.items():
                click.echo(f"error: source {name} failed: {reason}", err=True)
            if oneshot:
                sys.exit(1)
        else:
            _emit(result, output_format)
        if oneshot:
            return
        time.sleep(sleep_interval)


@click.command()
def sources() -> None:
    """List the available feature sources."""
    for name in SOURCE_NAMES:
        click.echo(name)
