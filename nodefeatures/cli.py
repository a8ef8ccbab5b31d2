"""
node-features command-line interface.

Usage::

    nfd discover
    nfd discover --sources cpuid,pstate --format json
    nfd discover --network-mode mounted --sysfs-root /hostsys
    nfd discover --no-oneshot --sleep-interval 60
    nfd sources
"""

from __future__ import annotations

import logging

import click

from nodefeatures import __version__


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="nfd")
@click.option("--verbose", "-v", is_flag=True, help="Log per-source diagnostics.")
def main(verbose: bool) -> None:
    """Discover hardware features of this node."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Register command modules
# ---------------------------------------------------------------------------

from nodefeatures.commands import discover  # noqa: E402

for _mod in [discover]:
    _mod.register(main)
