"""Typer-based CLI entrypoint for running a discovery node."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer

from object_store_discovery import __version__
from object_store_discovery.cluster import DiscoveryService, PeerResolver
from object_store_discovery.configs import load_config
from object_store_discovery.directory import DirectoryClient
from object_store_discovery.discovery_module import create_injector
from object_store_discovery.scheduling import TaskScheduler
from object_store_discovery.models import ClusterNodeAddress

logger = logging.getLogger(__name__)

app = typer.Typer(help="Object-store peer discovery CLI", no_args_is_help=True, pretty_exceptions_enable=False)


@app.callback()
def main(
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level."),
) -> None:
    """Configure logging before executing any subcommand."""

    logging.basicConfig(
        level=log_level.upper(),
        format='%(asctime)s %(levelname)s: [%(name)s] %(message)s',
        datefmt='%Y-%m-%dT%H:%M:%SZ',
        handlers=[logging.StreamHandler()],
    )


@app.command("version")
def version() -> None:
    """Print the CLI version."""

    typer.echo(f"object-store-discovery {__version__}")


@app.command("run")
def run(
    config: Path = typer.Option(..., "--config", exists=True, file_okay=True, dir_okay=False, help="Discovery YAML config."),
    cluster_id: str = typer.Option(..., "--cluster-id", help="Identifier of this node in the cluster."),
    host: str = typer.Option(..., "--host", help="Host peers should connect to."),
    port: int = typer.Option(..., "--port", min=0, max=65535, help="Port peers should connect to."),
    poll_interval: float = typer.Option(30.0, "--poll-interval", min=1.0, help="Seconds between peer resolutions."),
) -> None:
    """Announce this node and log the resolved peers until interrupted."""

    injector = create_injector(load_config(config))
    service = injector.get(DiscoveryService)
    service.init(cluster_id, ClusterNodeAddress(host=host, port=port))

    try:
        while True:
            peers = service.resolve().result()
            logger.info("Resolved %d peer(s): %s", len(peers), ", ".join(sorted(str(p) for p in peers)))
            time.sleep(poll_interval)
    except KeyboardInterrupt:
        logger.info("Interrupted, leaving the cluster")
    finally:
        service.destroy()
        injector.get(TaskScheduler).shutdown()


@app.command("resolve")
def resolve(
    config: Path = typer.Option(..., "--config", exists=True, file_okay=True, dir_okay=False, help="Discovery YAML config."),
) -> None:
    """Print the currently announced peers, one ``host:port`` per line."""

    discovery_config = load_config(config)
    injector = create_injector(discovery_config)
    resolver = PeerResolver(
        directory_client=injector.get(DirectoryClient),
        bucket_name=discovery_config.bucket_name,
        file_prefix=discovery_config.file_prefix,
        expiration_minutes=discovery_config.expiration_minutes,
    )
    for address in sorted(str(a) for a in resolver.resolve()):
        typer.echo(address)


if __name__ == "__main__":
    app()
