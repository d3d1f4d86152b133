"""Entry point for droid — `droid` console script."""

from __future__ import annotations

import logging

import uvicorn
from rich.console import Console
from rich.panel import Panel

from droid import __version__
from droid.config import settings

console = Console()


def main() -> None:
    """Start the droid sidecar."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    console.print(
        Panel.fit(
            f"[bold]🤖 droid is starting..[/bold]\n"
            f"RPC:  {settings.rpc_endpoint}\n"
            f"LCD:  {settings.lcd_endpoint}\n"
            f"Bind: {settings.listen_host}:{settings.listen_port}\n"
            f"Epoch grace: {settings.epoch_grace_minutes} min after '{settings.epoch_identifier}'",
            title=f"droid v{__version__}",
            border_style="green",
        )
    )

    uvicorn.run(
        "droid.api.app:create_app",
        factory=True,
        host=settings.listen_host,
        port=settings.listen_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
