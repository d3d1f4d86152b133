"""droid — health-check and status-proxy sidecar for Cosmos SDK nodes."""

__version__ = "0.1.0"
