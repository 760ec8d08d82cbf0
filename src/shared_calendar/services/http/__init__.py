"""HTTP services for the shared calendar."""

from .server import app, create_app, get_store, run_local_server

__all__ = ["app", "create_app", "get_store", "run_local_server"]
