"""HTTP API for SpecFlow.

Provides REST endpoints for generating, editing and exporting specs.
"""

from .main import create_app, run_server

__all__ = ["create_app", "run_server"]
