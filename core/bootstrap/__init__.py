"""
Gestor Bootstrap - Startup
============================
Wires the application and refuses to start on a broken
configuration.
"""

from core.bootstrap.errors import SystemBootstrapError
from core.bootstrap.self_check import run_bootstrap_checks
from core.bootstrap.wiring import ShopApplication, bootstrap

__all__ = [
    "ShopApplication",
    "SystemBootstrapError",
    "bootstrap",
    "run_bootstrap_checks",
]
