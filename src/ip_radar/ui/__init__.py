"""
UI module - configuration console.
"""

from ip_radar.ui.console import ConsoleServer, create_app

__all__ = ["ConsoleServer", "create_app"]
