"""
IP Radar - public IP change monitor

Watches the host's physical network interfaces for newly appeared public
addresses and emails the operator when one shows up. A local web console
shows the current addresses and edits the notification settings.

Main modules:
- scanner: interface enumeration and filtering
- change_monitor: detection of newly observed addresses
- notifications: HTML change reports and SMTP delivery with retry
- poll_loop: timer-driven scan -> detect -> notify pipeline
- ui: configuration console
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
