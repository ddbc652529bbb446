"""
Change monitoring module - detects newly observed addresses.
"""

from ip_radar.change_monitor.detector import ChangeDetector, detect_new

__all__ = ["ChangeDetector", "detect_new"]
