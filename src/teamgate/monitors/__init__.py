from teamgate.monitors.focus import FocusReadSync
from teamgate.monitors.idle_wake import IdleWakeMonitor

__all__ = ["FocusReadSync", "IdleWakeMonitor"]
