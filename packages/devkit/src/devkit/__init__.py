"""Runtime kit shared by the dashboard packages: settings, clocks and telemetry."""

from devkit.config import ServiceSettings, load_settings
from devkit.observability import configure_logging, configure_otel, configure_probe_access_log_filter
from devkit.timezone import configure_dashboard_timezone, current_hour, dashboard_zone, now_local, now_local_iso

__all__ = [
    "ServiceSettings",
    "configure_dashboard_timezone",
    "configure_logging",
    "configure_otel",
    "configure_probe_access_log_filter",
    "current_hour",
    "dashboard_zone",
    "load_settings",
    "now_local",
    "now_local_iso",
]
