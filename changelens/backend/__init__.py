from changelens.backend.base import PageBackend
from changelens.backend.web_monitoring_db import WebMonitoringDb

__all__ = ["PageBackend", "WebMonitoringDb"]
