from .telemetry import ChannelStats, TelemetryRun

__all__ = [
    "ChannelStats",
    "TelemetryRun",
]
