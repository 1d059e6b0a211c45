"""Monitoring plugin for ZFS pool health and capacity."""

__version__ = "1.0.0"
