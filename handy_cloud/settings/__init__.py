"""Application settings loading."""

from handy_cloud.settings.app import AppSettings, get_settings


__all__ = ["AppSettings", "get_settings"]
