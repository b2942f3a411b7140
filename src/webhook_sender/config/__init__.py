"""
Package: config
Description: Configuration for the webhook sender.

Exports the Settings model, the JSON serializer settings and the
global settings instance.
"""

from .settings import JsonSerializerSettings, Settings, settings

__all__ = ["JsonSerializerSettings", "Settings", "settings"]
