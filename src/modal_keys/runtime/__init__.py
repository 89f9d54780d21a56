"""Runtime services: telemetry and settings."""

from . import telemetry
from .config import DecorationStyle, ModeStyle, Settings

__all__ = ["telemetry", "DecorationStyle", "ModeStyle", "Settings"]
