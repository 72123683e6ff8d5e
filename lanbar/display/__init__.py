"""Display module for formatting snapshots as status bar output."""

from lanbar.display.waybar import RenderError, WaybarFormatter, fallback_json

__all__ = [
    "RenderError",
    "WaybarFormatter",
    "fallback_json",
]
