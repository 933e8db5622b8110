"""
Branding settings for the SkateTrack dashboard.

The settings object is handed to the app factory explicitly; the branding
service loads and saves it through a key-value store.
"""
from dataclasses import dataclass
from typing import Dict

from ..utils import (
    DEFAULT_BRAND_NAME, DEFAULT_BRAND_COLOR, DEFAULT_LOGO_URL, BRAND_COLOR_SHIFT
)


def adjust_color(color: str, amount: int) -> str:
    """
    Shift each RGB channel of a hex color by ``amount``, clamped to 0-255.

    Example:
        >>> adjust_color("#3b82f6", 40)
        '#63aaff'
    """
    color = color.replace("#", "")
    r = int(color[0:2], 16)
    g = int(color[2:4], 16)
    b = int(color[4:6], 16)

    def _clamp(value: int) -> int:
        return max(0, min(255, value + amount))

    return f"#{_clamp(r):02x}{_clamp(g):02x}{_clamp(b):02x}"


@dataclass
class BrandingSettings:
    """Brand name, primary color and logo shown across the dashboard."""

    brand_name: str = DEFAULT_BRAND_NAME
    brand_color: str = DEFAULT_BRAND_COLOR
    logo_url: str = DEFAULT_LOGO_URL

    def css_variables(self) -> Dict[str, str]:
        """CSS custom properties applied to the document root."""
        return {
            "--brand-color": self.brand_color,
            "--brand-color-light": adjust_color(self.brand_color, BRAND_COLOR_SHIFT),
            "--brand-color-dark": adjust_color(self.brand_color, -BRAND_COLOR_SHIFT),
            "--primary": self.brand_color,
            "--primary-foreground": "#ffffff",
        }

    def style_for(self, element: str) -> Dict[str, str]:
        if element == "button":
            return {"backgroundColor": self.brand_color, "color": "#ffffff"}
        if element == "text":
            return {"color": self.brand_color}
        if element == "border":
            return {"borderColor": self.brand_color}
        if element == "background":
            return {"backgroundColor": self.brand_color}
        return {}

    def to_json(self) -> dict:
        return {
            "brandName": self.brand_name,
            "brandColor": self.brand_color,
            "logoUrl": self.logo_url,
            "cssVariables": self.css_variables(),
        }
