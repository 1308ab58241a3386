"""Theme tokens for the blog.

Font scale, font families and colors consumed by the CSS build. The
values are passive data: they are configured here and exposed through
the preview server, nothing compiles them into CSS.
"""

from dataclasses import dataclass, field
from typing import Any


def _default_font_size() -> dict[str, str]:
    return {
        "2xs": "0.75rem",
        "xs": "0.875rem",
        "sm": "1rem",
        "base": "1.2rem",
        "lg": "1.25rem",
        "xl": "1.5rem",
        "2xl": "1.875rem",
        "3xl": "2.25rem",
        "4xl": "3rem",
        "5xl": "4rem",
        "6xl": "5rem",
    }


def _default_font_family() -> dict[str, list[str]]:
    return {
        "sans": ["Lato", "sans-serif"],
        "serif": ["Merriweather", "serif"],
    }


def _default_colors() -> dict[str, dict[str, str]]:
    return {
        "flickr": {
            "darker": "#A90E58",
            "dark": "#C71269",
            "default": "#F02385",
            "light": "#F855A0",
            "lighter": "#FE74B3",
        },
        "purpler": {
            "default": "#7209b7",
        },
    }


@dataclass
class ThemeConfig:
    """Theme token configuration."""

    font_size: dict[str, str] = field(default_factory=_default_font_size)
    font_family: dict[str, list[str]] = field(default_factory=_default_font_family)
    colors: dict[str, dict[str, str]] = field(default_factory=_default_colors)

    @classmethod
    def from_dict(cls, data: object) -> "ThemeConfig":
        """Parse theme configuration, merging over the defaults.

        Keys present in data replace the default for that key, other
        defaults are kept. Color palettes merge shade by shade.

        Args:
            data: Raw theme section data

        Returns:
            ThemeConfig instance

        Raises:
            ValueError: If a value has the wrong type
        """
        theme = cls()
        if data is None:
            return theme

        if not isinstance(data, dict):
            raise ValueError("theme section must be a dictionary")

        font_size = data.get("font_size", {})
        if not isinstance(font_size, dict):
            raise ValueError("theme.font_size must be a dictionary")
        for name, size in font_size.items():
            if not isinstance(size, str):
                raise ValueError(f"theme.font_size.{name} must be a string")
            theme.font_size[name] = size

        font_family = data.get("font_family", {})
        if not isinstance(font_family, dict):
            raise ValueError("theme.font_family must be a dictionary")
        for name, families in font_family.items():
            if not isinstance(families, list) or not all(isinstance(f, str) for f in families):
                raise ValueError(f"theme.font_family.{name} must be a list of strings")
            theme.font_family[name] = list(families)

        colors = data.get("colors", {})
        if not isinstance(colors, dict):
            raise ValueError("theme.colors must be a dictionary")
        for name, shades in colors.items():
            if not isinstance(shades, dict):
                raise ValueError(f"theme.colors.{name} must be a dictionary")
            palette = theme.colors.setdefault(name, {})
            for shade, value in shades.items():
                if not isinstance(value, str):
                    raise ValueError(f"theme.colors.{name}.{shade} must be a string")
                palette[shade] = value

        return theme

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "fontSize": dict(self.font_size),
            "fontFamily": {name: list(f) for name, f in self.font_family.items()},
            "colors": {name: dict(shades) for name, shades in self.colors.items()},
        }
