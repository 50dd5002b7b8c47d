# Flagtree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Colour constants and the rich theme used when rendering usage text and errors.

`OneColors` holds hex values from the One Dark palette so that styles can be
written inline (e.g. `f"[{OneColors.DARK_RED}]error[/]"`). `get_default_theme()`
maps the semantic style names flagtree prints with onto those colours.
"""
from rich.theme import Theme


class OneColors:
    COMMENT_GREY = "#5C6370"
    DARK_RED = "#BE5046"
    LIGHT_RED = "#E06C75"
    BLUE = "#61AFEF"
    MAGENTA = "#C678DD"


def get_default_theme() -> Theme:
    """Return the rich theme with flagtree's semantic style names."""
    return Theme(
        {
            "usage.heading": f"bold {OneColors.BLUE}",
            "usage.subparser": f"italic {OneColors.MAGENTA}",
            "usage.error": OneColors.LIGHT_RED,
            "usage.error.heading": f"bold {OneColors.DARK_RED}",
        }
    )
