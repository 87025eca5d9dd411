"""
Rendering schemas.

A Schema decides how status codes and cluster names are decorated:
PLAIN emits bare text, COLOR adds rich styles and status icons. The
schema is passed explicitly to every renderer.
"""

from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape

from rds_health_core.status import StatusCode

_SUPERSCRIPT = str.maketrans(
    "0123456789CDMP",
    "⁰¹²³⁴⁵⁶⁷⁸⁹ᶜᴰᴹᴾ",
)


def superscript(text: str) -> str:
    return text.translate(_SUPERSCRIPT)


@dataclass(frozen=True)
class Schema:
    """
    Decoration of rendered output.

    Attributes:
        color: Whether the console may emit colors
        icons: Prefix per status code (e.g. a check mark for PASS)
        styles: rich style per status code; empty string means unstyled
        cluster_style: rich style of cluster names
    """

    color: bool = False
    icons: dict[StatusCode, str] = field(default_factory=dict)
    styles: dict[StatusCode, str] = field(default_factory=dict)
    cluster_style: str = ""

    def styled(self, code: StatusCode, text: str) -> str:
        """Escape text and wrap it into the style of a status code."""
        return _wrap(self.styles.get(code, ""), escape(text))

    def status(self, code: StatusCode) -> str:
        """Short status label, e.g. PASS."""
        return self.styled(code, code.short)

    def icon(self, code: StatusCode) -> str:
        return self.icons.get(code, "")

    def cluster(self, name: str) -> str:
        return _wrap(self.cluster_style, escape(name))

    def console(self, stderr: bool = False) -> Console:
        """Console matching this schema."""
        return Console(
            stderr=stderr,
            no_color=not self.color,
            highlight=False,
            soft_wrap=True,
        )


def _wrap(style: str, text: str) -> str:
    if not style:
        return text
    return f"[{style}]{text}[/{style}]"


PLAIN = Schema()

COLOR = Schema(
    color=True,
    icons={
        StatusCode.SUCCESS: "✅ ",
        StatusCode.WARNING: "🟧 ",
        StatusCode.FAILURE: "❌ ",
    },
    styles={
        StatusCode.SUCCESS: "green",
        StatusCode.WARNING: "yellow",
        StatusCode.FAILURE: "red",
    },
    cluster_style="bold",
)
