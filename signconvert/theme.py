from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    background: str
    surface: str
    text: str
    muted: str
    heading: str
    record: str


LIGHT = Palette(
    background="linear-gradient(to bottom, #eff6ff, #dbeafe)",
    surface="#ffffff",
    text="#111827",
    muted="#6b7280",
    heading="#1e3a8a",
    record="#f9fafb",
)

DARK = Palette(
    background="linear-gradient(to bottom, #111827, #1f2937)",
    surface="#1f2937",
    text="#f3f4f6",
    muted="#9ca3af",
    heading="#dbeafe",
    record="rgba(55, 65, 81, 0.5)",
)


@dataclass
class ThemeContext:
    """
    Light/dark presentation for one session.

    Handed to the render functions instead of being kept as page-wide state.
    Follows the platform preference until the user picks a mode with toggle().
    """

    dark: bool = False
    chosen: bool = False

    def follow(self, color_scheme: str | None) -> None:
        if self.chosen or not color_scheme:
            return
        self.dark = color_scheme.lower() == "dark"

    def toggle(self) -> None:
        self.dark = not self.dark
        self.chosen = True

    @property
    def palette(self) -> Palette:
        return DARK if self.dark else LIGHT

    @property
    def toggle_label(self) -> str:
        return "☀️" if self.dark else "🌙"

    @property
    def toggle_help(self) -> str:
        return "Switch to light mode" if self.dark else "Switch to dark mode"

    def css(self) -> str:
        p = self.palette
        return f"""
<style>
.stApp {{ background: {p.background}; color: {p.text}; }}
.stApp h1, .stApp h2, .stApp h3 {{ color: {p.heading}; }}
.stApp p, .stApp label {{ color: {p.text}; }}
.signconvert-muted {{ color: {p.muted}; font-size: 0.875rem; }}
.signconvert-record {{ background: {p.record}; border-radius: 0.5rem; padding: 0.75rem 1rem; }}
</style>
"""
