"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Slate night palette with the periwinkle assistant accent
GEMINI_NIGHT = Theme(
    name="gemini-night",
    primary="#7480ff",      # Periwinkle - assistant accent
    secondary="#38bdf8",    # Sky - user accent
    accent="#818cf8",       # Indigo - highlights
    foreground="#e2e8f0",   # Slate 200 - text
    background="#020617",   # Slate 950 - deepest background
    success="#4ade80",
    warning="#fbbf24",
    error="#f87171",
    surface="#0f172a",      # Slate 900 - main surface
    panel="#1e293b",        # Slate 800 - panels
    dark=True,
    variables={
        "block-cursor-foreground": "#020617",
        "block-cursor-background": "#7480ff",
        "block-cursor-text-style": "bold",
        "block-hover-background": "#334155 20%",

        "input-cursor-background": "#e2e8f0",
        "input-cursor-foreground": "#020617",
        "input-selection-background": "#7480ff 30%",

        "border": "#334155",
        "border-blurred": "#1e293b",

        "scrollbar": "#1e293b",
        "scrollbar-hover": "#334155",
        "scrollbar-active": "#7480ff",
        "scrollbar-background": "#0f172a",
        "scrollbar-corner-color": "#0f172a",

        "footer-foreground": "#cbd5e1",
        "footer-background": "#020617",
        "footer-key-foreground": "#7480ff",
        "footer-key-background": "#1e293b",

        "text-muted": "#64748b",
        "text-disabled": "#475569",

        "link-color": "#38bdf8",
        "link-style": "underline",
    },
)
