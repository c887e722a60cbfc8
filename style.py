"""Centralized styling constants and helpers for WordScramble's UI."""

from __future__ import annotations

from dataclasses import dataclass

import tkinter as tk
from tkinter import font as tkfont


@dataclass(frozen=True)
class Colors:
    """Color palette used across the WordScramble UI."""

    background: str = "#121212"
    entry_background: str = "#2b2b2b"
    list_background: str = "#1e1e1e"
    list_select: str = "#3a3a3c"
    primary_text: str = "#ffffff"
    title_text: str = "#ffffff"
    score_text: str = "#ffa500"
    footer_text: str = "#666666"
    button_bg: str = "#2b2b2b"
    button_active_bg: str = "#3a3a3c"


@dataclass(frozen=True)
class Layout:
    """Layout and spacing guidelines for WordScramble widgets."""

    outer_padding: int = 8
    title_padding_bottom: int = 4
    score_padding_bottom: int = 6
    entry_padding_bottom: int = 8
    entry_internal_pady: int = 4
    list_padding_bottom: int = 8
    footer_padx: int = 8
    footer_pady: int = 8
    button_internal_padx: int = 8
    button_internal_pady: int = 2


COLORS = Colors()

ENTRY_WIDTH = 24
LIST_HEIGHT = 12

FONT_FAMILY = "Open Sans"

BODY_FONT_SIZE = 12
TITLE_FONT_SIZE = 20
WORD_FONT_SIZE = 14
FOOTER_FONT_SIZE = 8


@dataclass(frozen=True)
class Fonts:
    """Container for Tk font instances used throughout the UI."""

    body: tkfont.Font
    title: tkfont.Font
    word: tkfont.Font
    footer: tkfont.Font


def _font(root: tk.Misc, family: str, size: int, weight: str = "normal") -> tkfont.Font:
    """Return a Tk font, falling back to Tk's default family when unavailable."""

    try:
        return tkfont.Font(root=root, family=family, size=size, weight=weight)
    except tk.TclError:
        return tkfont.Font(root=root, size=size, weight=weight)


def load_fonts(root: tk.Misc, family: str = FONT_FAMILY) -> Fonts:
    """Create and return all fonts used by the UI.

    Args:
        root: Root Tk widget the fonts belong to.
        family: Preferred font family.

    Returns:
        Fonts dataclass containing Tk font instances.
    """

    return Fonts(
        body=_font(root, family, BODY_FONT_SIZE),
        title=_font(root, family, TITLE_FONT_SIZE, "bold"),
        word=_font(root, family, WORD_FONT_SIZE),
        footer=_font(root, family, FOOTER_FONT_SIZE),
    )


def compute_layout(word_font: tkfont.Font) -> Layout:
    """Return a Layout scaled proportionally to the current word font size."""

    base_size = WORD_FONT_SIZE or 14
    current_size = abs(int(word_font.cget("size") or base_size))
    scale = max(0.5, current_size / base_size)

    def scaled(value: int, minimum: int = 0) -> int:
        return max(minimum, int(round(value * scale)))

    return Layout(
        outer_padding=scaled(8, 2),
        title_padding_bottom=scaled(4, 1),
        score_padding_bottom=scaled(6, 2),
        entry_padding_bottom=scaled(8, 2),
        entry_internal_pady=scaled(4, 1),
        list_padding_bottom=scaled(8, 2),
        footer_padx=scaled(8, 2),
        footer_pady=scaled(8, 2),
        button_internal_padx=scaled(8, 2),
        button_internal_pady=scaled(2, 1),
    )


def format_used_word(word: str) -> str:
    """Return the list row for an accepted word: its length badge then the word."""

    return f"({len(word)})  {word}"
