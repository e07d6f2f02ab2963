"""Terminal text styles used for command output."""

from __future__ import annotations

from dataclasses import dataclass

RESET = "\x1b[0m"

_BORDER_TOP_LEFT = "┌"
_BORDER_TOP_RIGHT = "┐"
_BORDER_BOTTOM_LEFT = "└"
_BORDER_BOTTOM_RIGHT = "┘"
_BORDER_HORIZONTAL = "─"
_BORDER_VERTICAL = "│"


def _sgr(codes: list[str], text: str) -> str:
    if not codes or not text:
        return text
    return f"\x1b[{';'.join(codes)}m{text}{RESET}"


@dataclass(frozen=True)
class Style:
    """A text style: 256-colour foreground, emphasis, margins and an optional border."""

    foreground: int | None = None
    bold: bool = False
    italic: bool = False
    margin: tuple[int, int] = (0, 0)
    border: bool = False
    border_foreground: int | None = None

    def _codes(self) -> list[str]:
        codes = []
        if self.bold:
            codes.append("1")
        if self.italic:
            codes.append("3")
        if self.foreground is not None:
            codes.append(f"38;5;{self.foreground}")
        return codes

    def _border_codes(self) -> list[str]:
        if self.border_foreground is None:
            return []
        return [f"38;5;{self.border_foreground}"]

    def render(self, *args: object) -> str:
        """Join the arguments with spaces and apply the style to the result."""
        text = " ".join(str(arg) for arg in args)
        lines = text.split("\n")
        codes = self._codes()

        if self.border:
            width = max(len(line) for line in lines)
            border_codes = self._border_codes()
            vertical = _sgr(border_codes, _BORDER_VERTICAL)
            top = _sgr(
                border_codes,
                _BORDER_TOP_LEFT + _BORDER_HORIZONTAL * width + _BORDER_TOP_RIGHT,
            )
            bottom = _sgr(
                border_codes,
                _BORDER_BOTTOM_LEFT + _BORDER_HORIZONTAL * width + _BORDER_BOTTOM_RIGHT,
            )
            body = [vertical + _sgr(codes, line.ljust(width)) + vertical for line in lines]
            rendered = [top, *body, bottom]
        else:
            rendered = [_sgr(codes, line) for line in lines]

        vertical_margin, horizontal_margin = self.margin
        if horizontal_margin:
            pad = " " * horizontal_margin
            rendered = [pad + line + pad for line in rendered]
        if vertical_margin:
            blank = [""] * vertical_margin
            rendered = [*blank, *rendered, *blank]
        return "\n".join(rendered)


TEXT_STYLE = Style(foreground=254)
SUCCESS_STYLE = Style(foreground=46)
SPINNER_STYLE = Style(foreground=69)
HELP_STYLE = Style(foreground=241)
ERROR_STYLE = Style(foreground=196)
WARN_STYLE = Style(foreground=226)
TITLE_STYLE = Style(foreground=205, bold=True)
OPTION_STYLE = Style(foreground=15)
SELECTED_OPTION_STYLE = Style(foreground=46, bold=True)
CURSOR_OPTION_STYLE = Style(foreground=220, italic=True)
HIGHLIGHT_STYLE = Style(foreground=220, bold=True)
HINT_STYLE = Style(foreground=42)
DOC_STYLE = Style(margin=(0, 2))
BASE_STYLE = Style(border=True, border_foreground=240)