"""
Terminal output formatting for the generation scripts.

Colored output optimized for dark terminal backgrounds, plus report helpers for
roll tables and rarity breakdowns. Falls back to plain text when stdout is not
a TTY.
"""

import sys
from enum import Enum

from vendor_tables.models import RollTable


class Color(Enum):
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    BRIGHT_BLACK = "\033[90m"
    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_BLUE = "\033[94m"
    BRIGHT_MAGENTA = "\033[95m"
    BRIGHT_CYAN = "\033[96m"
    BRIGHT_WHITE = "\033[97m"


RARITY_COLORS = {
    "common": Color.BRIGHT_WHITE,
    "uncommon": Color.BRIGHT_YELLOW,
    "rare": Color.BRIGHT_BLUE,
    "unique": Color.BRIGHT_MAGENTA,
}


def _supports_color() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def colorize(text: str, *colors: Color) -> str:
    if not _supports_color():
        return text
    prefix = "".join(c.value for c in colors)
    return f"{prefix}{text}{Color.RESET.value}"


def info(message: str) -> None:
    print(message)


def success(message: str) -> None:
    print(colorize(message, Color.BRIGHT_GREEN))


def warning(message: str) -> None:
    print(colorize(f"⚠ {message}", Color.BRIGHT_YELLOW))


def error(message: str) -> None:
    print(colorize(f"✗ {message}", Color.BRIGHT_RED), file=sys.stderr)


def section_header(title: str) -> None:
    separator = "=" * 60
    print(f"\n{colorize(separator, Color.BRIGHT_BLUE)}")
    print(colorize(title, Color.BOLD, Color.BRIGHT_CYAN))
    print(colorize(separator, Color.BRIGHT_BLUE))


def subsection(title: str) -> None:
    print(f"\n{colorize(title, Color.BOLD)}")


def key_value(key: str, value: str, indent: int = 0) -> None:
    spaces = " " * indent
    colored_key = colorize(f"{key}:", Color.BRIGHT_WHITE)
    print(f"{spaces}{colored_key} {value}")


def bullet(message: str, indent: int = 2, symbol: str = "•") -> None:
    spaces = " " * indent
    print(f"{spaces}{colorize(symbol, Color.BRIGHT_BLUE)} {message}")


def code_block(content: str) -> None:
    print(colorize(content, Color.DIM))


def format_rarity_breakdown(breakdown: dict[str, int]) -> str:
    if not breakdown:
        return "none"
    parts = []
    for rarity, count in breakdown.items():
        color = RARITY_COLORS.get(rarity, Color.BRIGHT_WHITE)
        parts.append(f"{colorize(rarity, color)} {count}")
    return ", ".join(parts)


def table_summary(table: RollTable, indent: int = 2) -> None:
    key_value("Table", table.name, indent=indent)
    key_value(
        "Formula", f"{table.formula} ({len(table.results)} entries)", indent=indent
    )
