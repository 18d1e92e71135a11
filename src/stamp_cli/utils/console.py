"""Console utility functions for formatting and output."""

import click
from typing import Optional, Any

from colorama import Fore, Style, init
from rich.console import Console

init(autoreset=True)


# Status symbols for consistent iconography
STATUS_SYMBOLS = {
    'gear': '⚙️',
    'warning': '⚠️',
    'check': '✅',
}

_COLORAMA_COLORS = {
    'red': Fore.RED,
    'green': Fore.GREEN,
    'yellow': Fore.YELLOW,
    'blue': Fore.BLUE,
    'cyan': Fore.CYAN,
    'white': Fore.WHITE,
    'magenta': Fore.MAGENTA,
    'muted': Fore.WHITE,
}


def _get_console() -> Optional[Any]:
    """Get Rich console instance, or None if the terminal cannot host one."""
    try:
        return Console()
    except Exception:
        return None


def _rich_echo(message: str, color: str = "white", bold: bool = False, symbol: str = None):
    """Echo message with Rich formatting or colorama fallback."""
    if symbol and symbol in STATUS_SYMBOLS:
        message = f"{STATUS_SYMBOLS[symbol]} {message}"

    console = _get_console()
    if console:
        style = f"bold {color}" if bold else color
        # markup off: copyright text routinely contains [brackets]
        console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)
        return

    color_code = _COLORAMA_COLORS.get(color, Fore.WHITE)
    style_code = Style.BRIGHT if bold else ""
    click.echo(f"{color_code}{style_code}{message}{Style.RESET_ALL}")


def _rich_success(message: str, symbol: str = None):
    """Display success message with green color and bold styling."""
    _rich_echo(message, color="green", symbol=symbol, bold=True)


def _rich_error(message: str, symbol: str = None):
    """Display error message with red color."""
    _rich_echo(message, color="red", symbol=symbol)


def _rich_warning(message: str, symbol: str = None):
    """Display warning message with yellow color."""
    _rich_echo(message, color="yellow", symbol=symbol)


def _rich_info(message: str, symbol: str = None):
    """Display info message with blue color."""
    _rich_echo(message, color="blue", symbol=symbol)
