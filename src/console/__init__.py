"""
Roll Dice Console.

Line-based input helpers, the option menu, and the program entrypoint.
"""

from src.console.menu import Menu, MenuOption

__all__ = ["Menu", "MenuOption"]
