"""Telegram Clone admin panel backend"""

__version__ = "1.0.0"
