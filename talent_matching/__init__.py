"""Talent/offer matching core for the freelance staffing marketplace."""

__version__ = "0.1.0"
