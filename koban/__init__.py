"""Invoice Ninja toolkit: credentials, request planning, argument parsing and safe write helpers."""

__version__ = "0.2.1"