"""Command-line client for the Project Hosting issue tracker feeds."""

__version__ = "0.1.0"
