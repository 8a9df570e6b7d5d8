"""Build package index records from Debian binary package archives."""

__version__ = "0.1.0"
