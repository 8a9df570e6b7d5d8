"""Parsers for Debian package metadata."""

from debscan.parsers.control import MalformedStanzaError, parse_control, parse_control_file

__all__ = ["parse_control", "parse_control_file", "MalformedStanzaError"]
