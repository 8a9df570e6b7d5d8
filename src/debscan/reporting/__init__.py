"""Reporting and output generation."""

from debscan.reporting.json_output import load_json_output, results_to_json, write_json_output

__all__ = ["results_to_json", "write_json_output", "load_json_output"]
