"""
Reporters
=========

Output formats for describe results.

CLIReporter
    Rich terminal tables.
JSONReporter
    One JSON document per multi-region describe.
JSONLinesSink
    Streaming sink writing one JSON record per line.
"""

from aws_describer.reporters.cli_reporter import CLIReporter
from aws_describer.reporters.json_reporter import JSONLinesSink, JSONReporter

__all__ = [
    "CLIReporter",
    "JSONLinesSink",
    "JSONReporter",
]
