"""
JSON Reporter Module
====================

JSON output for described resources, in two shapes:

- :class:`JSONLinesSink` - a streaming sink writing one resource per
  line as soon as it is produced;
- :class:`JSONReporter` - a single document with metadata and all
  resources of a multi-region describe.

Example
-------
>>> with open("buses.jsonl", "w") as fh:
...     sink = JSONLinesSink(fh)
...     EVENTBRIDGE_BUS(ctx, client, stream=sink)
>>> sink.count
3

Output Structure
----------------
JSONReporter::

    {
      "metadata": {
        "resource_type": "AWS::Events::EventBus",
        "regions_described": ["us-east-1", "eu-west-1"],
        "total_resources": 3,
        "describe_time": "2024-01-15T10:30:00+00:00",
        "errors": {}
      },
      "summary_by_region": {"us-east-1": 2, "eu-west-1": 1},
      "resources": [...]
    }
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import IO, Any, Dict, Optional

from aws_describer.core.models import Resource
from aws_describer.core.region_manager import MultiRegionDescribeResult

logger = logging.getLogger(__name__)


class JSONLinesSink:
    """
    Streaming sink writing each resource as one JSON line.

    Parameters
    ----------
    fh : file-like
        Text stream to write to.
    resource_type : str, optional
        Added to each line as ``resource_type`` when given.
    flush : bool, default=True
        Flush after every line so downstream readers see records
        immediately.
    """

    def __init__(
        self,
        fh: IO[str],
        resource_type: Optional[str] = None,
        flush: bool = True,
    ) -> None:
        self.fh = fh
        self.resource_type = resource_type
        self.flush = flush
        self.count = 0

    def __call__(self, resource: Resource) -> None:
        record = resource.to_dict()
        if self.resource_type:
            record["resource_type"] = self.resource_type
        self.fh.write(json.dumps(record, default=str) + "\n")
        if self.flush:
            self.fh.flush()
        self.count += 1

    def __repr__(self) -> str:
        return f"JSONLinesSink(count={self.count})"


class JSONReporter:
    """
    Reporter exporting a multi-region describe result as one JSON document.

    Parameters
    ----------
    output_path : str, optional
        Output file. Defaults to a timestamped name in the current
        directory.
    indent : int, default=2
        JSON indentation; ``None`` for compact output.
    """

    def __init__(
        self,
        output_path: Optional[str] = None,
        indent: Optional[int] = 2,
    ) -> None:
        self.output_path = output_path
        self.indent = indent
        logger.debug(f"Initialized JSONReporter (output_path={output_path})")

    def _get_output_path(self, resource_type: str) -> Path:
        if self.output_path:
            return Path(self.output_path)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        slug = resource_type.lower().replace("::", "_")
        return Path(f"{slug}_{timestamp}.json")

    def report(self, result: MultiRegionDescribeResult) -> str:
        """
        Write ``result`` to a JSON file.

        Returns
        -------
        str
            Path of the written file.
        """
        output_path = self._get_output_path(result.resource_type)
        logger.info(f"Exporting {result.total_resources} resources to {output_path}")

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(result), f, indent=self.indent, default=str)

        logger.info(f"JSON export complete: {output_path}")
        return str(output_path)

    def to_string(self, result: MultiRegionDescribeResult) -> str:
        """Return the JSON document as a string."""
        return json.dumps(self.to_dict(result), indent=self.indent, default=str)

    def to_dict(self, result: MultiRegionDescribeResult) -> Dict[str, Any]:
        """Build the JSON document as a dictionary."""
        return {
            "metadata": {
                "resource_type": result.resource_type,
                "regions_described": result.regions_described,
                "successful_regions": len(result.successful_regions),
                "failed_regions": len(result.failed_regions),
                "total_resources": result.total_resources,
                "describe_time": result.describe_time.isoformat(),
                "errors": result.errors,
            },
            "summary_by_region": dict(result.resource_counts),
            "resources": [r.to_dict() for r in result.get_all_resources()],
        }

    def __repr__(self) -> str:
        return f"JSONReporter(output_path={self.output_path!r}, indent={self.indent})"
