"""
JSON export for IPLens
"""

import json

from ..models import OutputRecord


class JsonExporter:
    """
    Render output records as pretty-printed JSON.

    Absent fields are left out entirely, never written as null. Non-ASCII
    place names are written as-is.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def render(self, record: OutputRecord) -> str:
        return json.dumps(record.to_dict(), indent=self.indent, ensure_ascii=False)
