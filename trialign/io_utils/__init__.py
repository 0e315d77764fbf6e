"""
TriAlign v0.1.0

Report export for alignment results.

1. result_export.py - XML / JSON / text path reports
"""

from .result_export import (
    REPORT_EXTENSIONS,
    REPORT_FORMATS,
    alignment_rows,
    export_report,
    format_json_report,
    format_text_report,
    format_xml_report,
    render_report,
    result_to_dict,
)

__all__ = [
    "REPORT_EXTENSIONS",
    "REPORT_FORMATS",
    "alignment_rows",
    "export_report",
    "format_json_report",
    "format_text_report",
    "format_xml_report",
    "render_report",
    "result_to_dict",
]
