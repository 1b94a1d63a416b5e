"""Markdown report rendering and persistence."""

from healthguard.report.markdown import render_report
from healthguard.report.writer import ReportPaths, snapshot_filename, write_report

__all__ = ["ReportPaths", "render_report", "snapshot_filename", "write_report"]
