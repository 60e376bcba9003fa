"""Markdown reports and charts."""

from .report_generator import ReportGenerator
from .visualizer import ChartGenerator
