"""
Structured logging for the CT/MRI analyser.

JSON logs with timestamp, level and event_type. Use get_logger() in every
module for aggregation-friendly output.
"""

from ctmri_analyzer.ctmri_logging.logger import configure_structlog, get_logger

__all__ = ["configure_structlog", "get_logger"]
