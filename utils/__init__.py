"""Utility modules for the translation gateway.

This package provides the process-wide logging setup.
"""

from utils.logger_utils import LoggerUtils

__all__: list[str] = ["LoggerUtils"]
