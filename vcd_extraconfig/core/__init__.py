# SPDX-License-Identifier: LGPL-3.0-or-later
# vcd_extraconfig/core/__init__.py
from .exceptions import VcdExtraConfigError, Fatal, UsageError, format_exception_for_cli
from .logger import Log

__all__ = ["VcdExtraConfigError", "Fatal", "UsageError", "format_exception_for_cli", "Log"]
