# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/cli/__init__.py
"""Command-line surface: argument parsing, validation, dispatch."""
from __future__ import annotations

from .dispatcher import Dispatcher
from .parser import ACTIONS, build_parser, parse_args
from .validators import REQUIRED_IDENTIFIERS, Target, merge_target, validate_action, validate_target

__all__ = [
    "ACTIONS",
    "Dispatcher",
    "REQUIRED_IDENTIFIERS",
    "Target",
    "build_parser",
    "merge_target",
    "parse_args",
    "validate_action",
    "validate_target",
]
