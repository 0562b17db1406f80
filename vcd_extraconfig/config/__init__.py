# SPDX-License-Identifier: LGPL-3.0-or-later
# vcd_extraconfig/config/__init__.py
"""Configuration file handling."""

from .config_loader import DEFAULT_CONFIG_PATH, VcdConfig, load_config

__all__ = ["DEFAULT_CONFIG_PATH", "VcdConfig", "load_config"]
