# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/vcd/__init__.py
"""VMware Cloud Director access: session, VM resolution, extra config."""

from .backend import VcdBackend
from .models import ExtraConfigEntry, HardwareItem, VmInfo
from .resolver import resolve_vm

__all__ = ["VcdBackend", "ExtraConfigEntry", "HardwareItem", "VmInfo", "resolve_vm"]
