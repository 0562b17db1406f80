# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/__init__.py
"""
vcd-extraconfig - VMware Cloud Director VM ExtraConfig tool

Finds one VM by org / VDC / vApp / VM name and reads, sets or deletes its
ExtraConfig key/value entries.

Usage as a library:

    from vcd_extraconfig import get_vm_info, load_config, open_session, resolve_vm

    cfg = load_config("config.json")
    with open_session(cfg) as session:
        vm = resolve_vm(session, cfg.org, cfg.vdc, cfg.vapp, "VM1")
        info = get_vm_info(session, vm)
"""

__version__ = "0.1.0"

from .config import VcdConfig, load_config
from .vcd.client import open_session
from .vcd.extra_config import delete_extra_config, get_vm_info, set_extra_config
from .vcd.resolver import resolve_vm

__all__ = [
    "__version__",
    "VcdConfig",
    "load_config",
    "open_session",
    "resolve_vm",
    "get_vm_info",
    "set_extra_config",
    "delete_extra_config",
]
