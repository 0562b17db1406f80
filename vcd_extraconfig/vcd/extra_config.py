# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/vcd/extra_config.py
"""
Read, upsert and delete operations against a resolved VM.

Each mutating call sends exactly one key. Nothing is validated or retried
locally; the service's own semantics and errors apply.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, TextIO

from .backend import VcdBackend
from .exceptions import (
    ExtraConfigDeleteError,
    ExtraConfigFetchError,
    ExtraConfigSetError,
    HardwareFetchError,
    VcdApiError,
)
from .models import ExtraConfigEntry, HardwareItem, VmInfo

LOG = logging.getLogger(__name__)


def fetch_hardware(backend: VcdBackend, vm: Any) -> List[HardwareItem]:
    try:
        return backend.get_hardware_items(vm)
    except VcdApiError as e:
        raise HardwareFetchError(msg="error fetching hardware section", cause=e.cause or e, context=e.context)


def fetch_extra_config(backend: VcdBackend, vm: Any) -> List[ExtraConfigEntry]:
    try:
        return backend.get_extra_config(vm)
    except VcdApiError as e:
        raise ExtraConfigFetchError(msg="error fetching extra config", cause=e.cause or e, context=e.context)


def format_hardware(name: str, items: Iterable[HardwareItem]) -> List[str]:
    lines = [f"VM Name: {name}"]
    for item in items:
        if item.is_processor:
            lines.append(f"CPU: {item.quantity}")
        elif item.is_memory:
            lines.append(f"Memory: {item.quantity} MB")
    return lines


def format_extra_config(entries: Iterable[ExtraConfigEntry]) -> List[str]:
    return ["ExtraConfig:"] + [f"  {e.key}: {e.value}" for e in entries]


def get_vm_info(backend: VcdBackend, vm: Any, out: Optional[TextIO] = None) -> VmInfo:
    """
    Hardware first, then extra config, as two separate calls.

    With `out`, the hardware lines are written before the extra-config call is
    made, so a failure there leaves the hardware portion already printed.
    """
    info = VmInfo(name=backend.vm_name(vm))
    info.hardware = fetch_hardware(backend, vm)
    for item in info.cpu_memory_items():
        LOG.debug("Hardware item %r: %s %s", item.name, item.quantity, item.units)
    if out is not None:
        for line in format_hardware(info.name, info.hardware):
            print(line, file=out)

    info.extra_config = fetch_extra_config(backend, vm)
    if out is not None:
        for line in format_extra_config(info.extra_config):
            print(line, file=out)
    return info


def set_extra_config(backend: VcdBackend, vm: Any, key: str, value: str) -> None:
    entry = ExtraConfigEntry(key=key, value=value)
    try:
        backend.update_extra_config(vm, [entry])
    except VcdApiError as e:
        raise ExtraConfigSetError(msg="error setting extra config", cause=e.cause or e, context={"key": key})
    LOG.info("ExtraConfig %s updated on %s", key, backend.vm_name(vm))


def delete_extra_config(backend: VcdBackend, vm: Any, key: str) -> None:
    entry = ExtraConfigEntry(key=key)
    try:
        backend.delete_extra_config(vm, [entry])
    except VcdApiError as e:
        raise ExtraConfigDeleteError(msg="error deleting extra config", cause=e.cause or e, context={"key": key})
    LOG.info("ExtraConfig %s removed from %s", key, backend.vm_name(vm))
