# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/vcd/resolver.py
"""Name-to-handle resolution: org -> vdc -> vApp -> VM."""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Type

from .backend import VcdBackend
from .exceptions import (
    OrgNotFound,
    ResolutionError,
    VappNotFound,
    VcdApiError,
    VdcNotFound,
    VmNotFound,
)

LOG = logging.getLogger(__name__)

_LABELS = {"org": "org", "vdc": "VDC", "vapp": "vApp", "vm": "VM"}


def _lookup(
    kind: str,
    name: str,
    fetch: Callable[[], Optional[Any]],
    not_found: Type[ResolutionError],
    **scope: str,
) -> Any:
    label = _LABELS[kind]
    try:
        handle = fetch()
    except VcdApiError as e:
        raise not_found(msg=f"{label} {name!r} lookup failed", cause=e.cause or e, context={kind: name, **scope})
    if handle is None:
        raise not_found(msg=f"{label} {name!r} not found", context={kind: name, **scope})
    LOG.debug("Resolved %s %r", label, name)
    return handle


def resolve_vm(backend: VcdBackend, org: str, vdc: str, vapp: str, vm: str) -> Any:
    """
    Walk the hierarchy one level at a time. The first lookup that fails raises
    its own error kind and the remaining levels are not queried.
    """
    org_h = _lookup("org", org, lambda: backend.get_org(org), OrgNotFound)
    vdc_h = _lookup("vdc", vdc, lambda: backend.get_vdc(org_h, vdc), VdcNotFound, org=org)
    vapp_h = _lookup("vapp", vapp, lambda: backend.get_vapp(vdc_h, vapp), VappNotFound, org=org, vdc=vdc)
    return _lookup("vm", vm, lambda: backend.get_vm(vapp_h, vm), VmNotFound, org=org, vdc=vdc, vapp=vapp)
