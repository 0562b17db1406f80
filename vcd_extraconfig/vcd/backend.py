# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/vcd/backend.py
"""
Capability set the resolver and the extra-config operations rely on.

Handles returned by the lookup methods are opaque: callers only pass them back
into the same backend. Lookups return None when the named entity does not
exist under its parent; any other remote failure raises VcdApiError.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from .models import ExtraConfigEntry, HardwareItem


class VcdBackend(ABC):
    """An authenticated session against one Cloud Director endpoint."""

    # Resolution

    @abstractmethod
    def get_org(self, name: str) -> Optional[Any]:
        ...

    @abstractmethod
    def get_vdc(self, org: Any, name: str) -> Optional[Any]:
        ...

    @abstractmethod
    def get_vapp(self, vdc: Any, name: str) -> Optional[Any]:
        ...

    @abstractmethod
    def get_vm(self, vapp: Any, name: str) -> Optional[Any]:
        ...

    @abstractmethod
    def vm_name(self, vm: Any) -> str:
        ...

    # Extra configuration

    @abstractmethod
    def get_hardware_items(self, vm: Any) -> List[HardwareItem]:
        ...

    @abstractmethod
    def get_extra_config(self, vm: Any) -> List[ExtraConfigEntry]:
        ...

    @abstractmethod
    def update_extra_config(self, vm: Any, entries: Sequence[ExtraConfigEntry]) -> None:
        """Upsert: existing keys are overwritten, absent keys are created."""

    @abstractmethod
    def delete_extra_config(self, vm: Any, entries: Sequence[ExtraConfigEntry]) -> None:
        """Remove the given keys; values are ignored."""

    # Session

    @abstractmethod
    def close(self) -> None:
        """Release the session. Must be safe to call more than once."""

    def __enter__(self) -> "VcdBackend":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
