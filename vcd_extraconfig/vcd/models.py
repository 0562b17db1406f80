# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/vcd/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

# CIM_ResourceAllocationSettingData.ResourceType values
RESOURCE_TYPE_PROCESSOR = 3
RESOURCE_TYPE_MEMORY = 4


@dataclass(frozen=True)
class ExtraConfigEntry:
    key: str
    value: str = ""


@dataclass(frozen=True)
class HardwareItem:
    resource_type: int
    name: str = ""      # rasd:ElementName, e.g. "2 virtual CPU(s)"
    quantity: int = 0   # rasd:VirtualQuantity
    units: str = ""     # rasd:AllocationUnits

    @property
    def is_processor(self) -> bool:
        return self.resource_type == RESOURCE_TYPE_PROCESSOR

    @property
    def is_memory(self) -> bool:
        return self.resource_type == RESOURCE_TYPE_MEMORY


@dataclass
class VmInfo:
    name: str
    hardware: List[HardwareItem] = field(default_factory=list)
    extra_config: List[ExtraConfigEntry] = field(default_factory=list)

    def cpu_memory_items(self) -> List[HardwareItem]:
        return [h for h in self.hardware if h.is_processor or h.is_memory]

    def extra_config_dict(self) -> Dict[str, str]:
        return {e.key: e.value for e in self.extra_config}
