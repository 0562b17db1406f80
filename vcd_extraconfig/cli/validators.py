# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from ..config.config_loader import VcdConfig
from ..core.exceptions import wrap_usage
from .parser import ACTIONS

REQUIRED_IDENTIFIERS: Dict[str, Tuple[str, ...]] = {
    "find": ("org", "vdc", "vapp", "vm"),
    "get": ("org", "vdc", "vapp", "vm"),
    "set": ("org", "vdc", "vapp", "vm", "key", "value"),
    "delete": ("org", "vdc", "vapp", "vm", "key"),
}

_FLAG_NAMES = {k: f"-{k}" for k in ("org", "vdc", "vapp", "vm", "key", "value")}


def _require(v: Any) -> bool:
    """True if v is meaningfully present (treats empty/whitespace-only strings as missing)."""
    if v is None:
        return False
    if isinstance(v, str):
        return v.strip() != ""
    return True


@dataclass(frozen=True)
class Target:
    """Identifiers for one invocation after config overrides were applied."""
    org: str
    vdc: str
    vapp: str
    vm: str
    key: str = ""
    value: str = ""


def validate_action(args: argparse.Namespace) -> str:
    action = (getattr(args, "action", None) or "").strip()
    if not action:
        raise wrap_usage("action must be specified (-action)")
    if action not in ACTIONS:
        raise wrap_usage(
            f"unknown action {action!r}. Available actions: {', '.join(ACTIONS)}", action=action
        )
    return action


def merge_target(args: argparse.Namespace, config: VcdConfig) -> Target:
    """Prefer CLI override if present (non-empty), else config."""
    scoped = config.with_overrides(
        org=getattr(args, "org", None),
        vdc=getattr(args, "vdc", None),
        vapp=getattr(args, "vapp", None),
    )
    return Target(
        org=scoped.org,
        vdc=scoped.vdc,
        vapp=scoped.vapp,
        vm=getattr(args, "vm", "") or "",
        key=getattr(args, "key", "") or "",
        value=getattr(args, "value", "") or "",
    )


def validate_target(action: str, target: Target) -> Target:
    required = REQUIRED_IDENTIFIERS[action]
    missing = [name for name in required if not _require(getattr(target, name))]
    if missing:
        raise wrap_usage(
            f"action {action!r} requires {', '.join(_FLAG_NAMES[n] for n in required)}; "
            f"missing: {', '.join(_FLAG_NAMES[n] for n in missing)}",
            action=action,
        )
    return target
