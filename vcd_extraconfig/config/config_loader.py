# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/config/config_loader.py
"""
Configuration record and file loader.

The file is a flat JSON object:

    {
      "api": "37.0",
      "url": "https://vcd.example.com/api",
      "org": "Org1",
      "vdc": "Vdc1",
      "vapp": "App1",
      "user": "admin",
      "password": "secret"
    }

Every field is optional here; what an action actually needs is checked later,
after command-line overrides are applied. `.yaml`/`.yml` files are read with
PyYAML and must hold the same flat mapping.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..core.exceptions import ConfigNotFound, ConfigParseError

LOG = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.json"

_YAML_SUFFIXES = (".yaml", ".yml")


def _truthy(v: Any) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "yes", "on")
    return bool(v)


@dataclass(frozen=True)
class VcdConfig:
    api: str = ""
    url: str = ""
    org: str = ""
    vdc: str = ""
    vapp: str = ""
    user: str = ""
    password: str = ""
    # optional extensions to the basic file format
    insecure: bool = False
    password_env: str = ""

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "VcdConfig":
        kwargs: Dict[str, Any] = {}
        known = {f.name for f in fields(cls)}
        for k, v in data.items():
            if k not in known:
                LOG.debug("Ignoring unknown config key %r", k)
                continue
            if v is None:
                continue
            kwargs[k] = _truthy(v) if k == "insecure" else str(v)
        return cls(**kwargs)

    def with_overrides(
        self,
        *,
        org: Optional[str] = None,
        vdc: Optional[str] = None,
        vapp: Optional[str] = None,
        insecure: bool = False,
    ) -> "VcdConfig":
        """
        Return a copy where each non-empty override replaces the file value.
        """
        return replace(
            self,
            org=org or self.org,
            vdc=vdc or self.vdc,
            vapp=vapp or self.vapp,
            insecure=bool(insecure or self.insecure),
        )

    def resolved_password(self) -> str:
        if self.password:
            return self.password
        if self.password_env:
            return os.environ.get(self.password_env, "")
        return ""

    def __repr__(self) -> str:
        shown = ", ".join(
            f"{f.name}={'<redacted>' if f.name == 'password' and self.password else getattr(self, f.name)!r}"
            for f in fields(self)
        )
        return f"VcdConfig({shown})"


def _decode(path: Path, raw: bytes) -> Any:
    text = raw.decode("utf-8")
    if path.suffix.lower() in _YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)


def load_config(path: Union[str, Path], logger: Optional[logging.Logger] = None) -> VcdConfig:
    """
    Read and decode a configuration file.

    Raises ConfigNotFound when the file cannot be read and ConfigParseError when
    its content is not a JSON (or YAML) object. No defaults are synthesized.
    """
    log = logger or LOG
    p = Path(path).expanduser()
    try:
        raw = p.read_bytes()
    except OSError as e:
        raise ConfigNotFound(msg=f"cannot read config file {p}", cause=e, context={"path": str(p)})

    try:
        data = _decode(p, raw)
    except (UnicodeDecodeError, ValueError, yaml.YAMLError) as e:
        raise ConfigParseError(msg=f"cannot parse config file {p}", cause=e, context={"path": str(p)})

    if not isinstance(data, dict):
        raise ConfigParseError(
            msg=f"config file {p} must contain an object, got {type(data).__name__}",
            context={"path": str(p)},
        )

    cfg = VcdConfig.from_mapping(data)
    log.debug("Loaded config from %s: %r", p, cfg)
    return cfg
