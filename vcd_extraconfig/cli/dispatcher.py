# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/cli/dispatcher.py
"""
One invocation, start to finish:

  validate action -> load config -> apply overrides -> validate identifiers
  -> open session -> resolve VM -> run one operation -> close session

Nothing touches the network until every usage check has passed, and the
session is closed on every path once it has been opened.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Callable, Optional, TextIO

from ..config.config_loader import VcdConfig, load_config
from ..core.exceptions import ConfigError, UsageError, VcdExtraConfigError, format_exception_for_cli
from ..core.logger import Log
from ..vcd.backend import VcdBackend
from ..vcd.client import open_session
from ..vcd.exceptions import OperationError, ResolutionError, VcdConnectionError
from ..vcd.extra_config import delete_extra_config, get_vm_info, set_extra_config
from ..vcd.resolver import resolve_vm
from .parser import build_parser
from .validators import Target, merge_target, validate_action, validate_target

SessionFactory = Callable[[VcdConfig, logging.Logger], VcdBackend]
ConfigLoader = Callable[[str, logging.Logger], VcdConfig]

_OPERATION_STEP = {
    "get": "getting parameters",
    "set": "setting ExtraConfig",
    "delete": "deleting ExtraConfig",
}


class Dispatcher:
    def __init__(
        self,
        logger: logging.Logger,
        *,
        session_factory: Optional[SessionFactory] = None,
        config_loader: Optional[ConfigLoader] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        verbose: int = 0,
    ) -> None:
        self.logger = logger
        self.session_factory = session_factory or open_session
        self.config_loader = config_loader or load_config
        self._out = out
        self._err = err
        self.verbose = verbose

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    def _fail(self, step: Optional[str], e: VcdExtraConfigError) -> int:
        detail = format_exception_for_cli(e, verbose=self.verbose)
        line = f"Error {step}: {detail}" if step else f"Error: {detail}"
        print(line, file=self.err)
        self.logger.debug("%s failed: %s", step or "validation", e.to_dict(include_cause=True))
        return e.code

    def run(self, args: argparse.Namespace) -> int:
        try:
            action = validate_action(args)
        except UsageError as e:
            rc = self._fail(None, e)
            build_parser().print_usage(self.err)
            return rc

        try:
            config = self.config_loader(args.config, self.logger)
        except ConfigError as e:
            return self._fail("loading configuration", e)

        try:
            target = validate_target(action, merge_target(args, config))
        except UsageError as e:
            return self._fail(None, e)

        # Login uses the file's org; -org only narrows the lookup, unless the
        # file has no org at all.
        session_config = config.with_overrides(
            org=None if config.org else target.org,
            insecure=bool(getattr(args, "insecure", False)),
        )

        Log.step(self.logger, "Connecting", url=session_config.url, org=session_config.org)
        try:
            backend = self.session_factory(session_config, self.logger)
        except VcdConnectionError as e:
            return self._fail("connecting", e)

        try:
            return self._perform(backend, action, target)
        finally:
            backend.close()

    def _perform(self, backend: VcdBackend, action: str, target: Target) -> int:
        Log.step(self.logger, "Resolving VM", org=target.org, vdc=target.vdc, vapp=target.vapp, vm=target.vm)
        try:
            vm = resolve_vm(backend, target.org, target.vdc, target.vapp, target.vm)
        except ResolutionError as e:
            return self._fail("finding VM", e)

        try:
            getattr(self, f"_do_{action}")(backend, vm, target)
        except OperationError as e:
            return self._fail(_OPERATION_STEP[action], e)
        Log.ok(self.logger, f"{action} completed", vm=target.vm)
        return 0

    def _do_find(self, backend: VcdBackend, vm: Any, target: Target) -> None:
        print(f"VM found: {backend.vm_name(vm)}", file=self.out)

    def _do_get(self, backend: VcdBackend, vm: Any, target: Target) -> None:
        get_vm_info(backend, vm, out=self.out)

    def _do_set(self, backend: VcdBackend, vm: Any, target: Target) -> None:
        set_extra_config(backend, vm, target.key, target.value)
        print(f"ExtraConfig {target.key}={target.value} set", file=self.out)

    def _do_delete(self, backend: VcdBackend, vm: Any, target: Target) -> None:
        delete_extra_config(backend, vm, target.key)
        print(f"ExtraConfig {target.key} deleted", file=self.out)
