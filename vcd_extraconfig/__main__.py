# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/__main__.py
from __future__ import annotations

import logging
import sys
import traceback
from typing import Optional, Sequence

from .cli.dispatcher import Dispatcher
from .cli.parser import parse_args
from .core.exceptions import Fatal, wrap_fatal
from .core.logger import Log


def _print_stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        logger = Log.setup(args.verbose, args.log_file)
    except OSError as e:
        raise wrap_fatal(f"cannot open log file {args.log_file}", e, log_file=args.log_file)
    return Dispatcher(logger, verbose=args.verbose).run(args)


def main(argv: Optional[Sequence[str]] = None) -> None:
    logger = logging.getLogger("vcd_extraconfig")
    try:
        rc = run(argv)
    except Fatal as e:
        _print_stderr(f"Error: {e.detail()}")
        rc = e.code
    except KeyboardInterrupt:
        _print_stderr("Interrupted by user (Ctrl+C).")
        rc = 130
    except Exception as e:
        # Unexpected exceptions should not fail silently.
        _print_stderr(f"💥 UNHANDLED {type(e).__name__}: {e}")
        logger.debug(traceback.format_exc())
        rc = 1

    raise SystemExit(rc)


if __name__ == "__main__":
    main()
