# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/cli/parser.py
from __future__ import annotations

import argparse
from typing import Optional, Sequence

from ..config.config_loader import DEFAULT_CONFIG_PATH
from ..core.logger import c

ACTIONS = ("find", "get", "set", "delete")

EPILOG = """\
Examples:
  vcd-extraconfig -action find -vm VM1
  vcd-extraconfig -action get -vm VM1 -vapp App2
  vcd-extraconfig -action set -vm VM1 -key guestinfo.foo -value bar
  vcd-extraconfig -action delete -vm VM1 -key guestinfo.foo

-org, -vdc and -vapp fall back to the values in the config file when empty.
"""


class HelpFormatter(argparse.RawDescriptionHelpFormatter, argparse.ArgumentDefaultsHelpFormatter):
    """Combines raw description formatting with default value display in help."""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="vcd-extraconfig",
        description=c("vcd-extraconfig: read and edit Cloud Director VM ExtraConfig", "green", ["bold"]),
        formatter_class=HelpFormatter,
        epilog=EPILOG,
    )

    g = p.add_argument_group("Target")
    g.add_argument("-config", "--config", dest="config", default=DEFAULT_CONFIG_PATH,
                   help="Path to configuration file (JSON, or YAML by extension)")
    # Choices are checked by the dispatcher so an unknown action gets the same
    # error path and exit status as a missing one.
    g.add_argument("-action", "--action", dest="action", default="",
                   help=f"Action: {', '.join(ACTIONS)}")
    g.add_argument("-org", "--org", dest="org", default="", help="Organization name")
    g.add_argument("-vdc", "--vdc", dest="vdc", default="", help="VDC name")
    g.add_argument("-vapp", "--vapp", dest="vapp", default="", help="vApp name")
    g.add_argument("-vm", "--vm", dest="vm", default="", help="VM name")
    g.add_argument("-key", "--key", dest="key", default="", help="ExtraConfig key (for set/delete)")
    g.add_argument("-value", "--value", dest="value", default="", help="ExtraConfig value (for set)")

    o = p.add_argument_group("Output and connection")
    o.add_argument("-v", "--verbose", action="count", default=0,
                   help="More logging on stderr (-v info, -vv debug)")
    o.add_argument("--log-file", dest="log_file", default=None, help="Also write full debug logs to this file")
    o.add_argument("--insecure", action="store_true", help="Disable TLS certificate verification")
    return p


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
