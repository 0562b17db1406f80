# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/vcd/exceptions.py

from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import VcdExtraConfigError


class VcdError(VcdExtraConfigError):
    """
    Base exception for Cloud Director operations.

    Inherits exception handling from VcdExtraConfigError:
    - Exit codes, context tracking, cause chaining
    - Secret redaction, user messages, JSON serialization
    """
    pass


class VcdApiError(VcdError):
    """
    A single remote call failed.

    Raised by backends; operations and the resolver re-wrap it into the
    step-specific kind below.
    """
    pass


# Connection

class VcdConnectionError(VcdError):
    pass


class InvalidURL(VcdConnectionError):
    """Configured base URL is not an absolute http(s) URL."""
    pass


class AuthenticationError(VcdConnectionError):
    """Login rejected, or the login call could not complete (network, TLS, timeout)."""
    pass


# Resolution

class ResolutionError(VcdError):
    pass


class OrgNotFound(ResolutionError):
    pass


class VdcNotFound(ResolutionError):
    pass


class VappNotFound(ResolutionError):
    pass


class VmNotFound(ResolutionError):
    pass


# Operations

class OperationError(VcdError):
    pass


class HardwareFetchError(OperationError):
    pass


class ExtraConfigFetchError(OperationError):
    pass


class ExtraConfigSetError(OperationError):
    pass


class ExtraConfigDeleteError(OperationError):
    pass


def wrap_vcd_api_error(msg: str, exc: Optional[BaseException] = None, code: int = 1, **context: Any) -> VcdApiError:
    """Wrap a pyvcloud/requests failure with context."""
    return VcdApiError(code=code, msg=msg, cause=exc, context=context or None)


def wrap_auth_error(msg: str, exc: Optional[BaseException] = None, code: int = 1, **context: Any) -> AuthenticationError:
    return AuthenticationError(code=code, msg=msg, cause=exc, context=context or None)
