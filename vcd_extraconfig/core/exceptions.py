# SPDX-License-Identifier: LGPL-3.0-or-later
# vcd_extraconfig/core/exceptions.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


def _safe_int(x: Any, default: int = 1) -> int:
    try:
        return int(x)
    except (TypeError, ValueError):
        return default


def _clamp_exit_code(code: int) -> int:
    if code < 0:
        return 1
    if code > 255:
        return 255
    return code


def _one_line(s: str, limit: int = 600) -> str:
    s = (s or "").strip().replace("\r", " ").replace("\n", " ")
    s = " ".join(s.split())
    return s if len(s) <= limit else (s[: limit - 3] + "...")


_SECRET_KEY_PARTS = (
    "pass",
    "password",
    "passwd",
    "secret",
    "token",
    "auth",
    "cookie",
    "session",
    "bearer",
)


def _is_secret_key(k: str) -> bool:
    ks = (k or "").lower()
    return any(p in ks for p in _SECRET_KEY_PARTS)


def _format_context_compact(ctx: Dict[str, Any]) -> str:
    # Stable order, redaction, single-line.
    parts = []
    for k in sorted(ctx.keys()):
        v = ctx.get(k)
        if _is_secret_key(str(k)):
            parts.append(f"{k}=<redacted>")
        else:
            parts.append(f"{k}={v!r}")
    return ", ".join(parts)


@dataclass(eq=False)
class VcdExtraConfigError(Exception):
    """
    Base project error with:
      - stable fields for reporting/JSON
      - readable __str__ (what users see)
      - safe code handling (never crashes on int())
    """
    code: int = 1
    msg: str = "error"
    cause: Optional[BaseException] = None
    context: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        self.code = _clamp_exit_code(_safe_int(self.code, default=1))
        self.msg = _one_line(self.msg) or self.__class__.__name__
        super().__init__(self.msg)
        self.args = (self.msg,)

    def detail(self) -> str:
        """
        Message followed by the underlying cause text, if any.

        This is what the dispatcher prints after its step prefix, so the remote
        service's own wording reaches the user.
        """
        if self.cause is None:
            return self.msg
        cause = _one_line(str(self.cause))
        if not cause or cause in self.msg:
            return self.msg
        return f"{self.msg}: {cause}"

    def user_message(self, *, include_context: bool = False, include_cause: bool = False) -> str:
        """
        Human-friendly message for CLI output/logs.
        """
        base = self.msg or self.__class__.__name__
        parts = [base]

        if include_context and self.context:
            parts.append(f"[{_one_line(_format_context_compact(self.context), limit=600)}]")

        if include_cause and self.cause is not None:
            parts.append(f"(cause: {type(self.cause).__name__}: {_one_line(str(self.cause))})")

        return " ".join(parts)

    def __str__(self) -> str:
        return self.user_message(include_context=False, include_cause=False)

    def to_dict(self, *, include_cause: bool = False) -> Dict[str, Any]:
        ctx = {
            k: ("<redacted>" if _is_secret_key(str(k)) else v)
            for k, v in (self.context or {}).items()
        }
        d: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "code": self.code,
            "message": self.msg,
            "context": ctx,
        }
        if include_cause and self.cause is not None:
            d["cause"] = {"type": type(self.cause).__name__, "message": _one_line(str(self.cause))}
        return d


class Fatal(VcdExtraConfigError):
    """
    User-facing fatal error (exit code should be honored by top-level main()).
    """
    pass


class UsageError(VcdExtraConfigError):
    """
    Invocation is incomplete: no action, unknown action, or a required
    identifier is empty after config overrides were applied.
    """
    pass


class ConfigError(VcdExtraConfigError):
    pass


class ConfigNotFound(ConfigError):
    """Configuration file missing or unreadable."""
    pass


class ConfigParseError(ConfigError):
    """Configuration file is not a JSON/YAML object."""
    pass


def wrap_fatal(msg: str, exc: Optional[BaseException] = None, code: int = 1, **context: Any) -> Fatal:
    return Fatal(code=code, msg=msg, cause=exc, context=context or None)


def wrap_usage(msg: str, code: int = 1, **context: Any) -> UsageError:
    return UsageError(code=code, msg=msg, context=context or None)


def format_exception_for_cli(e: BaseException, *, verbose: int = 0) -> str:
    """
    One-liner output for CLI.

    verbose=0: message + cause detail
    verbose=1: message + cause detail + compact context (if any)
    verbose>=2: message + context + typed cause
    """
    if isinstance(e, VcdExtraConfigError):
        if verbose >= 2:
            return e.user_message(include_context=True, include_cause=True)
        out = e.detail()
        if verbose >= 1 and e.context:
            out += f" [{_one_line(_format_context_compact(e.context), limit=600)}]"
        return out

    if verbose >= 2:
        return f"{type(e).__name__}: {_one_line(str(e))}"
    return _one_line(str(e)) or type(e).__name__
