"""
Optional values and the operators that surround them.

The package models a value that may be absent as an explicit two-state
container and makes every way of getting at the payload a deliberate,
visible operation:

* ``optional`` – :class:`Optional` with its :class:`Present` state and the
  :data:`ABSENT` singleton, plus :class:`ImplicitlyUnwrappedOptional` and
  :func:`assign` for plain-typed boundaries.
* ``binding`` – chained conditional binding with short-circuit evaluation.
* ``fatal`` and ``checks`` – unrecoverable termination, assertions and
  preconditions controlled by the configured build mode.
* ``operators`` – remainder, checked integer arithmetic and lexicographic
  tuple comparison.
* ``conversion`` – failable parsing that returns optionals.
* ``config`` – runtime configuration from ``fundamentals.toml`` and the
  environment.
* ``tour`` and ``cli`` – a printed walkthrough of all of the above.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata

from .binding import BindResult, bind, if_let, when
from .checks import assert_, assertion_failure, precondition, precondition_failure, require_bool
from .config import BuildMode, RuntimeConfig, get_config, set_config
from .conversion import parse_float, parse_int
from .errors import ConfigError, ContractViolationError, FundamentalsError
from .fatal import fatal_error, unimplemented
from .operators import compare_tuples, remainder, tuple_lt, tuples_equal
from .optional import ABSENT, ImplicitlyUnwrappedOptional, Optional, Present, assign


def _local_version() -> str | None:
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("fundamentals")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "0.1.0"

__all__ = [
    "__version__",
    "ABSENT",
    "BindResult",
    "BuildMode",
    "ConfigError",
    "ContractViolationError",
    "FundamentalsError",
    "ImplicitlyUnwrappedOptional",
    "Optional",
    "Present",
    "RuntimeConfig",
    "assert_",
    "assertion_failure",
    "assign",
    "bind",
    "compare_tuples",
    "fatal_error",
    "get_config",
    "if_let",
    "parse_float",
    "parse_int",
    "precondition",
    "precondition_failure",
    "remainder",
    "require_bool",
    "set_config",
    "tuple_lt",
    "tuples_equal",
    "unimplemented",
    "when",
]
