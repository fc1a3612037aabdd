"""Evaluator configuration.

Limits that bound the work a single evaluation may do. Defaults apply when
nothing is configured; EvaluatorConfig.from_env() picks up overrides from
the process environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

DEFAULT_MAX_LENGTH = 2048
DEFAULT_MAX_DEPTH = 100
# Each nesting level costs about four stack frames; stay well under the
# interpreter recursion limit.
MAX_DEPTH_LIMIT = 200

# Environment overrides, read only by from_env().
ENV_MAX_LENGTH = "EXPRCALC_MAX_LENGTH"
ENV_MAX_DEPTH = "EXPRCALC_MAX_DEPTH"


def _positive_int(name: str, raw: str) -> int:
    """Parse a positive integer setting, naming the setting on failure."""
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class EvaluatorConfig:
    """Tunable limits for evaluate().

    Attributes:
        max_length: Longest accepted expression, checked before parsing.
        max_depth: Deepest accepted parenthesis nesting, at most MAX_DEPTH_LIMIT.
    """

    max_length: int = DEFAULT_MAX_LENGTH
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_length <= 0:
            raise ValueError(f"max_length must be positive, got {self.max_length}")
        if self.max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if self.max_depth > MAX_DEPTH_LIMIT:
            raise ValueError(f"max_depth must be at most {MAX_DEPTH_LIMIT}, got {self.max_depth}")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> EvaluatorConfig:
        """Build a config from EXPRCALC_* variables.

        Args:
            env: Mapping to read from. Defaults to os.environ.

        Raises:
            ValueError: If a variable is set but is not a positive integer, or
                the depth exceeds MAX_DEPTH_LIMIT.
        """
        env = os.environ if env is None else env
        kwargs: dict[str, int] = {}
        raw_length = env.get(ENV_MAX_LENGTH, "")
        if raw_length.strip():
            kwargs["max_length"] = _positive_int(ENV_MAX_LENGTH, raw_length)
        raw_depth = env.get(ENV_MAX_DEPTH, "")
        if raw_depth.strip():
            kwargs["max_depth"] = _positive_int(ENV_MAX_DEPTH, raw_depth)
        return cls(**kwargs)

    def with_overrides(
        self,
        max_length: Optional[int] = None,
        max_depth: Optional[int] = None,
    ) -> EvaluatorConfig:
        """Return a copy with any non-None limits replaced (CLI options win)."""
        changes: dict[str, int] = {}
        if max_length is not None:
            changes["max_length"] = max_length
        if max_depth is not None:
            changes["max_depth"] = max_depth
        return replace(self, **changes) if changes else self


DEFAULT_CONFIG = EvaluatorConfig()
