from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_ALGORITHM = "nelder-mead"

ENV_ALGORITHM = "ACCESSOPT_ALGORITHM"
ENV_MAXITERS = "ACCESSOPT_MAXITERS"


def _env_int(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc
    if value < 1:
        raise ValueError(f"{name} must be positive, got {value}.")
    return value


@dataclass
class SolveDefaults:
    """Fallback values for solve() arguments the caller leaves out."""

    # Capture the environment at instantiation time so tests that tweak
    # the variables take effect even if the module was imported earlier.
    algorithm: str = field(default_factory=lambda: os.environ.get(ENV_ALGORITHM, "").strip() or DEFAULT_ALGORITHM)
    maxiters: int | None = field(default_factory=lambda: _env_int(ENV_MAXITERS))

    def resolve_algorithm(self, algorithm: str | None) -> str:
        if algorithm is None or not str(algorithm).strip():
            return self.algorithm
        return str(algorithm)

    def apply(self, options: dict[str, object]) -> dict[str, object]:
        """Return a copy of solver options with defaults filled in."""
        merged = dict(options)
        if self.maxiters is not None:
            merged.setdefault("maxiters", self.maxiters)
        return merged


__all__ = ["DEFAULT_ALGORITHM", "ENV_ALGORITHM", "ENV_MAXITERS", "SolveDefaults"]
