"""Environment lookups shared by the configuration loaders."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def read_env(name: str) -> str | None:
    """Return the stripped value of ``name``; blank counts as unset."""

    value = os.getenv(name)
    if value is None:
        return None
    return value.strip() or None


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    found = {name: read_env(name) for name in names}
    missing = [name for name, value in found.items() if value is None]
    if missing:
        raise MissingConfigurationError(missing)
    return {name: value for name, value in found.items() if value is not None}


def require_env_var(name: str) -> str:
    return require_env_vars([name])[name]
