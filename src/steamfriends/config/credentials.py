"""Credential lookup for the Steam Web API key."""

from __future__ import annotations

import getpass
from logging import getLogger
from typing import TYPE_CHECKING

from .env import read_env
from .errors import CredentialMissingError

if TYPE_CHECKING:
    from collections.abc import Callable

API_KEY_ENV_VAR = "STEAM_API_KEY"
API_KEY_PROMPT = "Enter your Steam API key: "

log = getLogger(__name__)


def obtain_credential(*, prompt: Callable[[str], str] = getpass.getpass) -> str:
    """Return the API key from ``STEAM_API_KEY`` or ask for it without echo.

    Raises ``CredentialMissingError`` if the variable is unset or blank and the
    prompt yields nothing (empty answer, EOF, or Ctrl+C).
    """

    value = read_env(API_KEY_ENV_VAR)
    if value is not None:
        return value

    log.debug("%s not set, prompting for the API key", API_KEY_ENV_VAR)
    try:
        answer = prompt(API_KEY_PROMPT)
    except (EOFError, KeyboardInterrupt) as exc:
        raise CredentialMissingError("No Steam API key entered") from exc

    if not answer or not answer.strip():
        raise CredentialMissingError(
            f"No Steam API key: set {API_KEY_ENV_VAR} or enter one at the prompt"
        )
    return answer.strip()
