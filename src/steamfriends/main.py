#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from steamfriends.app import sync_steam_friends
from steamfriends.config import (
    ConfigurationError,
    CredentialMissingError,
    configure_logging,
    obtain_credential,
    resolve_account_id,
)
from steamfriends.domain.errors import FriendSyncError, StorageError, UpstreamFetchError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

EXIT_FAILURE = 1

# most specific first: CredentialMissingError is a ConfigurationError
_FAILURE_LABELS: tuple[tuple[type[Exception], str], ...] = (
    (CredentialMissingError, "Credential missing"),
    (ConfigurationError, "Configuration error"),
    (UpstreamFetchError, "Upstream fetch failed"),
    (StorageError, "Storage failure"),
)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Fetch the Steam friend list of STEAM_ACCOUNT_ID and reconcile it into the "
            "local database. The API key is read from STEAM_API_KEY or prompted for."
        )
    )
    return parser.parse_args(list(argv))


def _failure_label(exc: Exception) -> str:
    for error_type, label in _FAILURE_LABELS:
        if isinstance(exc, error_type):
            return label
    return "Sync failed"


def main(argv: Sequence[str] | None = None) -> None:
    """Run one friend sync and exit non-zero if it did not complete.

    The Ctrl+C handler is installed only once the API key is known, so an
    interrupted key prompt is reported as a missing credential.
    """
    configure_logging()
    _parse_args(sys.argv[1:] if argv is None else argv)

    try:
        account_id = resolve_account_id()
        api_key = obtain_credential()
        signal(SIGINT, sigint_handler)
        sync_steam_friends(account_id=account_id, credential_provider=lambda: api_key)
    except (ConfigurationError, FriendSyncError) as exc:
        log.error("%s: %s", _failure_label(exc), exc)  # noqa: TRY400
        sys.exit(EXIT_FAILURE)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(EXIT_FAILURE)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    main()


if __name__ == "__main__":
    run()
