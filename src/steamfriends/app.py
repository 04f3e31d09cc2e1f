"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from steamfriends.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    build_session_factory,
    startup,
)
from steamfriends.adapters.steam import SteamFetcher
from steamfriends.config import get_steam_config, obtain_credential, resolve_account_id
from steamfriends.domain.friend_sync import SyncFriendsResult, sync_friends
from steamfriends.domain.ports.unit_of_work import FriendUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from steamfriends.domain.ports.fetching import CredentialProvider, FriendFetcher

UnitOfWorkFactory = Callable[[], FriendUnitOfWork]

log = getLogger(__name__)


def sync_steam_friends(
    *,
    account_id: int | None = None,
    credential_provider: CredentialProvider = obtain_credential,
    fetcher: FriendFetcher | None = None,
    engine: Engine | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SyncFriendsResult:
    """Run one reconciliation pass of the configured account's Steam friend list."""

    # the account id is checked before anyone is asked to type a key
    if account_id is None:
        account_id = resolve_account_id()
    if fetcher is None:
        config = get_steam_config(api_key=credential_provider(), account_id=account_id)
        fetcher = SteamFetcher(config=config)

    if unit_of_work_factory is None:
        session_factory = build_session_factory(engine or startup())

        def _default_unit_of_work() -> FriendUnitOfWork:
            return SqlAlchemyUnitOfWork(session_factory)

        unit_of_work_factory = _default_unit_of_work

    log.info("Starting Steam friend sync for account %s", account_id)
    result = sync_friends(
        account_id=account_id,
        fetcher=fetcher,
        unit_of_work_factory=unit_of_work_factory,
    )
    log.info(
        "Finished Steam friend sync: fetched=%s, inserted=%s, updated=%s, restored=%s, "
        "removed=%s, names=%s",
        result.fetched,
        result.inserted,
        result.updated,
        result.restored,
        result.removed,
        result.names_recorded,
    )
    return result
