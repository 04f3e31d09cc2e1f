"""Application service running one friend reconciliation pass."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import UpstreamFetchError
from .model import ObservedFriend
from .reconciliation import ReconciliationPlan, reconcile

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .model import AccountId
    from .ports.fetching import FriendFetcher
    from .ports.unit_of_work import FriendUnitOfWork

log = getLogger(__name__)


@dataclass(slots=True)
class SyncFriendsResult:
    """Outcome of a friend sync."""

    fetched: int
    inserted: int
    updated: int
    removed: int
    restored: int
    names_recorded: int

    @classmethod
    def from_plan(cls, plan: ReconciliationPlan, *, fetched: int) -> SyncFriendsResult:
        return cls(
            fetched=fetched,
            inserted=plan.inserted,
            updated=plan.updated,
            removed=plan.removed,
            restored=plan.restored,
            names_recorded=len(plan.history_inserts),
        )


def _utcnow() -> datetime:
    return datetime.now(UTC)


def fetch_observed_friends(fetcher: FriendFetcher, account_id: AccountId) -> list[ObservedFriend]:
    """Fetch the friend list of ``account_id`` and pair each entry with its profile."""

    friends = list(fetcher.list_friends(account_id))
    if not friends:
        return []

    account_ids = _deduplicated_ids([friend.account_id for friend in friends])
    profiles = fetcher.get_profile_details(account_ids)

    missing = [aid for aid in account_ids if aid not in profiles]
    if missing:
        # an incomplete snapshot would mark these accounts as removed
        raise UpstreamFetchError(
            f"No profile details returned for {len(missing)} friend(s): "
            + ", ".join(str(aid) for aid in missing)
        )

    return [
        ObservedFriend(friend=friend, profile=profiles[friend.account_id]) for friend in friends
    ]


def sync_friends(
    *,
    account_id: AccountId,
    fetcher: FriendFetcher,
    unit_of_work_factory: Callable[[], FriendUnitOfWork],
    now_provider: Callable[[], datetime] = _utcnow,
) -> SyncFriendsResult:
    """Fetch the current friend list and reconcile it into storage in one transaction."""

    observed = fetch_observed_friends(fetcher, account_id)
    log.info("Fetched %s friends of account %s", len(observed), account_id)

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        existing = repositories.player_summaries.load_all()
        known_names = repositories.name_history.load_keys()

        plan = reconcile(observed, existing, known_names=known_names, now=now_provider())
        if plan.is_empty:
            log.info("Stored friend state already up to date (%s accounts)", len(existing))
        else:
            _apply_plan(uow, plan)
            uow.commit()

    return SyncFriendsResult.from_plan(plan, fetched=len(observed))


def _apply_plan(uow: FriendUnitOfWork, plan: ReconciliationPlan) -> None:
    repositories = uow.repositories
    repositories.player_summaries.upsert([*plan.summary_upserts, *plan.removal_updates])
    repositories.name_history.add(plan.history_inserts)
    log.info(
        "Reconciled friends: inserted=%s, updated=%s, restored=%s, removed=%s, names=%s",
        plan.inserted,
        plan.updated,
        plan.restored,
        plan.removed,
        len(plan.history_inserts),
    )


def _deduplicated_ids(account_ids: Sequence[AccountId]) -> list[AccountId]:
    return list(dict.fromkeys(account_ids))
