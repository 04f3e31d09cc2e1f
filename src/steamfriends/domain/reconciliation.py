"""Reconcile a fetched friend snapshot against the stored friend state.

``reconcile`` is a pure function: it reads the snapshot and the state loaded at
the start of the run, and returns the writes needed to bring the current-state
table and the name history up to date. Applying the plan is the caller's job.

Rules, per account in the snapshot:

- unknown account: insert a summary and record its name;
- known account with a new name: update the summary, clear ``removed_at``,
  and record the name unless that exact pair is already in the history;
- known account back on the list: clear ``removed_at``;
- known account with only a new profile URL: update the summary;
- known account, nothing changed: no write.

Afterwards every known account missing from the snapshot that is not already
marked removed gets ``removed_at`` set.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING

from .model import NameHistoryEntry, PlayerSummary

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence
    from datetime import datetime

    from .model import AccountId, NameKey, ObservedFriend, ProfileDetails

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationPlan:
    """Writes produced by one reconciliation pass."""

    summary_upserts: list[PlayerSummary] = field(default_factory=list["PlayerSummary"])
    history_inserts: list[NameHistoryEntry] = field(default_factory=list["NameHistoryEntry"])
    removal_updates: list[PlayerSummary] = field(default_factory=list["PlayerSummary"])
    inserted: int = 0
    updated: int = 0
    restored: int = 0

    @property
    def removed(self) -> int:
        return len(self.removal_updates)

    @property
    def is_empty(self) -> bool:
        return not (self.summary_upserts or self.history_inserts or self.removal_updates)


def reconcile(
    current_fetch: Sequence[ObservedFriend],
    existing_summaries: Mapping[AccountId, PlayerSummary],
    *,
    known_names: Iterable[NameKey] = (),
    now: datetime,
) -> ReconciliationPlan:
    """Compute the writes that bring stored state in line with ``current_fetch``.

    ``current_fetch`` is the complete friend list for this run. ``known_names``
    holds the ``(account_id, display_name)`` pairs already in the history table.
    Every timestamp written by the plan is ``now``.
    """

    latest = _latest_by_account(current_fetch)
    recorded: set[NameKey] = set(known_names)
    plan = ReconciliationPlan()

    for account_id, observed in latest.items():
        profile = observed.profile
        existing = existing_summaries.get(account_id)

        if existing is None:
            plan.summary_upserts.append(
                PlayerSummary(
                    account_id=account_id,
                    display_name=profile.display_name,
                    profile_url=profile.profile_url,
                    friend_since=observed.friend.friend_since,
                    updated_at=now,
                )
            )
            plan.inserted += 1
            _record_name(plan, recorded, profile, now)
            continue

        name_changed = profile.display_name != existing.display_name
        url_changed = profile.profile_url != existing.profile_url
        if not (name_changed or url_changed or existing.is_removed):
            continue

        # friend_since is kept from the first observation
        plan.summary_upserts.append(
            replace(
                existing,
                display_name=profile.display_name,
                profile_url=profile.profile_url,
                updated_at=now,
                removed_at=None,
            )
        )
        if existing.is_removed:
            plan.restored += 1
        else:
            plan.updated += 1
        if name_changed:
            _record_name(plan, recorded, profile, now)

    for account_id in sorted(existing_summaries):
        existing = existing_summaries[account_id]
        if account_id in latest or existing.is_removed:
            continue
        plan.removal_updates.append(replace(existing, updated_at=now, removed_at=now))

    return plan


def _latest_by_account(current_fetch: Sequence[ObservedFriend]) -> dict[AccountId, ObservedFriend]:
    latest: dict[AccountId, ObservedFriend] = {}
    for observed in current_fetch:
        if observed.account_id in latest:
            log.warning(
                "Account %s listed more than once, keeping the last entry", observed.account_id
            )
        latest[observed.account_id] = observed
    return latest


def _record_name(
    plan: ReconciliationPlan,
    recorded: set[NameKey],
    profile: ProfileDetails,
    now: datetime,
) -> None:
    key = (profile.account_id, profile.display_name)
    if key in recorded:
        return
    recorded.add(key)
    plan.history_inserts.append(
        NameHistoryEntry(
            account_id=profile.account_id,
            display_name=profile.display_name,
            updated_at=now,
        )
    )
