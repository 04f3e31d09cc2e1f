from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime, timedelta

from steamfriends.domain.model import NameHistoryEntry, PlayerSummary
from steamfriends.domain.reconciliation import reconcile
from tests.helpers.friends import FRIEND_SINCE, FriendStore, make_observed, make_summary

T1 = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)
T2 = T1 + timedelta(days=1)
T3 = T2 + timedelta(days=1)


def test_first_observation_inserts_summary_and_name() -> None:
    fetch = [make_observed(1, "Alice", url="https://steamcommunity.com/id/alice/")]

    plan = reconcile(fetch, {}, now=T1)

    assert plan.summary_upserts == [
        PlayerSummary(
            account_id=1,
            display_name="Alice",
            profile_url="https://steamcommunity.com/id/alice/",
            friend_since=FRIEND_SINCE,
            updated_at=T1,
            removed_at=None,
        )
    ]
    assert plan.history_inserts == [
        NameHistoryEntry(account_id=1, display_name="Alice", updated_at=T1)
    ]
    assert plan.removal_updates == []
    assert plan.inserted == 1


def test_unchanged_friend_produces_no_writes() -> None:
    store = FriendStore()
    fetch = [make_observed(1, "Alice"), make_observed(2, "Bob")]
    store.apply(reconcile(fetch, store.summaries, known_names=store.history, now=T1))

    second = reconcile(fetch, store.summaries, known_names=store.history, now=T2)

    assert second.is_empty
    assert (second.inserted, second.updated, second.restored, second.removed) == (0, 0, 0, 0)


def test_name_change_updates_summary_and_appends_history() -> None:
    store = FriendStore()
    store.apply(reconcile([make_observed(1, "A")], store.summaries, now=T1))

    plan = reconcile(
        [make_observed(1, "B", since=T2)], store.summaries, known_names=store.history, now=T2
    )
    store.apply(plan)

    summary = store.summaries[1]
    assert summary.display_name == "B"
    assert summary.updated_at == T2
    assert summary.friend_since == FRIEND_SINCE
    assert plan.updated == 1
    assert set(store.history) == {(1, "A"), (1, "B")}
    assert store.history[(1, "A")].updated_at == T1
    assert store.history[(1, "B")].updated_at == T2


def test_cycling_back_to_old_name_does_not_duplicate_history() -> None:
    store = FriendStore()
    for now, name in ((T1, "A"), (T2, "B"), (T3, "A")):
        plan = reconcile(
            [make_observed(1, name)], store.summaries, known_names=store.history, now=now
        )
        store.apply(plan)

    assert plan.history_inserts == []
    assert plan.updated == 1
    assert store.summaries[1].display_name == "A"
    assert store.summaries[1].updated_at == T3
    assert sorted(store.history) == [(1, "A"), (1, "B")]
    assert store.history[(1, "A")].updated_at == T1


def test_missing_friend_is_soft_deleted_once() -> None:
    store = FriendStore()
    store.apply(reconcile([make_observed(1, "A"), make_observed(2, "B")], {}, now=T1))

    plan = reconcile([make_observed(1, "A")], store.summaries, known_names=store.history, now=T2)
    store.apply(plan)

    assert [summary.account_id for summary in plan.removal_updates] == [2]
    assert store.summaries[2].removed_at == T2
    assert store.summaries[2].updated_at == T2
    assert store.summaries[1].removed_at is None

    again = reconcile([make_observed(1, "A")], store.summaries, known_names=store.history, now=T3)

    assert again.is_empty
    assert store.summaries[2].removed_at == T2


def test_reappearing_friend_is_restored_with_original_friend_since() -> None:
    store = FriendStore()
    store.apply(reconcile([make_observed(1, "A")], {}, now=T1))
    store.apply(reconcile([], store.summaries, known_names=store.history, now=T2))
    assert store.summaries[1].removed_at == T2

    plan = reconcile(
        [make_observed(1, "A", since=T3)], store.summaries, known_names=store.history, now=T3
    )
    store.apply(plan)

    assert plan.restored == 1
    assert plan.history_inserts == []
    assert store.summaries[1].removed_at is None
    assert store.summaries[1].updated_at == T3
    assert store.summaries[1].friend_since == FRIEND_SINCE


def test_reappearing_friend_with_new_name_records_the_name() -> None:
    existing = {1: make_summary(1, "A", updated_at=T1, removed_at=T2)}

    plan = reconcile([make_observed(1, "C")], existing, known_names={(1, "A")}, now=T3)

    assert plan.restored == 1
    assert plan.summary_upserts[0].removed_at is None
    assert [entry.key for entry in plan.history_inserts] == [(1, "C")]


def test_history_only_grows_across_runs() -> None:
    store = FriendStore()
    fetches = [
        [make_observed(1, "A"), make_observed(2, "X")],
        [make_observed(1, "B")],
        [make_observed(1, "A"), make_observed(2, "Y"), make_observed(3, "Z")],
        [],
    ]
    previous: dict[tuple[int, str], NameHistoryEntry] = {}
    for day, fetch in enumerate(fetches):
        now = T1 + timedelta(days=day)
        store.apply(reconcile(fetch, store.summaries, known_names=store.history, now=now))
        assert set(previous) <= set(store.history)
        for key, entry in previous.items():
            assert store.history[key] == entry
        previous = dict(store.history)

    assert sorted(store.history) == [(1, "A"), (1, "B"), (2, "X"), (2, "Y"), (3, "Z")]
    assert all(summary.is_removed for summary in store.summaries.values())


def test_profile_url_change_alone_updates_without_history() -> None:
    existing = {1: make_summary(1, "A", updated_at=T1)}

    plan = reconcile(
        [make_observed(1, "A", url="https://steamcommunity.com/id/new/")],
        existing,
        known_names={(1, "A")},
        now=T2,
    )

    assert plan.updated == 1
    assert plan.summary_upserts[0].profile_url == "https://steamcommunity.com/id/new/"
    assert plan.history_inserts == []


def test_duplicate_account_in_fetch_keeps_last_entry() -> None:
    fetch = [make_observed(1, "First"), make_observed(2, "Other"), make_observed(1, "Second")]

    plan = reconcile(fetch, {}, now=T1)

    assert [(s.account_id, s.display_name) for s in plan.summary_upserts] == [
        (1, "Second"),
        (2, "Other"),
    ]
    assert [entry.key for entry in plan.history_inserts] == [(1, "Second"), (2, "Other")]


def test_name_comparison_is_exact() -> None:
    composed = "Caf\u00e9"
    decomposed = "Cafe\u0301"
    existing = {1: make_summary(1, composed, updated_at=T1)}

    plan = reconcile([make_observed(1, decomposed)], existing, known_names={(1, composed)}, now=T2)

    assert plan.summary_upserts[0].display_name == decomposed
    assert [entry.key for entry in plan.history_inserts] == [(1, decomposed)]


def test_known_name_for_new_account_is_not_reinserted() -> None:
    plan = reconcile([make_observed(7, "Known")], {}, known_names={(7, "Known")}, now=T1)

    assert plan.inserted == 1
    assert plan.history_inserts == []


def test_reconcile_does_not_mutate_inputs() -> None:
    existing = {1: make_summary(1, "A", updated_at=T1), 2: make_summary(2, "B", updated_at=T1)}
    snapshot = dict(existing)
    known = {(1, "A"), (2, "B")}
    fetch = [make_observed(1, "A2")]

    reconcile(fetch, existing, known_names=known, now=T2)

    assert existing == snapshot
    assert known == {(1, "A"), (2, "B")}
    assert existing[1] == replace(snapshot[1])
