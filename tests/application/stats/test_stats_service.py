from unittest.mock import Mock

import pytest

from cardwise.application.stats.service import StudyStatsService
from cardwise.domain.models import Deck, ReviewEvent, StudySession
from cardwise.domain.ports import DeckStore
from cardwise.domain.stats.models import Trend
from cardwise.infrastructure.stores.memory import InMemoryDeckStore


@pytest.fixture
def decks(make_card, make_deck):
    return [
        make_deck("strong", cards=[make_card("s1", ease=2.6, reps=10)]),
        make_deck("weak", cards=[make_card("w1", ease=1.5, reps=10)]),
    ]


def test_report_from_store(decks):
    service = StudyStatsService(InMemoryDeckStore(decks))

    report = service.weakness_report()

    assert report.strong_topics == ["Strong"]
    assert [w.topic for w in report.weak_topics] == ["Weak"]


def test_derived_decks_are_not_counted_twice(decks):
    derived = Deck(
        id="mix",
        name="Mix",
        cards=[c for d in decks for c in d.cards],
        source_deck_ids=["strong", "weak"],
    )

    report = StudyStatsService(InMemoryDeckStore()).weakness_report(decks + [derived])

    assert [s.topic for s in report.topic_stats] == ["Strong", "Weak"]


def test_unavailable_store_gives_empty_report():
    store = InMemoryDeckStore()
    store.fail_on_load = True

    report = StudyStatsService(store).weakness_report()

    assert report.overall_accuracy == 0.0
    assert report.topic_stats == []
    assert report.trend is Trend.IMPROVING


def test_session_statistics(now):
    session = StudySession(
        id="s", deck_id="d", results=[ReviewEvent("a", 5, now), ReviewEvent("b", 1, now)]
    )

    stats = StudyStatsService(InMemoryDeckStore()).session_statistics(session)

    assert stats.total_reviews == 2
    assert stats.completion_rate == 50.0


def test_store_is_only_read_when_no_decks_are_given(decks):
    store = Mock(spec=DeckStore)
    service = StudyStatsService(store)

    service.weakness_report(decks)
    store.load_decks.assert_not_called()

    store.load_decks.return_value = decks
    service.weakness_report()
    store.load_decks.assert_called_once_with()
