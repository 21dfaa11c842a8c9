"""Tests for the study service orchestration."""

import logging
from datetime import timedelta

import pytest

from cardwise.application.config import AppConfig
from cardwise.application.feedback import FeedbackTier
from cardwise.application.study_service import StudyService
from cardwise.domain.errors import InvalidArgumentError
from cardwise.domain.models import Card, Deck, ReviewEvent, StudySession
from cardwise.infrastructure.stores.memory import InMemoryDeckStore


@pytest.fixture
def store():
    return InMemoryDeckStore()


@pytest.fixture
def service(store, app_config):
    return StudyService(store, config=app_config)


@pytest.fixture
def source(make_deck):
    return make_deck("bio", size=3, category="Biology")


class TestPersistence:
    def test_load_failure_yields_no_decks(self, service, store, caplog):
        store.fail_on_load = True

        with caplog.at_level(logging.WARNING):
            assert service.load() == []

        assert "Could not load decks" in caplog.text

    def test_save_failure_is_reported_not_raised(self, service, store, source, caplog):
        store.fail_on_save = True

        assert service.save([source]) is False
        assert "Could not save 1 decks" in caplog.text
        assert store.save_count == 0

    def test_save_then_load(self, service, store, source):
        assert service.save([source]) is True

        loaded = service.load()

        assert [d.id for d in loaded] == ["bio"]
        assert loaded[0] is not source

    def test_reload_relinks_derived_decks(self, service, source):
        derived = service.interleaved([source], shuffle_mode="round-robin")
        service.save([source, derived])

        loaded_source, loaded_derived = service.load()

        assert loaded_derived.cards[0] is loaded_source.cards[0]


class TestRecordReview:
    def test_review_through_derived_deck_updates_source_card(self, service, source, now):
        derived = service.deliberate_practice([source], focus_topics=["biology"])
        later = now + timedelta(hours=1)

        outcome = service.record_review(
            [source, derived], ReviewEvent(derived.cards[0].id, 5, later)
        )

        assert outcome.card is source.cards[0]
        assert source.cards[0].state.repetitions == 1
        assert derived.cards[0].state is source.cards[0].state
        assert source.updated_at == later
        assert outcome.state.next_due == later + timedelta(days=1)

    def test_source_deck_wins_over_detached_copy(self, service, source, now):
        copy = Card(id="bio-0", front="copy", back="copy")
        derived = Deck(id="derived", name="Derived", cards=[copy], source_deck_ids=["bio"])

        outcome = service.record_review([derived, source], ReviewEvent("bio-0", 4, now))

        assert outcome.card is source.cards[0]
        assert copy.state.repetitions == 0

    def test_streak_comes_from_the_session(self, service, source, now):
        session = StudySession(id="s1", deck_id="bio")
        first = service.record_review(
            [source], ReviewEvent("bio-0", 5, now, response_time_ms=2000), session
        )
        second = service.record_review(
            [source], ReviewEvent("bio-1", 5, now, response_time_ms=2000), session
        )
        third = service.record_review(
            [source], ReviewEvent("bio-2", 5, now, response_time_ms=2000), session
        )

        assert first.feedback.tier is FeedbackTier.GOOD
        assert second.feedback.tier is FeedbackTier.GOOD
        assert third.feedback.tier is FeedbackTier.EXCELLENT
        assert [e.card_id for e in session.results] == ["bio-0", "bio-1", "bio-2"]

    def test_explicit_correctness_overrides_quality(self, service, source, now):
        outcome = service.record_review(
            [source], ReviewEvent("bio-0", 4, now, response_time_ms=3000, is_correct=False)
        )
        assert outcome.feedback.tier is FeedbackTier.STRUGGLING

    def test_streak_honours_explicit_correct_flag(self, service, source, now):
        session = StudySession(id="s1", deck_id="bio")
        for card_id in ("bio-0", "bio-1"):
            service.record_review(
                [source], ReviewEvent(card_id, 2, now, is_correct=True), session
            )

        outcome = service.record_review(
            [source], ReviewEvent("bio-2", 5, now, response_time_ms=2000), session
        )

        assert outcome.feedback.tier is FeedbackTier.EXCELLENT

    def test_unknown_card_raises(self, service, source, now):
        with pytest.raises(InvalidArgumentError):
            service.record_review([source], ReviewEvent("missing", 3, now))


class TestComposition:
    def test_queue_lists_shared_cards_once(self, service, source, now):
        derived = service.interleaved([source])
        result = service.study_queue([source, derived], now)
        assert result.due_count == 3

    def test_queue_cap_defaults_to_config(self, store, make_deck, now, tmp_path):
        config = AppConfig(store_backend="memory", deck_dir=tmp_path, default_max_cards=2)
        service = StudyService(store, config=config)

        result = service.study_queue([make_deck("d", size=5)], now)

        assert len(result.queue) == 2
        assert len(result.deferred) == 3

    def test_deliberate_practice_cap_defaults_to_config(self, store, make_deck, tmp_path):
        config = AppConfig(store_backend="memory", deck_dir=tmp_path, default_max_cards=4)
        service = StudyService(store, config=config)

        deck = service.deliberate_practice([make_deck("d", size=10)])

        assert len(deck.cards) == 4

    def test_seeded_config_makes_shuffles_reproducible(self, store, make_deck, tmp_path):
        config = AppConfig(store_backend="memory", deck_dir=tmp_path, shuffle_seed=42)
        decks = [make_deck("a", size=8), make_deck("b", size=8)]

        first = StudyService(store, config=config).interleaved(decks)
        second = StudyService(store, config=config).interleaved(decks)

        assert [c.id for c in first.cards] == [c.id for c in second.cards]

    def test_interleaved_takes_cards_per_deck(self, service, make_deck):
        decks = [make_deck("a", size=4), make_deck("b", size=4)]
        deck = service.interleaved(decks, cards_per_deck=1, shuffle_mode="round-robin")
        assert [c.id for c in deck.cards] == ["a-0", "b-0"]
