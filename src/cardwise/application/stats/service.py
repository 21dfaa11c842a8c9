"""
Study Stats Service: Application layer orchestrator.

Coordinates loading decks from the store and running the weakness analysis
and session metrics over them.
"""

import logging

from cardwise.application.deck_loading import load_decks_safely
from cardwise.domain.models import Deck, StudySession
from cardwise.domain.ports import DeckStore
from cardwise.domain.stats.models import SessionStatistics, WeaknessReport

from .session_metrics import SessionMetricsCalculator
from .weakness_analyzer import WeaknessAnalyzer

logger = logging.getLogger(__name__)


class StudyStatsService:
    """
    Application service for learning analytics.

    Follows Dependency Inversion: depends on the DeckStore abstraction,
    not concrete adapter implementations.
    """

    def __init__(
        self,
        store: DeckStore,
        analyzer: WeaknessAnalyzer | None = None,
        calculator: SessionMetricsCalculator | None = None,
    ):
        """
        Args:
            store: The repository (port) for loading decks.
            analyzer: Optional custom analyzer; uses default if not provided.
            calculator: Optional custom session calculator; uses default if not provided.
        """
        self._store = store
        self._analyzer = analyzer or WeaknessAnalyzer()
        self._calc = calculator or SessionMetricsCalculator()

    def weakness_report(self, decks: list[Deck] | None = None) -> WeaknessReport:
        """
        Analyze the given decks, or everything in the store when omitted.

        An unavailable store yields the report for an empty collection.
        """
        if decks is None:
            decks = load_decks_safely(self._store)
        # Derived decks share cards with their sources and are left out
        source_decks = [d for d in decks if not d.source_deck_ids]
        logger.debug(f"Analyzing {len(source_decks)} of {len(decks)} decks")
        return self._analyzer.analyze(source_decks)

    def session_statistics(self, session: StudySession) -> SessionStatistics:
        return self._calc.compute(session)
