"""
Session metrics calculator for summarizing a study session.

This is a pure computation module with no I/O.
"""

from collections.abc import Sequence

from cardwise.application.utils.rounding import round_half_up
from cardwise.domain.constants import PASSING_QUALITY
from cardwise.domain.models import ReviewEvent, StudySession
from cardwise.domain.stats.models import SessionStatistics


def current_streak(events: Sequence[ReviewEvent]) -> int:
    """
    Count consecutive correct reviews, walking back from the most recent.

    Correctness is `ReviewEvent.correct`: the explicit flag when set, else quality >= 3.
    """
    streak = 0
    for event in reversed(events):
        if not event.correct:
            break
        streak += 1
    return streak


class SessionMetricsCalculator:
    """
    Computes summary statistics from a session's review events.

    Stateless and side-effect free.
    """

    def compute(self, session: StudySession) -> SessionStatistics:
        results = session.results
        if not results:
            return SessionStatistics()

        total = len(results)
        correct = sum(1 for r in results if r.correct)

        return SessionStatistics(
            total_reviews=total,
            correct_count=correct,
            incorrect_count=total - correct,
            average_quality=round(sum(r.quality for r in results) / total, 2),
            completion_rate=round(correct / total * 100, 1),
            average_time_ms=self._average_time(results),
            streak_count=current_streak(results),
            hard_card_ids=self._hard_cards(results),
        )

    def _average_time(self, results: Sequence[ReviewEvent]) -> int:
        """
        Mean response time over events that recorded a positive time.
        """
        timings = [
            r.response_time_ms
            for r in results
            if r.response_time_ms is not None and r.response_time_ms > 0
        ]
        if not timings:
            return 0
        return round_half_up(sum(timings) / len(timings))

    def _hard_cards(self, results: Sequence[ReviewEvent]) -> list[str]:
        """
        Ids of failed cards, de-duplicated in first-failure order.
        """
        # dict keeps insertion order
        failed = {r.card_id: None for r in results if r.quality < PASSING_QUALITY}
        return list(failed)
