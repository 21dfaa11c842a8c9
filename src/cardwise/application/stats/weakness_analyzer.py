"""
Weakness analyzer for deriving per-topic accuracy from review history.

This is a pure computation module with no I/O.

The accuracy model is a heuristic: a card's ease factor stands in for its
success rate (>= 2.5 -> 80%, >= 2.0 -> 50%, else 20%) and its repetition count
for the number of attempts. The thresholds are kept exactly as-is so reports
stay comparable with previously recorded results; they are not a statistical
estimate of true recall.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from cardwise.application.utils.rounding import round_half_up
from cardwise.domain.constants import (
    HIGH_EASE_SUCCESS_RATE,
    HIGH_EASE_THRESHOLD,
    HIGH_PRIORITY_ERROR_RATE,
    IMPROVING_WEAK_RATIO,
    LOW_EASE_SUCCESS_RATE,
    LOW_OVERALL_ACCURACY,
    MEDIUM_PRIORITY_ERROR_RATE,
    MID_EASE_SUCCESS_RATE,
    MID_EASE_THRESHOLD,
    STABLE_WEAK_RATIO,
    STRONG_ACCURACY,
)
from cardwise.domain.models import Deck
from cardwise.domain.stats.models import (
    Priority,
    TopicStat,
    Trend,
    WeaknessReport,
    WeakTopic,
)

logger = logging.getLogger(__name__)

_PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}

REMEDIATION_ACTIONS: dict[Priority, list[str]] = {
    Priority.HIGH: [
        "Relearn the core concepts",
        "Focus reviews on the related cards",
        "Shift from rote memorization to understanding",
    ],
    Priority.MEDIUM: [
        "Shorten the review interval",
        "Practice similar problems",
    ],
    Priority.LOW: [
        "Keep up regular reviews",
    ],
}


@dataclass
class _TopicTally:
    attempted: int = 0
    correct: int = 0


def estimated_success_rate(ease_factor: float) -> float:
    """Map an ease factor onto the heuristic success-rate buckets."""
    if ease_factor >= HIGH_EASE_THRESHOLD:
        return HIGH_EASE_SUCCESS_RATE
    if ease_factor >= MID_EASE_THRESHOLD:
        return MID_EASE_SUCCESS_RATE
    return LOW_EASE_SUCCESS_RATE


def priority_for_error_rate(error_rate: float) -> Priority:
    if error_rate >= HIGH_PRIORITY_ERROR_RATE:
        return Priority.HIGH
    if error_rate >= MEDIUM_PRIORITY_ERROR_RATE:
        return Priority.MEDIUM
    return Priority.LOW


class WeaknessAnalyzer:
    """
    Aggregates card review state per topic into strengths, weaknesses and a trend.

    Stateless and side-effect free.
    """

    def analyze(self, decks: Iterable[Deck]) -> WeaknessReport:
        """
        Analyze decks grouped by topic (deck category, else deck name).

        Topics with no attempts are neither strong nor weak, but they still
        count toward the topic total used by the trend heuristic.
        """
        tallies = self._tally_topics(decks)

        strong: list[str] = []
        weak: list[WeakTopic] = []
        topic_stats: list[TopicStat] = []
        total_attempted = 0
        total_correct = 0

        for topic, tally in tallies.items():
            if tally.attempted == 0:
                continue

            accuracy = tally.correct / tally.attempted
            total_attempted += tally.attempted
            total_correct += tally.correct

            if accuracy >= STRONG_ACCURACY:
                strong.append(topic)
                priority = None
            else:
                error_rate = 1 - accuracy
                priority = priority_for_error_rate(error_rate)
                weak.append(
                    WeakTopic(
                        topic=topic,
                        error_rate=error_rate,
                        priority=priority,
                        recommended_actions=list(REMEDIATION_ACTIONS[priority]),
                    )
                )

            topic_stats.append(
                TopicStat(
                    topic=topic,
                    attempted=tally.attempted,
                    correct=tally.correct,
                    accuracy=accuracy,
                    priority=priority,
                )
            )

        # Stable: encounter order is kept within a tier
        weak.sort(key=lambda w: _PRIORITY_ORDER[w.priority])

        overall = total_correct / total_attempted if total_attempted else 0.0
        trend = self._trend(len(weak), len(tallies))

        logger.debug(
            f"[weakness] topics={len(tallies)} strong={len(strong)} weak={len(weak)} "
            f"accuracy={overall:.2f} trend={trend.value}"
        )

        return WeaknessReport(
            overall_accuracy=overall,
            strong_topics=strong,
            weak_topics=weak,
            trend=trend,
            recommendations=self._recommendations(strong, weak, overall),
            topic_stats=topic_stats,
        )

    def _tally_topics(self, decks: Iterable[Deck]) -> dict[str, _TopicTally]:
        tallies: dict[str, _TopicTally] = {}
        for deck in decks:
            tally = tallies.setdefault(deck.topic, _TopicTally())
            for card in deck.cards:
                attempts = card.state.repetitions
                rate = estimated_success_rate(card.state.ease_factor)
                tally.attempted += attempts
                tally.correct += round_half_up(attempts * rate)
        return tallies

    def _trend(self, weak_count: int, topic_count: int) -> Trend:
        """Coarse trend from the share of weak topics; not a time-series estimate."""
        weak_ratio = weak_count / (topic_count or 1)
        if weak_ratio < IMPROVING_WEAK_RATIO:
            return Trend.IMPROVING
        if weak_ratio < STABLE_WEAK_RATIO:
            return Trend.STABLE
        return Trend.DECLINING

    def _recommendations(
        self, strong: list[str], weak: list[WeakTopic], overall: float
    ) -> list[str]:
        recommendations: list[str] = []
        if weak:
            recommendations.append(f'Concentrate study time on the weak topic "{weak[0].topic}"')
        if strong:
            recommendations.append(
                f'Lengthen review intervals for the strong topic "{strong[0]}" to save time'
            )
        if overall < LOW_OVERALL_ACCURACY:
            recommendations.append("Overall accuracy is low; strengthen the fundamentals first")
        recommendations.append("Review weak cards first for about 30 minutes every day")
        recommendations.append(
            "Alternate strong and weak topics to get the most out of each session"
        )
        return recommendations
