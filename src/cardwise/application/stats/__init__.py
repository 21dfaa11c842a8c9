# Application Stats Package
from .service import StudyStatsService
from .session_metrics import SessionMetricsCalculator, current_streak
from .weakness_analyzer import WeaknessAnalyzer

__all__ = ["WeaknessAnalyzer", "SessionMetricsCalculator", "StudyStatsService", "current_streak"]
