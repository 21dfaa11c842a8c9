# Domain Stats Package
from .models import Priority, SessionStatistics, TopicStat, Trend, WeaknessReport, WeakTopic

__all__ = ["Priority", "Trend", "TopicStat", "WeakTopic", "WeaknessReport", "SessionStatistics"]
