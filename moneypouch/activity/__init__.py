"""Activity logging package."""

from moneypouch.activity.logger import ActivityLogger, get_activity_logger

__all__ = ["ActivityLogger", "get_activity_logger"]
