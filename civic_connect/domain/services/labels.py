"""Display labels for status, category and priority values."""

from __future__ import annotations

from datetime import datetime


def _title_case_words(value: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in value.split("-"))


def format_status(status: str) -> str:
    """Format a status value for display ("in-progress" -> "In Progress")."""
    return _title_case_words(status)


def format_category(category: str) -> str:
    """Format a category value for display ("public-safety" -> "Public Safety")."""
    return _title_case_words(category)


def format_priority(priority: str) -> str:
    """Format a priority value for display ("high" -> "High")."""
    return priority[:1].upper() + priority[1:]


def format_time_ago(then: datetime, now: datetime) -> str:
    """Format the age of a timestamp ("3d ago", "5h ago", "12m ago", "Just now")."""
    seconds = int((now - then).total_seconds())
    days = seconds // 86_400
    hours = seconds // 3_600
    minutes = seconds // 60
    if days > 0:
        return f"{days}d ago"
    if hours > 0:
        return f"{hours}h ago"
    if minutes > 0:
        return f"{minutes}m ago"
    return "Just now"
