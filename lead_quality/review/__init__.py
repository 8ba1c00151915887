"""Shared review session used by every result view."""

from .service import ReviewSession, log_notifier, matches_search_term

__all__ = ["ReviewSession", "log_notifier", "matches_search_term"]
