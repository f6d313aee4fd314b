"""Suggestion providers used by the reconciliation engine and the assistant."""

from cajachica.ai.provider import SuggestionProvider

__all__ = ["SuggestionProvider"]
