"""Abstract suggestion provider interface."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Optional, Sequence

from cajachica.domain.entities import LedgerCandidate


class SuggestionProvider(ABC):
    """Black-box source of ledger proposals and text interpretations.

    Each call is one blocking round trip. Implementations return the decoded
    JSON payload as-is and None when the call failed or produced nothing;
    shape validation is left to the caller.
    """

    @abstractmethod
    def generate_chart(self, activity_label: str) -> Optional[Any]:
        """Propose a chart of accounts for an activity.

        Expected shape: a list of ``{"codigo", "nombre", "descripcion"}`` objects.
        """
        pass

    @abstractmethod
    def propose_account(
        self,
        purpose: str,
        entity_name: str,
        activity: str,
        existing_codes: Sequence[str],
    ) -> Optional[Any]:
        """Propose one new ledger account whose code avoids existing_codes.

        Expected shape: a ``{"codigo", "nombre", "descripcion"}`` object.
        """
        pass

    @abstractmethod
    def match_account(
        self,
        description: str,
        transaction_type: Optional[str],
        activity: str,
        candidates: Sequence[LedgerCandidate],
        entity_name: Optional[str] = None,
    ) -> Optional[str]:
        """Pick the candidate that best fits a transaction. Returns its ID as text."""
        pass

    @abstractmethod
    def interpret_text(
        self,
        text: str,
        entities: Sequence[str],
        accounts: Sequence[str],
        ledger_accounts: Sequence[str],
        today: date,
    ) -> Optional[Any]:
        """Extract transaction fields from free text (usually a voice transcript).

        Expected shape: an object with ``amount``, ``currency``, ``type``,
        ``description``, ``entityKeyword``, ``bankKeyword``,
        ``categoryKeyword`` and ``date``, any of which may be missing.
        """
        pass
