"""Free-text (voice) interpretation into a draft transaction."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from cajachica.ai.provider import SuggestionProvider
from cajachica.database.base import Database
from cajachica.domain import errors
from cajachica.domain.entities import TransactionDraft

logger = logging.getLogger(__name__)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_amount(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def draft_from_payload(payload: dict) -> TransactionDraft:
    """Normalize a provider payload; unknown or malformed fields become None."""
    currency = _optional_str(payload.get("currency"))
    type_ = _optional_str(payload.get("type"))
    return TransactionDraft(
        amount=_optional_amount(payload.get("amount")),
        currency=currency.upper() if currency else None,
        type=type_.upper() if type_ else None,
        description=_optional_str(payload.get("description")),
        entity_keyword=_optional_str(payload.get("entityKeyword")),
        bank_keyword=_optional_str(payload.get("bankKeyword")),
        category_keyword=_optional_str(payload.get("categoryKeyword")),
        date=_optional_str(payload.get("date")),
    )


class AssistantService:
    """Turns dictated text into a transaction draft. Nothing is persisted."""

    def __init__(self, db: Database, provider: SuggestionProvider):
        self.db = db
        self.provider = provider

    def interpret(self, user_id: str, text: str, today: Optional[date] = None) -> TransactionDraft:
        """Interpret text against the user's active entities, accounts and ledger accounts.

        Raises:
            ValidationError: If the text is empty
            ProviderError: If the provider returns nothing usable
        """
        if not text or not text.strip():
            raise errors.ValidationError("Texto requerido")

        entities = [e.name for e in self.db.list_entities(user_id, active=True)]
        accounts = [f"{a.name} ({a.bank})" for a in self.db.list_bank_accounts(user_id, active=True)]
        ledger_accounts = [l.name for l in self.db.list_ledger_accounts(user_id, active=True)]

        payload = self.provider.interpret_text(
            text.strip(), entities, accounts, ledger_accounts, today or date.today()
        )
        if not isinstance(payload, dict):
            logger.error("Text interpretation for user %s returned %r", user_id, payload)
            raise errors.ProviderError("No se pudo procesar el audio con IA")
        return draft_from_payload(payload)
