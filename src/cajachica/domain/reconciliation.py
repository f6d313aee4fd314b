"""Reconciles AI-proposed ledger accounts with the user's chart of accounts."""

import logging
from typing import Any, Optional

from cajachica.ai.provider import SuggestionProvider
from cajachica.database.base import Database
from cajachica.domain import errors
from cajachica.domain.entities import ActivityType, GenerationResult, LedgerCandidate, LedgerProposal
from cajachica.domain.validation import coerce_enum

logger = logging.getLogger(__name__)

ACTIVITY_LABELS = {
    ActivityType.FREELANCE: "Freelance / Profesional Independiente",
    ActivityType.COMERCIO: "Comercio Minorista / Negocio",
    ActivityType.SERVICIOS: "Empresa de Servicios",
    ActivityType.CONSTRUCCION: "Construcción y Refacciones",
    ActivityType.TECNOLOGIA: "Software y Tecnología",
    ActivityType.PERSONAL: "Finanzas Personales e Inversiones",
}

DEFAULT_ACTIVITY = "General"

MAX_CODE_LENGTH = 20
MAX_NAME_LENGTH = 100


def activity_label(activity: ActivityType | str) -> str:
    """Human label for an activity type; unknown values pass through unchanged."""
    try:
        return ACTIVITY_LABELS[ActivityType(str(activity).upper())]
    except ValueError:
        return str(activity)


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def proposal_from_payload(payload: Any) -> Optional[LedgerProposal]:
    """Build a proposal from one provider object, or None if code or name is missing."""
    if not isinstance(payload, dict):
        return None
    code = _text(payload.get("codigo", payload.get("code")))
    name = _text(payload.get("nombre", payload.get("name")))
    if not code or not name:
        return None
    description = _text(payload.get("descripcion", payload.get("description")))
    if len(code) > MAX_CODE_LENGTH or len(name) > MAX_NAME_LENGTH:
        # Column limits of ledger_accounts.code and .name
        logger.warning(
            "Truncating ledger proposal %r / %r to %d / %d characters",
            code,
            name,
            MAX_CODE_LENGTH,
            MAX_NAME_LENGTH,
        )
    return LedgerProposal(code=code[:MAX_CODE_LENGTH], name=name[:MAX_NAME_LENGTH], description=description)


class LedgerReconciliationService:
    """Merges provider proposals into the chart of accounts and maps
    transactions onto existing accounts."""

    def __init__(self, db: Database, provider: SuggestionProvider):
        """Initialize reconciliation service.

        Args:
            db: Database instance
            provider: Source of ledger proposals
        """
        self.db = db
        self.provider = provider

    def generate_chart(self, user_id: str, activity: ActivityType | str) -> GenerationResult:
        """Ask the provider for a chart of accounts and insert the codes the user lacks.

        Existing accounts are never updated or removed, so running this again
        for the same activity inserts nothing.

        Raises:
            ValidationError: If the activity is missing
            GenerationError: If the provider returns nothing or not a list
        """
        if activity is None or not str(activity).strip():
            raise errors.ValidationError("Tipo de actividad requerido")
        label = activity_label(activity)

        payload = self.provider.generate_chart(label)
        if not isinstance(payload, list):
            logger.error("Chart generation for user %s returned %s", user_id, type(payload).__name__)
            raise errors.GenerationError("No se pudo generar el plan con IA")

        proposals = []
        for item in payload:
            proposal = proposal_from_payload(item)
            if proposal is None:
                logger.warning("Skipping malformed chart entry: %r", item)
                continue
            proposals.append(proposal)

        created = self.db.insert_new_ledger_accounts(user_id, proposals)
        logger.info(
            "Chart generation for user %s (%s): %d proposed, %d created",
            user_id,
            label,
            len(proposals),
            len(created),
        )
        return GenerationResult(count=len(created), created=tuple(created))

    def suggest_new_account(
        self,
        user_id: str,
        purpose: str,
        entity_name: Optional[str] = None,
        activity: Optional[str] = None,
    ) -> LedgerProposal:
        """Propose a brand-new ledger account for a purpose. Nothing is persisted.

        Raises:
            ValidationError: If the purpose is empty
            SuggestionError: If the provider returns no usable proposal
        """
        if not purpose or not purpose.strip():
            raise errors.ValidationError("Propósito requerido para sugerencia")

        existing_codes = sorted(self.db.list_ledger_codes(user_id))
        payload = self.provider.propose_account(
            purpose.strip(),
            (entity_name or "").strip(),
            (activity or "").strip() or DEFAULT_ACTIVITY,
            existing_codes,
        )
        proposal = proposal_from_payload(payload)
        if proposal is None:
            logger.error("New-account suggestion for user %s returned %r", user_id, payload)
            raise errors.SuggestionError("No se pudo generar la sugerencia con IA")
        return proposal

    def match_account(
        self,
        user_id: str,
        description: str,
        transaction_type: Optional[str] = None,
        activity: Optional[str] = None,
        entity_name: Optional[str] = None,
    ) -> int:
        """Pick the user's active ledger account that best fits a transaction.

        The provider's answer must be one of the candidate IDs it was offered.

        Raises:
            ValidationError: If the description is empty
            NoAccountsError: If the user has no active ledger accounts
            SuggestionError: If the provider answers nothing or an ID outside the candidates
        """
        if not description or not description.strip():
            raise errors.ValidationError("Descripción de transacción requerida")

        offered = [
            LedgerCandidate(id=account.id, code=account.code, name=account.name)
            for account in self.db.list_ledger_accounts(user_id, active=True)
        ]
        if not offered:
            raise errors.NoAccountsError("No hay asientos contables definidos")

        answer = self.provider.match_account(
            description.strip(),
            transaction_type,
            (activity or "").strip() or DEFAULT_ACTIVITY,
            offered,
            entity_name,
        )

        account_id = self._resolve_candidate(answer, offered)
        if account_id is None:
            logger.error("Ledger match for user %s returned %r", user_id, answer)
            raise errors.SuggestionError("No se pudo obtener sugerencia")
        return account_id

    @staticmethod
    def _resolve_candidate(answer: Optional[str], offered: list[LedgerCandidate]) -> Optional[int]:
        """Map the provider's answer to a candidate ID, accepting an ID or a code.

        IDs take precedence: a code is only considered when the answer is
        not the ID of any candidate.
        """
        if answer is None:
            return None
        token = str(answer).strip().strip("`\"'").split("|")[0].strip()
        if not token:
            return None
        for candidate in offered:
            if token == str(candidate.id):
                return candidate.id
        for candidate in offered:
            if token == candidate.code:
                return candidate.id
        return None
