"""Google Gemini implementation of the suggestion provider."""

import json
import logging
import re
from datetime import date
from typing import Any, Optional, Sequence

import google.generativeai as genai

from cajachica.ai import prompts
from cajachica.ai.provider import SuggestionProvider
from cajachica.domain.entities import LedgerCandidate
from cajachica.domain.errors import ProviderError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def extract_json(text: str) -> Any:
    """Decode a JSON payload from a model reply, ignoring code fences.

    Raises:
        ValueError: If the reply holds no decodable JSON
    """
    cleaned = _FENCE.sub("", text).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass
    # Fall back to the outermost array or object in the reply
    for opener, closer in (("[", "]"), ("{", "}")):
        start = cleaned.find(opener)
        end = cleaned.rfind(closer) + 1
        if start >= 0 and end > start:
            try:
                return json.loads(cleaned[start:end])
            except json.JSONDecodeError:
                continue
    raise ValueError(f"No JSON found in model reply: {cleaned[:200]!r}")


class GeminiProvider(SuggestionProvider):
    """Suggestion provider backed by a Gemini generative model."""

    def __init__(self, api_key: Optional[str], model_name: str = DEFAULT_MODEL, temperature: float = 0.2):
        self.api_key = api_key
        self.model_name = model_name
        self._model = None
        if api_key:
            genai.configure(api_key=api_key)
            self._model = genai.GenerativeModel(
                model_name=model_name,
                generation_config={"temperature": temperature},
            )

    def _generate(self, prompt: str, purpose: str) -> Optional[str]:
        """Run one prompt and return the reply text, or None on failure."""
        if self._model is None:
            raise ProviderError("Servicio de IA no configurado (falta GOOGLE_AI_API_KEY)")
        try:
            response = self._model.generate_content(prompt)
            return response.text.strip()
        except Exception:
            # Any client failure, including a blocked reply, means no answer
            logger.exception("Gemini request failed (%s)", purpose)
            return None

    def _generate_json(self, prompt: str, purpose: str) -> Optional[Any]:
        text = self._generate(prompt, purpose)
        if not text:
            return None
        try:
            return extract_json(text)
        except ValueError:
            logger.exception("Gemini returned malformed JSON (%s)", purpose)
            return None

    def generate_chart(self, activity_label: str) -> Optional[Any]:
        return self._generate_json(prompts.chart_prompt(activity_label), "chart")

    def propose_account(
        self,
        purpose: str,
        entity_name: str,
        activity: str,
        existing_codes: Sequence[str],
    ) -> Optional[Any]:
        payload = self._generate_json(
            prompts.new_account_prompt(purpose, entity_name, activity, existing_codes),
            "new account",
        )
        logger.debug("Gemini new-account proposal: %r", payload)
        return payload

    def match_account(
        self,
        description: str,
        transaction_type: Optional[str],
        activity: str,
        candidates: Sequence[LedgerCandidate],
        entity_name: Optional[str] = None,
    ) -> Optional[str]:
        return self._generate(
            prompts.match_prompt(description, transaction_type, activity, candidates, entity_name),
            "match",
        )

    def interpret_text(
        self,
        text: str,
        entities: Sequence[str],
        accounts: Sequence[str],
        ledger_accounts: Sequence[str],
        today: date,
    ) -> Optional[Any]:
        return self._generate_json(
            prompts.interpret_prompt(text, entities, accounts, ledger_accounts, today),
            "voice",
        )
