"""Tests for the Gemini provider's reply handling (no network access)."""

import pytest
from datetime import date

from google.api_core import exceptions as google_exceptions

from cajachica.ai import prompts
from cajachica.ai.gemini import GeminiProvider, extract_json
from cajachica.domain.entities import LedgerCandidate
from cajachica.domain.errors import ProviderError


class _Reply:
    def __init__(self, text):
        self.text = text


class _StubModel:
    """Stands in for genai.GenerativeModel."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate_content(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return _Reply(self.reply)


def _provider(model):
    provider = GeminiProvider(api_key=None)
    provider._model = model
    return provider


def test_extract_json_plain():
    assert extract_json('[{"codigo": "1"}]') == [{"codigo": "1"}]


def test_extract_json_strips_fences():
    assert extract_json('```json\n{"codigo": "1", "nombre": "Activo"}\n```') == {"codigo": "1", "nombre": "Activo"}


def test_extract_json_surrounding_text():
    assert extract_json('Aquí está el plan: [{"codigo": "1"}] Saludos.') == [{"codigo": "1"}]


def test_extract_json_no_payload():
    with pytest.raises(ValueError, match="No JSON found"):
        extract_json("No puedo ayudar con eso")


def test_missing_api_key():
    provider = GeminiProvider(api_key=None)

    with pytest.raises(ProviderError, match="GOOGLE_AI_API_KEY"):
        provider.generate_chart("Finanzas Personales e Inversiones")


def test_generate_chart_decodes_reply():
    model = _StubModel('```json\n[{"codigo": "1", "nombre": "Activo", "descripcion": ""}]\n```')

    payload = _provider(model).generate_chart("Software y Tecnología")

    assert payload == [{"codigo": "1", "nombre": "Activo", "descripcion": ""}]
    assert "Software y Tecnología" in model.prompts[0]


def test_malformed_reply_returns_none():
    assert _provider(_StubModel("sin json")).generate_chart("General") is None


def test_api_error_returns_none():
    model = _StubModel(error=google_exceptions.ServiceUnavailable("down"))
    assert _provider(model).propose_account("Nafta", "", "General", []) is None


def test_transport_error_returns_none():
    model = _StubModel(error=ConnectionError("connection reset"))
    assert _provider(model).match_account("Pago", None, "General", []) is None


def test_match_account_returns_raw_text():
    model = _StubModel(" 7 ")
    candidates = [LedgerCandidate(7, "5.1", "Servicios")]

    assert _provider(model).match_account("Luz", "EGRESO", "General", candidates) == "7"
    assert "7|5.1|Servicios" in model.prompts[0]


def test_interpret_prompt_lists_known_names():
    prompt = prompts.interpret_prompt(
        "cobré 500 de Orange", ["Orange"], ["Caja (Nación)"], ["Honorarios"], date(2024, 3, 1)
    )

    assert "ENTIDADES: Orange" in prompt
    assert "Caja (Nación)" in prompt
    assert "hoy es 2024-03-01" in prompt


def test_new_account_prompt_lists_existing_codes():
    prompt = prompts.new_account_prompt("Nafta", "Obra", "General", ["1", "5.1"])
    assert "5.1" in prompt
