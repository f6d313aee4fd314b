"""Tests for free-text transaction interpretation."""

import pytest
from datetime import date
from decimal import Decimal

from cajachica.domain import errors
from cajachica.domain.assistant import AssistantService, draft_from_payload

from conftest import USER


def test_draft_from_payload_normalizes_fields():
    draft = draft_from_payload(
        {
            "amount": 500,
            "currency": "usd",
            "type": "ingreso",
            "description": " Servicios de marketing ",
            "entityKeyword": "Orange",
            "bankKeyword": "",
            "date": "2024-03-01",
        }
    )

    assert draft.amount == Decimal("500")
    assert draft.currency == "USD"
    assert draft.type == "INGRESO"
    assert draft.description == "Servicios de marketing"
    assert draft.entity_keyword == "Orange"
    assert draft.bank_keyword is None
    assert draft.category_keyword is None


def test_draft_from_payload_bad_amount():
    assert draft_from_payload({"amount": "mucho"}).amount is None


def test_interpret_sends_known_names(temp_db, fake_provider, sample_entity, sample_account, sample_ledger):
    fake_provider.interpretation = {"amount": "1200.5", "type": "EGRESO"}
    service = AssistantService(temp_db, fake_provider)

    draft = service.interpret(USER, " pagué 1200,50 de luz ", today=date(2024, 3, 1))

    assert draft.amount == Decimal("1200.5")
    _, text, entities, accounts, ledger_accounts, today = fake_provider.calls[0]
    assert text == "pagué 1200,50 de luz"
    assert entities == [sample_entity.name]
    assert accounts == [f"{sample_account.name} ({sample_account.bank})"]
    assert ledger_accounts == [sample_ledger.name]
    assert today == date(2024, 3, 1)


def test_interpret_requires_text(temp_db, fake_provider):
    with pytest.raises(errors.ValidationError, match="Texto requerido"):
        AssistantService(temp_db, fake_provider).interpret(USER, "  ")


@pytest.mark.parametrize("payload", [None, ["no"], "texto"])
def test_interpret_unusable_reply(temp_db, fake_provider, payload):
    fake_provider.interpretation = payload

    with pytest.raises(errors.ProviderError):
        AssistantService(temp_db, fake_provider).interpret(USER, "algo")
