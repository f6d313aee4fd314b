"""Tests for chart-of-accounts generation and ledger suggestions."""

import logging

import pytest

from cajachica.domain import errors
from cajachica.domain.entities import LedgerProposal
from cajachica.domain.reconciliation import (
    activity_label,
    proposal_from_payload,
)

from conftest import OTHER_USER, USER

CHART = [
    {"codigo": "1", "nombre": "Activo", "descripcion": "Bienes y derechos"},
    {"codigo": "1.1", "nombre": "Caja y Bancos", "descripcion": ""},
    {"codigo": "4", "nombre": "Ingresos", "descripcion": "Ventas y honorarios"},
]


def test_activity_label():
    assert activity_label("freelance") == "Freelance / Profesional Independiente"
    assert activity_label("Panadería") == "Panadería"


def test_proposal_from_payload_accepts_english_keys():
    proposal = proposal_from_payload({"code": " 5.1 ", "name": "Gastos", "description": "Varios"})
    assert proposal == LedgerProposal("5.1", "Gastos", "Varios")


def test_proposal_from_payload_truncates(caplog):
    with caplog.at_level(logging.WARNING, logger="cajachica.domain.reconciliation"):
        proposal = proposal_from_payload({"codigo": "9" * 30, "nombre": "N" * 150})
    assert len(proposal.code) == 20
    assert len(proposal.name) == 100
    assert proposal.description == ""
    assert "Truncating ledger proposal" in caplog.text


def test_proposal_from_payload_short_values_not_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="cajachica.domain.reconciliation"):
        proposal_from_payload({"codigo": "1.1", "nombre": "Caja"})
    assert caplog.text == ""


@pytest.mark.parametrize("payload", [None, [], "1", {"codigo": "1"}, {"nombre": "Activo"}, {"codigo": " ", "nombre": "x"}])
def test_proposal_from_payload_rejects_malformed(payload):
    assert proposal_from_payload(payload) is None


class TestGenerateChart:
    """Tests for bulk chart-of-accounts generation."""

    def test_inserts_all_codes_on_empty_chart(self, temp_db, fake_provider, reconciliation_service):
        fake_provider.chart = CHART

        result = reconciliation_service.generate_chart(USER, "FREELANCE")

        assert result.count == 3
        assert [p.code for p in result.created] == ["1", "1.1", "4"]
        assert temp_db.list_ledger_codes(USER) == {"1", "1.1", "4"}
        assert fake_provider.calls[0] == ("generate_chart", "Freelance / Profesional Independiente")

    def test_second_run_is_a_no_op(self, temp_db, fake_provider, reconciliation_service):
        fake_provider.chart = CHART
        reconciliation_service.generate_chart(USER, "FREELANCE")

        result = reconciliation_service.generate_chart(USER, "FREELANCE")

        assert result.count == 0
        assert result.created == ()
        assert len(temp_db.list_ledger_accounts(USER)) == 3

    def test_existing_codes_are_kept(self, temp_db, fake_provider, reconciliation_service):
        temp_db.create_ledger_account(USER, "1", "Mis activos", active=False)
        fake_provider.chart = CHART

        result = reconciliation_service.generate_chart(USER, "COMERCIO")

        assert result.count == 2
        existing = temp_db.get_ledger_account_by_code(USER, "1")
        assert existing.name == "Mis activos"
        assert existing.active is False

    def test_other_users_codes_do_not_collide(self, temp_db, fake_provider, reconciliation_service):
        temp_db.create_ledger_account(OTHER_USER, "1", "Activo")
        fake_provider.chart = CHART

        assert reconciliation_service.generate_chart(USER, "SERVICIOS").count == 3

    def test_malformed_items_are_skipped(self, temp_db, fake_provider, reconciliation_service):
        fake_provider.chart = [{"codigo": "1", "nombre": "Activo"}, {"nombre": "Sin código"}, "basura"]

        result = reconciliation_service.generate_chart(USER, "PERSONAL")

        assert result.count == 1

    def test_duplicate_codes_in_payload(self, temp_db, fake_provider, reconciliation_service):
        fake_provider.chart = [{"codigo": "2", "nombre": "Pasivo"}, {"codigo": "2", "nombre": "Deudas"}]

        result = reconciliation_service.generate_chart(USER, "PERSONAL")

        assert result.count == 1
        assert temp_db.get_ledger_account_by_code(USER, "2").name == "Pasivo"

    @pytest.mark.parametrize("payload", [None, {"codigo": "1", "nombre": "Activo"}, "texto"])
    def test_non_list_payload_fails(self, temp_db, fake_provider, reconciliation_service, payload):
        fake_provider.chart = payload

        with pytest.raises(errors.GenerationError, match="No se pudo generar el plan con IA"):
            reconciliation_service.generate_chart(USER, "PERSONAL")
        assert temp_db.list_ledger_codes(USER) == set()

    def test_activity_required(self, fake_provider, reconciliation_service):
        with pytest.raises(errors.ValidationError, match="Tipo de actividad requerido"):
            reconciliation_service.generate_chart(USER, "  ")
        assert fake_provider.calls == []


class TestSuggestNewAccount:
    """Tests for creation-mode suggestions."""

    def test_returns_proposal_without_persisting(self, temp_db, fake_provider, reconciliation_service, sample_ledger):
        fake_provider.proposal = {"codigo": "5.2.01", "nombre": "Combustible", "descripcion": "Nafta"}

        proposal = reconciliation_service.suggest_new_account(USER, "Nafta para la camioneta", "Obra", "CONSTRUCCION")

        assert proposal == LedgerProposal("5.2.01", "Combustible", "Nafta")
        assert temp_db.list_ledger_codes(USER) == {sample_ledger.code}
        _, purpose, entity_name, activity, existing_codes = fake_provider.calls[0]
        assert (purpose, entity_name, activity) == ("Nafta para la camioneta", "Obra", "CONSTRUCCION")
        assert existing_codes == [sample_ledger.code]

    def test_defaults_activity(self, fake_provider, reconciliation_service):
        fake_provider.proposal = {"codigo": "1", "nombre": "Activo"}

        reconciliation_service.suggest_new_account(USER, "Caja chica")

        assert fake_provider.calls[0][3] == "General"

    def test_purpose_required(self, reconciliation_service):
        with pytest.raises(errors.ValidationError, match="Propósito requerido"):
            reconciliation_service.suggest_new_account(USER, "")

    @pytest.mark.parametrize("payload", [None, [], {"codigo": "1"}])
    def test_unusable_proposal(self, fake_provider, reconciliation_service, payload):
        fake_provider.proposal = payload

        with pytest.raises(errors.SuggestionError):
            reconciliation_service.suggest_new_account(USER, "Algo")


class TestMatchAccount:
    """Tests for match-mode suggestions."""

    @pytest.fixture
    def chart(self, ledger_account_service):
        return {
            "ventas": ledger_account_service.create_account(USER, "4.1", "Ventas"),
            "servicios": ledger_account_service.create_account(USER, "5.1", "Servicios"),
            "baja": ledger_account_service.create_account(USER, "5.9", "Dada de baja", active=False),
        }

    def test_returns_candidate_id(self, fake_provider, reconciliation_service, chart):
        fake_provider.match = str(chart["servicios"])

        account_id = reconciliation_service.match_account(USER, "Pago de luz", "EGRESO", entity_name="Casa")

        assert account_id == chart["servicios"]
        _, description, transaction_type, activity, candidates, entity_name = fake_provider.calls[0]
        assert (description, transaction_type, activity, entity_name) == ("Pago de luz", "EGRESO", "General", "Casa")
        # Inactive accounts are not offered
        assert [c.code for c in candidates] == ["4.1", "5.1"]

    @pytest.mark.parametrize("answer", ["{id}|5.1|Servicios", " `{id}` ", "5.1"])
    def test_accepts_id_line_or_code(self, fake_provider, reconciliation_service, chart, answer):
        fake_provider.match = answer.format(id=chart["servicios"])

        assert reconciliation_service.match_account(USER, "Pago de luz") == chart["servicios"]

    def test_id_wins_over_matching_code(self, fake_provider, reconciliation_service, ledger_account_service):
        servicios = ledger_account_service.create_account(USER, "5.1", "Servicios")
        # Sorted by code, this account is offered before Servicios
        activo = ledger_account_service.create_account(USER, str(servicios), "Activo")
        fake_provider.match = str(servicios)

        assert reconciliation_service.match_account(USER, "Pago de luz") == servicios
        candidates = fake_provider.calls[0][4]
        assert [c.id for c in candidates] == [activo, servicios]

    def test_rejects_id_outside_candidates(self, temp_db, fake_provider, reconciliation_service, chart):
        foreign = temp_db.create_ledger_account(OTHER_USER, "7", "Ajena")
        fake_provider.match = str(foreign)

        with pytest.raises(errors.SuggestionError, match="No se pudo obtener sugerencia"):
            reconciliation_service.match_account(USER, "Pago de luz")

    def test_rejects_inactive_account(self, fake_provider, reconciliation_service, chart):
        fake_provider.match = str(chart["baja"])

        with pytest.raises(errors.SuggestionError):
            reconciliation_service.match_account(USER, "Pago de luz")

    @pytest.mark.parametrize("answer", [None, "", "no sé"])
    def test_rejects_empty_or_unknown_answer(self, fake_provider, reconciliation_service, chart, answer):
        fake_provider.match = answer

        with pytest.raises(errors.SuggestionError):
            reconciliation_service.match_account(USER, "Pago de luz")

    def test_no_accounts(self, fake_provider, reconciliation_service):
        with pytest.raises(errors.NoAccountsError, match="No hay asientos contables definidos"):
            reconciliation_service.match_account(USER, "Pago de luz")
        assert fake_provider.calls == []

    def test_description_required(self, reconciliation_service, chart):
        with pytest.raises(errors.ValidationError, match="Descripción de transacción requerida"):
            reconciliation_service.match_account(USER, "   ")
