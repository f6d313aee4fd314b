"""Tests for entity, bank account and ledger account services."""

import pytest

from cajachica.domain import errors
from cajachica.domain.entities import ActivityType, Currency

from conftest import OTHER_USER, USER


class TestEntityService:
    """Tests for EntityService."""

    def test_create_entity(self, entity_service):
        entity_id = entity_service.create_entity(USER, "  Obra Centro ", "construccion", description="Edificio")

        entity = entity_service.get_entity(USER, entity_id)
        assert entity.name == "Obra Centro"
        assert entity.activity_type is ActivityType.CONSTRUCCION
        assert entity.description == "Edificio"

    def test_create_entity_requires_name(self, entity_service):
        with pytest.raises(errors.ValidationError, match="nombre es requerido"):
            entity_service.create_entity(USER, " ", ActivityType.PERSONAL)

    def test_create_entity_unknown_activity(self, entity_service):
        with pytest.raises(errors.ValidationError, match="valores permitidos"):
            entity_service.create_entity(USER, "X", "MINERIA")

    def test_duplicate_name(self, entity_service, sample_entity):
        with pytest.raises(errors.ConflictError, match=sample_entity.name):
            entity_service.create_entity(USER, sample_entity.name, ActivityType.PERSONAL)

    def test_require_entity_of_other_user(self, entity_service, sample_entity):
        with pytest.raises(errors.NotFoundError, match=errors.ENTITY_NOT_FOUND):
            entity_service.require_entity(OTHER_USER, sample_entity.id)

    def test_list_entities_filters(self, entity_service):
        entity_service.create_entity(USER, "Activa", ActivityType.COMERCIO)
        entity_service.create_entity(USER, "Dormida", ActivityType.COMERCIO, active=False)

        assert [e.name for e in entity_service.list_entities(USER, active=True)] == ["Activa"]
        assert len(entity_service.list_entities(USER)) == 2
        assert [e.name for e in entity_service.list_entities(USER, search="dorm")] == ["Dormida"]

    def test_list_entities_page(self, entity_service):
        for n in range(3):
            entity_service.create_entity(USER, f"E{n}", ActivityType.SERVICIOS)

        page = entity_service.list_entities_page(USER, page=2, limit=2)

        assert page.total == 3
        assert [e.name for e in page.items] == ["E2"]

    def test_update_entity(self, entity_service, sample_entity):
        updated = entity_service.update_entity(USER, sample_entity.id, name="Estudio Contable", active=False)

        assert updated.name == "Estudio Contable"
        assert updated.active is False

    def test_delete_entity_with_transactions_blocked(self, entity_service, sample_entity, add_transaction):
        add_transaction()

        with pytest.raises(errors.DependencyError, match="Puede desactivar la entidad"):
            entity_service.delete_entity(USER, sample_entity.id)
        assert entity_service.get_entity(USER, sample_entity.id) is not None

    def test_delete_entity(self, entity_service, sample_entity):
        entity_service.delete_entity(USER, sample_entity.id)
        assert entity_service.get_entity(USER, sample_entity.id) is None


class TestBankAccountService:
    """Tests for BankAccountService."""

    def test_create_account_defaults_to_ars(self, bank_account_service):
        account_id = bank_account_service.create_account(USER, "Corriente", "Santander")

        account = bank_account_service.get_account(USER, account_id)
        assert account.currency is Currency.ARS
        assert account.active is True

    def test_create_account_requires_bank(self, bank_account_service):
        with pytest.raises(errors.ValidationError, match="banco es requerido"):
            bank_account_service.create_account(USER, "Corriente", "")

    def test_update_account(self, bank_account_service, sample_account):
        updated = bank_account_service.update_account(USER, sample_account.id, currency="USD", account_number="123")

        assert updated.currency is Currency.USD
        assert updated.account_number == "123"

    def test_delete_account_with_transactions_blocked(self, bank_account_service, sample_account, add_transaction):
        add_transaction()

        with pytest.raises(errors.DependencyError):
            bank_account_service.delete_account(USER, sample_account.id)

    def test_delete_missing_account(self, bank_account_service):
        with pytest.raises(errors.NotFoundError):
            bank_account_service.delete_account(USER, 404)


class TestLedgerAccountService:
    """Tests for LedgerAccountService."""

    def test_create_with_entity(self, ledger_account_service, sample_entity):
        account_id = ledger_account_service.create_account(USER, "5.1", "Materiales", entity_id=sample_entity.id)

        assert ledger_account_service.get_account(USER, account_id).entity_id == sample_entity.id

    def test_create_with_foreign_entity(self, temp_db, ledger_account_service):
        foreign = temp_db.create_entity(OTHER_USER, "Ajena", ActivityType.PERSONAL)

        with pytest.raises(errors.ValidationError, match=errors.INVALID_REFERENCES):
            ledger_account_service.create_account(USER, "5.1", "Materiales", entity_id=foreign)

    def test_duplicate_code(self, ledger_account_service, sample_ledger):
        with pytest.raises(errors.ConflictError, match="4.1.01"):
            ledger_account_service.create_account(USER, sample_ledger.code, "Otra")

    def test_code_too_long(self, ledger_account_service):
        with pytest.raises(errors.ValidationError, match="no puede exceder 20"):
            ledger_account_service.create_account(USER, "1" * 21, "Larga")

    def test_list_by_code_prefix(self, ledger_account_service):
        for code, name in [("1", "Activo"), ("1.1", "Caja"), ("2", "Pasivo")]:
            ledger_account_service.create_account(USER, code, name)

        assert [a.code for a in ledger_account_service.list_accounts(USER, code_prefix="1")] == ["1", "1.1"]

    def test_list_accounts_page_default_limit(self, ledger_account_service, sample_ledger):
        page = ledger_account_service.list_accounts_page(USER)
        assert page.limit == 50
        assert page.total == 1

    def test_set_active(self, ledger_account_service):
        ids = [ledger_account_service.create_account(USER, str(n), f"Cuenta {n}") for n in range(3)]

        changed = ledger_account_service.set_active(USER, ids[:2], False)

        assert changed == 2
        assert [a.code for a in ledger_account_service.list_accounts(USER, active=True)] == ["2"]

    def test_set_active_ignores_foreign_ids(self, temp_db, ledger_account_service, sample_ledger):
        foreign = temp_db.create_ledger_account(OTHER_USER, "9", "Ajena")

        assert ledger_account_service.set_active(USER, [sample_ledger.id, foreign], False) == 1
        assert temp_db.get_ledger_account(OTHER_USER, foreign).active is True

    def test_set_active_requires_ids(self, ledger_account_service):
        with pytest.raises(errors.ValidationError):
            ledger_account_service.set_active(USER, [], True)

    def test_update_code_conflict(self, ledger_account_service, sample_ledger):
        other = ledger_account_service.create_account(USER, "4.1.02", "Ventas")

        with pytest.raises(errors.ConflictError):
            ledger_account_service.update_account(USER, other, code=sample_ledger.code)

    def test_update_clears_entity(self, ledger_account_service, sample_entity):
        account_id = ledger_account_service.create_account(USER, "5.1", "Materiales", entity_id=sample_entity.id)

        updated = ledger_account_service.update_account(USER, account_id, entity_id=None, update_entity=True)

        assert updated.entity_id is None

    def test_delete_in_use_blocked(self, ledger_account_service, sample_ledger, add_transaction):
        add_transaction()

        with pytest.raises(errors.DependencyError, match="el asiento"):
            ledger_account_service.delete_account(USER, sample_ledger.id)
