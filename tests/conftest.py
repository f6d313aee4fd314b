"""Shared pytest fixtures for cajachica tests."""

import tempfile
import os
from datetime import datetime, UTC
from decimal import Decimal

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient

from cajachica.ai.provider import SuggestionProvider
from cajachica.config import Settings
from cajachica.database.factories import create_sqlite_database
from cajachica.domain.balance import BalanceService
from cajachica.domain.bank_account import BankAccountService
from cajachica.domain.entities import ActivityType, Currency, TransactionState, TransactionType
from cajachica.domain.entity import EntityService
from cajachica.domain.ledger_account import LedgerAccountService
from cajachica.domain.reconciliation import LedgerReconciliationService
from cajachica.domain.schedule import DueScheduleService
from cajachica.domain.transaction import TransactionService, build_new_transaction
from cajachica.web.app import create_app
from cajachica.web.dependencies import get_current_user_id

USER = "user-1"
OTHER_USER = "user-2"


class FakeSuggestionProvider(SuggestionProvider):
    """Provider returning canned payloads and recording every call."""

    def __init__(self, chart=None, proposal=None, match=None, interpretation=None):
        self.chart = chart
        self.proposal = proposal
        self.match = match
        self.interpretation = interpretation
        self.calls = []

    def generate_chart(self, activity_label):
        self.calls.append(("generate_chart", activity_label))
        return self.chart

    def propose_account(self, purpose, entity_name, activity, existing_codes):
        self.calls.append(("propose_account", purpose, entity_name, activity, list(existing_codes)))
        return self.proposal

    def match_account(self, description, transaction_type, activity, candidates, entity_name=None):
        self.calls.append(("match_account", description, transaction_type, activity, list(candidates), entity_name))
        return self.match

    def interpret_text(self, text, entities, accounts, ledger_accounts, today):
        self.calls.append(("interpret_text", text, list(entities), list(accounts), list(ledger_accounts), today))
        return self.interpretation


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def entity_service(temp_db):
    return EntityService(temp_db)


@pytest.fixture
def bank_account_service(temp_db):
    return BankAccountService(temp_db)


@pytest.fixture
def ledger_account_service(temp_db):
    return LedgerAccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    return TransactionService(temp_db)


@pytest.fixture
def balance_service(temp_db):
    return BalanceService(temp_db)


@pytest.fixture
def schedule_service(temp_db):
    return DueScheduleService(temp_db)


@pytest.fixture
def fake_provider():
    return FakeSuggestionProvider()


@pytest.fixture
def reconciliation_service(temp_db, fake_provider):
    return LedgerReconciliationService(temp_db, fake_provider)


@pytest.fixture
def sample_entity(entity_service):
    """Create a sample entity for testing."""
    entity_id = entity_service.create_entity(USER, "Estudio", ActivityType.FREELANCE)
    return entity_service.get_entity(USER, entity_id)


@pytest.fixture
def sample_account(bank_account_service):
    """Create a sample ARS bank account for testing."""
    account_id = bank_account_service.create_account(USER, "Caja de ahorro", "Banco Nación")
    return bank_account_service.get_account(USER, account_id)


@pytest.fixture
def sample_ledger(ledger_account_service):
    """Create a sample ledger account for testing."""
    account_id = ledger_account_service.create_account(USER, "4.1.01", "Honorarios")
    return ledger_account_service.get_account(USER, account_id)


@pytest.fixture
def add_transaction(transaction_service, sample_entity, sample_account, sample_ledger):
    """Factory creating a transaction against the sample references."""

    def _add(
        amount="100",
        type=TransactionType.INCOME,
        state=TransactionState.REAL,
        currency=Currency.ARS,
        description="Movimiento",
        date=None,
        planned_date=None,
        entity_id=None,
        bank_account_id=None,
        ledger_account_id=None,
    ):
        new = build_new_transaction(
            description=description,
            amount=Decimal(amount),
            type=type,
            entity_id=entity_id or sample_entity.id,
            bank_account_id=bank_account_id or sample_account.id,
            ledger_account_id=ledger_account_id or sample_ledger.id,
            currency=currency,
            state=state,
            date=date,
            planned_date=planned_date,
            now=datetime(2024, 3, 10, 12, 0, tzinfo=UTC),
        )
        return transaction_service.create_transaction(USER, new)

    return _add


@pytest.fixture
def app(temp_db, fake_provider):
    return create_app(db=temp_db, provider=fake_provider, settings=Settings(session_secret="test-secret"))


@pytest.fixture
def client(app):
    """API client whose requests are authenticated as USER."""
    app.dependency_overrides[get_current_user_id] = lambda: USER
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(app):
    """API client without a session."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def cli_runner():
    """Create a CliRunner for testing CLI commands."""
    return CliRunner()
