"""Tests for CLI commands."""

import pytest

from cajachica.cli.main import cli
from cajachica.domain.entities import TransactionState

from conftest import FakeSuggestionProvider

CLI_USER = "cli-user"


def _invoke(cli_runner, temp_db, *args, provider=None):
    obj = {"provider": provider} if provider is not None else None
    return cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--user", CLI_USER, *args], obj=obj
    )


@pytest.fixture
def cli_refs(cli_runner, temp_db):
    """Create an entity, an account and a ledger account through the CLI."""
    for args in (
        ("entity", "create", "Freelance", "--type", "FREELANCE"),
        ("account", "create", "Caja", "--bank", "Banco Nación"),
        ("ledger", "create", "4-01-001-0001", "Honorarios"),
    ):
        result = _invoke(cli_runner, temp_db, *args)
        assert result.exit_code == 0, result.output


def _add(cli_runner, temp_db, *extra, description="Honorarios enero", amount="1.500,50", txn_type="INGRESO"):
    return _invoke(
        cli_runner,
        temp_db,
        "transaction", "add", description, amount,
        "--type", txn_type,
        "--entity", "freelance",
        "--account", "Caja",
        "--ledger", "4-01-001-0001",
        *extra,
    )


def test_entity_create_and_list(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "entity", "create", "Kiosco", "--type", "comercio")

    assert result.exit_code == 0
    assert "Created entity 'Kiosco'" in result.output

    listing = _invoke(cli_runner, temp_db, "entity", "list")
    assert "Kiosco" in listing.output
    assert "COMERCIO" in listing.output


def test_entity_duplicate_fails(cli_runner, temp_db):
    _invoke(cli_runner, temp_db, "entity", "create", "Kiosco")
    result = _invoke(cli_runner, temp_db, "entity", "create", "Kiosco")

    assert result.exit_code == 1
    assert "Ya existe una entidad" in result.output


def test_data_is_scoped_by_user(cli_runner, temp_db):
    _invoke(cli_runner, temp_db, "entity", "create", "Kiosco")

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "--user", "someone-else", "entity", "list"])

    assert "No entities found." in result.output


def test_account_create_defaults_bank_to_name(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "account", "create", "Dólares", "--currency", "USD")

    assert result.exit_code == 0
    listing = _invoke(cli_runner, temp_db, "account", "list")
    assert "Bank: Dólares" in listing.output
    assert "USD" in listing.output


def test_transaction_add_and_list(cli_runner, temp_db, cli_refs):
    result = _add(cli_runner, temp_db)

    assert result.exit_code == 0, result.output
    assert "(REAL) ARS 1,500.50" in result.output

    listing = _invoke(cli_runner, temp_db, "transaction", "list")
    assert "Honorarios enero" in listing.output
    assert "Showing 1 of 1" in listing.output


def test_transaction_add_unknown_entity(cli_runner, temp_db, cli_refs):
    result = _invoke(
        cli_runner, temp_db,
        "transaction", "add", "Pago", "10", "--type", "EGRESO",
        "--entity", "Nadie", "--account", "Caja", "--ledger", "Honorarios",
    )

    assert result.exit_code == 1
    assert "Entidad 'Nadie' no encontrado" in result.output


def test_planned_transaction_and_confirm(cli_runner, temp_db, cli_refs):
    added = _add(cli_runner, temp_db, "--planned", "2024-05-10", txn_type="EGRESO", amount="300")
    assert "(PLANIFICADA) ARS -300.00" in added.output

    (txn,) = temp_db.list_transactions(CLI_USER)
    confirmed = _invoke(cli_runner, temp_db, "transaction", "confirm", str(txn.id), "--date", "2024-05-12")

    assert confirmed.exit_code == 0
    assert f"Transaction {txn.id} marked as realized on 2024-05-12" in confirmed.output
    stored = temp_db.get_transaction(CLI_USER, txn.id)
    assert stored.state is TransactionState.REAL
    assert stored.planned_date.date().isoformat() == "2024-05-10"

    again = _invoke(cli_runner, temp_db, "transaction", "confirm", str(txn.id))
    assert again.exit_code == 1
    assert "ya fue marcada como realizada" in again.output


def test_balances(cli_runner, temp_db, cli_refs):
    _add(cli_runner, temp_db, amount="1000")
    _add(cli_runner, temp_db, amount="250", txn_type="EGRESO")
    _add(cli_runner, temp_db, "--planned", "2030-01-01", amount="99")

    result = _invoke(cli_runner, temp_db, "balances")

    assert result.exit_code == 0
    assert "750.00" in result.output
    assert "Planned transactions pending: 1" in result.output


def test_upcoming_by_month(cli_runner, temp_db, cli_refs):
    _add(cli_runner, temp_db, "--planned", "2024-03-12", description="Alquiler")

    result = _invoke(cli_runner, temp_db, "upcoming", "--group", "mes", "--month", "2024-03-01")

    assert result.exit_code == 0
    assert "marzo 2024 [VENCIDO]" in result.output
    assert "Alquiler" in result.output


def test_export_to_stdout(cli_runner, temp_db, cli_refs):
    _add(cli_runner, temp_db)

    result = _invoke(cli_runner, temp_db, "export")

    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines[0].startswith("ID,Descripcion,Monto")
    assert "Honorarios enero" in lines[1]


def test_export_to_file(cli_runner, temp_db, cli_refs, tmp_path):
    _add(cli_runner, temp_db)
    target = tmp_path / "out.csv"

    result = _invoke(cli_runner, temp_db, "export", "-o", str(target))

    assert "Exported 1 transaction(s)" in result.output
    assert target.read_text(encoding="utf-8").count("\n") == 2


def test_ledger_generate_is_idempotent(cli_runner, temp_db):
    provider = FakeSuggestionProvider(
        chart=[{"codigo": "1-01-001-0001", "nombre": "Caja Central"}, {"codigo": "4-01-001-0001", "nombre": "Ventas"}]
    )

    first = _invoke(cli_runner, temp_db, "ledger", "generate", "COMERCIO", provider=provider)
    second = _invoke(cli_runner, temp_db, "ledger", "generate", "COMERCIO", provider=provider)

    assert "Created 2 ledger account(s):" in first.output
    assert "No new ledger accounts to add." in second.output
    assert provider.calls[0] == ("generate_chart", "Comercio Minorista / Negocio")


def test_ledger_generate_failure(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "ledger", "generate", "COMERCIO", provider=FakeSuggestionProvider())

    assert result.exit_code == 1
    assert "No se pudo generar el plan con IA" in result.output


def test_ledger_suggest_purpose_and_save(cli_runner, temp_db):
    provider = FakeSuggestionProvider(proposal={"codigo": "5-01-001-0003", "nombre": "Combustible"})

    result = _invoke(cli_runner, temp_db, "ledger", "suggest", "--purpose", "Nafta", "--save", provider=provider)

    assert result.exit_code == 0, result.output
    assert "Suggested: 5-01-001-0003 'Combustible'" in result.output
    assert temp_db.get_ledger_account_by_code(CLI_USER, "5-01-001-0003") is not None


def test_ledger_suggest_match(cli_runner, temp_db, cli_refs):
    (ledger,) = temp_db.list_ledger_accounts(CLI_USER)
    provider = FakeSuggestionProvider(match=str(ledger.id))

    result = _invoke(cli_runner, temp_db, "ledger", "suggest", "--describe", "Cobro factura", provider=provider)

    assert f"Best match: 4-01-001-0001 'Honorarios' (ID: {ledger.id})" in result.output


def test_ledger_suggest_needs_one_mode(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "ledger", "suggest")

    assert result.exit_code == 1
    assert "exactly one of --purpose or --describe" in result.output


def test_ledger_deactivate(cli_runner, temp_db, cli_refs):
    result = _invoke(cli_runner, temp_db, "ledger", "deactivate", "4-01-001-0001")

    assert "Deactivated 1 ledger account(s)" in result.output
    assert "No ledger accounts found." in _invoke(cli_runner, temp_db, "ledger", "list").output
