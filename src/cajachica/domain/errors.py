"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NoAccountsError(ValidationError):
    """The user has no active ledger accounts to match against."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist or is not owned by the caller."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class ProviderError(DomainError):
    """The suggestion provider returned nothing or malformed data."""


class GenerationError(ProviderError):
    """Chart-of-accounts generation produced no usable result."""


class SuggestionError(ProviderError):
    """A single ledger suggestion produced no usable result."""


ENTITY_NOT_FOUND = "Entidad no encontrada"
BANK_ACCOUNT_NOT_FOUND = "Cuenta no encontrada"
LEDGER_ACCOUNT_NOT_FOUND = "Asiento no encontrado"
TRANSACTION_NOT_FOUND = "Transacción no encontrada"
TRANSACTION_NOT_PLANNED = "Transacción no encontrada o ya fue marcada como realizada"
INVALID_REFERENCES = "Referencias no válidas"


def duplicate_ledger_code(code: str) -> str:
    """Return message for a ledger code that already exists for the user."""
    return f"Ya existe un asiento con el código '{code}'"


def duplicate_entity_name(name: str) -> str:
    """Return message for an entity name that already exists for the user."""
    return f"Ya existe una entidad con el nombre '{name}'"


def delete_blocked(kind: str, transaction_count: int) -> str:
    """Return message when a row still has transactions attached."""
    plural = "transacciones asociadas" if transaction_count != 1 else "una transacción asociada"
    return (
        f"No se puede eliminar {kind} porque tiene {plural}. "
        f"Puede desactivar {kind} en su lugar."
    )
