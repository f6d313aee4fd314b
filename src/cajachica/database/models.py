"""SQLAlchemy models for cajachica database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    UniqueConstraint,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class Entity(Base):
    """Counterparty / business unit model."""

    __tablename__ = "entities"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String, nullable=True)
    activity_type = Column(String(20), nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_entity_user_name"),)

    transactions = relationship("Transaction", back_populates="entity")


class BankAccount(Base):
    """Bank account model."""

    __tablename__ = "bank_accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    bank = Column(String(50), nullable=False)
    account_number = Column(String, nullable=True)
    account_type = Column(String, nullable=True)
    currency = Column(String(3), default="ARS", nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    transactions = relationship("Transaction", back_populates="bank_account")


class LedgerAccount(Base):
    """Chart-of-accounts entry model."""

    __tablename__ = "ledger_accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    code = Column(String(20), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(String, nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Dedup key for generated charts of accounts
    __table_args__ = (UniqueConstraint("user_id", "code", name="uq_ledger_user_code"),)

    transactions = relationship("Transaction", back_populates="ledger_account")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    currency = Column(String(3), default="ARS", nullable=False)
    type = Column(String(10), nullable=False)
    state = Column(String(12), default="REAL", nullable=False)
    date = Column(DateTime, nullable=False)
    planned_date = Column(DateTime, nullable=True)
    comment = Column(String, nullable=True)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=False)
    bank_account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=False)
    ledger_account_id = Column(Integer, ForeignKey("ledger_accounts.id"), nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    __table_args__ = (Index("ix_transactions_user_state", "user_id", "state"),)

    entity = relationship("Entity", back_populates="transactions")
    bank_account = relationship("BankAccount", back_populates="transactions")
    ledger_account = relationship("LedgerAccount", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Sessions are handed across FastAPI worker threads
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
