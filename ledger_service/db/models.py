"""SQLAlchemy ORM models."""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from ledger_service.infrastructure.database import Base, ExactDecimal


class Wallet(Base):
    __tablename__ = "wallets"

    id = Column(String(64), primary_key=True)
    balance = Column(ExactDecimal(), nullable=False)


class WalletTransaction(Base):
    """One committed transfer.

    Column names follow the ledger store schema: ``author_id`` is the
    wallet debited and ``sender_id`` the wallet credited.
    """

    __tablename__ = "wallet_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source_id = Column("author_id", String(64), ForeignKey("wallets.id"), nullable=False)
    destination_id = Column("sender_id", String(64), ForeignKey("wallets.id"), nullable=False)
    amount = Column("balance", ExactDecimal(), nullable=False)
    created_at = Column("date", DateTime(timezone=True), nullable=False)
