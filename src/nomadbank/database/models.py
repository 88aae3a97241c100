"""SQLAlchemy models for nomadbank database."""

import uuid
from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Strategy(Base):
    """Keep-alive strategy model. System presets have an empty user_id."""

    __tablename__ = "strategies"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), nullable=False, default="", index=True)
    name = Column(String(255), nullable=False)
    interval_min = Column(Integer, nullable=False, default=30)
    interval_max = Column(Integer, nullable=False, default=60)
    time_start = Column(String(5), nullable=False, default="09:00")
    time_end = Column(String(5), nullable=False, default="21:00")
    skip_weekend = Column(Boolean, nullable=False, default=False)
    amount_min = Column(Numeric(10, 2), nullable=False, default=10)
    amount_max = Column(Numeric(10, 2), nullable=False, default=30)
    daily_limit = Column(Integer, nullable=False, default=3)
    is_system = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Account(Base):
    """Tracked bank account model."""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), nullable=False)
    name = Column(String(255), nullable=False)
    amount_min = Column(Numeric(10, 2), nullable=False, default=10)
    amount_max = Column(Numeric(10, 2), nullable=False, default=100)
    strategy_id = Column(String(36), ForeignKey("strategies.id"), nullable=True)
    group_name = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        Index("idx_accounts_user_status_group", "user_id", "is_active", "group_name"),
        Index("idx_accounts_user_name", "user_id", "name"),
    )

    # Relationships
    strategy = relationship("Strategy")


class TransferTask(Base):
    """Generated transfer task model."""

    __tablename__ = "transfer_tasks"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), nullable=False)
    group_name = Column(String(100), nullable=False, default="", index=True)
    cycle = Column(Integer, nullable=False)
    anchor_date = Column(Date, nullable=False)
    exec_date = Column(DateTime, nullable=False)
    from_account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    to_account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        Index("idx_tasks_user_exec", "user_id", "exec_date"),
        Index("idx_tasks_user_status_exec", "user_id", "status", "exec_date"),
    )

    # Relationships
    from_account = relationship("Account", foreign_keys=[from_account_id])
    to_account = relationship("Account", foreign_keys=[to_account_id])


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
