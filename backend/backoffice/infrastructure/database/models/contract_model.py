"""SQLAlchemy ORM model for client contracts."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.infrastructure.database.base import Base, utcnow


class ContractModel(Base):
    """ORM model; maps to the 'contracts' table.

    A partial unique index allows at most one ACTIVE row per client, so a
    lost race between two activations fails instead of leaving two.
    """

    __tablename__ = "contracts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False
    )
    contract_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="ACTIVE")
    contract_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    contract_renewal_date: Mapped[date] = mapped_column(Date, nullable=False)

    hr_admin_inclusive_hours: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    hr_admin_inclusive_hours_period: Mapped[str | None] = mapped_column(String(20), nullable=True)
    employment_law_inclusive_hours: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2), nullable=True
    )
    employment_law_inclusive_hours_period: Mapped[str | None] = mapped_column(
        String(20), nullable=True
    )
    hr_admin_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    hr_admin_rate_unit: Mapped[str | None] = mapped_column(String(20), nullable=True)
    hr_admin_rate_not_needed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    employment_law_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    employment_law_rate_unit: Mapped[str | None] = mapped_column(String(20), nullable=True)
    employment_law_rate_not_needed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    mileage_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    mileage_rate_not_needed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    overnight_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    overnight_rate_not_needed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    inclusive_services_in_scope: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    inclusive_services_out_of_scope: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list
    )

    signed_contract_received: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    contract_uploaded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    contract_sent_to_client: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    payment_terms_agreed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    doc_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    signed_contract_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    __table_args__ = (
        UniqueConstraint("client_id", "version", name="uq_contracts_client_version"),
        Index("ix_contracts_client_status", "client_id", "status"),
        Index(
            "uq_contracts_one_active_per_client",
            "client_id",
            unique=True,
            postgresql_where=text("status = 'ACTIVE'"),
            sqlite_where=text("status = 'ACTIVE'"),
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<ContractModel(id={self.id}, number='{self.contract_number}', "
            f"status={self.status})>"
        )
