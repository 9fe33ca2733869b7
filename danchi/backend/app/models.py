# app/models.py
from __future__ import annotations

import enum
from datetime import date, datetime

from sqlalchemy import (
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class ContractKind(str, enum.Enum):
    MAX = "MAX"
    MINI = "MINI"


# -----------------------------
# Models
# -----------------------------
class HousingComplex(Base):
    __tablename__ = "housing_complexes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    pref: Mapped[str | None] = mapped_column(String(20), nullable=True)
    city: Mapped[str | None] = mapped_column(String(80), nullable=True)
    built_ym: Mapped[str | None] = mapped_column(String(7), nullable=True)  # YYYY-MM
    unit_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # ①保守的 / ②中間 / ③攻め / ④超攻め
    floor_coef_pattern: Mapped[str | None] = mapped_column(String(40), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)


class EstateEntry(Base):
    """Historical contract record (MAX = ceiling reference, MINI = floor reference)."""

    __tablename__ = "estate_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    complex_id: Mapped[int] = mapped_column(ForeignKey("housing_complexes.id"), index=True)

    contract_kind: Mapped[ContractKind | None] = mapped_column(Enum(ContractKind), nullable=True, index=True)
    floor: Mapped[int | None] = mapped_column(Integer, nullable=True)
    area_sqm: Mapped[float | None] = mapped_column(Float, nullable=True)
    layout: Mapped[str | None] = mapped_column(String(20), nullable=True)

    reins_registered_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    contract_date: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)

    max_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    past_min: Mapped[int | None] = mapped_column(Integer, nullable=True)

    coef_total: Mapped[float | None] = mapped_column(Float, nullable=True)
    interior_level_coef: Mapped[float | None] = mapped_column(Float, nullable=True)
    contract_year_coef: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)


class StockListing(Base):
    """Current listing; the target/raise/buy columns are stored overrides."""

    __tablename__ = "stock_listings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    complex_id: Mapped[int] = mapped_column(ForeignKey("housing_complexes.id"), index=True)
    entry_id: Mapped[int | None] = mapped_column(ForeignKey("estate_entries.id"), nullable=True)

    floor: Mapped[int | None] = mapped_column(Integer, nullable=True)
    area_sqm: Mapped[float | None] = mapped_column(Float, nullable=True)
    layout: Mapped[str | None] = mapped_column(String(20), nullable=True)
    registered_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    contract_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    max_unit_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    coef_total: Mapped[float | None] = mapped_column(Float, nullable=True)
    list_price: Mapped[int | None] = mapped_column(Integer, nullable=True)

    floor_coef: Mapped[float | None] = mapped_column(Float, nullable=True)
    target_unit_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    target_close_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    raise_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    buy_target_price: Mapped[int | None] = mapped_column(Integer, nullable=True)

    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
