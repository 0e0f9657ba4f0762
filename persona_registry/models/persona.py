"""Persona ORM — the single stored record type.

Invariants:
    - Table name and column names are the wire/storage contract (Spanish field names)
    - curp is unique (storage-level index) — the only duplicate guard
    - matricula is unique — collisions trigger a retry in the repository
    - id is a surrogate key defining storage order; never serialized
    - Names and curp are unbounded text: any length accepted by the parser is storable

Design Decisions:
    - Unique index over check-then-insert: atomic under concurrent creates
    - fecha_nacimiento kept as text: month/day are copied verbatim from the CURP
      and may not form a valid calendar date
"""

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from persona_registry.db.base import Base


class Persona(Base):
    """Persona record — created once, never updated or deleted."""
    __tablename__ = "personas"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    nombres: Mapped[str] = mapped_column(
        Text, nullable=False, default="",
    )
    apellido_paterno: Mapped[str] = mapped_column(
        Text, nullable=False, default="",
    )
    apellido_materno: Mapped[str] = mapped_column(
        Text, nullable=False, default="",
    )
    curp: Mapped[str] = mapped_column(
        Text, nullable=False, unique=True, index=True,
    )
    edad: Mapped[int] = mapped_column(Integer, nullable=False)
    fecha_nacimiento: Mapped[str] = mapped_column(String(16), nullable=False)
    genero: Mapped[str] = mapped_column(String(16), nullable=False)
    matricula: Mapped[int] = mapped_column(
        BigInteger, nullable=False, unique=True, index=True,
    )
