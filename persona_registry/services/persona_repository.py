"""Persona Repository — SQLAlchemy-backed persistence for persona records.

Invariants:
    - Derived fields (edad, fecha_nacimiento, genero) and matricula always come from the
      server, never from the caller
    - Duplicate curp detected by the unique index at commit — no pre-insert lookup, so
      concurrent creates of one curp leave exactly one row
    - After an IntegrityError the curp is looked up once: present → DuplicateIdentityCode,
      absent → matricula collision, retried with a fresh number
    - Every store call bounded by a timeout; timeouts and SQLAlchemy errors → StoreUnavailable
    - list() returns rows in storage order (surrogate id ascending)
    - A matricula outside the 10-digit range is NotFound without a store call

Design Decisions:
    - Session injected per request (ADR: no ambient global handle in business code)
    - Identity code parsed BEFORE any store call: malformed input never touches the DB
    - Enrollment number source injectable: collision paths are testable without luck
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from sqlalchemy import select, Select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from persona_registry.config import Settings
from persona_registry.core.domain_types import (
    EnrollmentNumber, ENROLLMENT_NUMBER_MIN, ENROLLMENT_NUMBER_MAX,
)
from persona_registry.core.enrollment_number import generate_enrollment_number
from persona_registry.core.errors import (
    DuplicateIdentityCode, EnrollmentNumberExhausted, ErrorContext,
    InvalidQuery, NotFound, StoreUnavailable,
)
from persona_registry.core.identity_code import IdentityCodeInfo, parse_identity_code
from persona_registry.core.pagination import resolve_page_window
from persona_registry.models.persona import Persona

logger = logging.getLogger(__name__)


class SqlPersonaRepository:
    """PersonaRepository implementation over an AsyncSession."""

    def __init__(
        self,
        db: AsyncSession,
        settings: Settings,
        next_enrollment_number: Callable[[], int] = generate_enrollment_number,
    ):
        self._db = db
        self._settings = settings
        self._next_enrollment_number = next_enrollment_number

    async def create(
        self,
        nombres: str,
        apellido_paterno: str,
        apellido_materno: str,
        curp: str,
    ) -> EnrollmentNumber:
        """Insert a persona and return its generated matricula."""
        info = parse_identity_code(curp)
        return await self._bounded(
            self._insert(nombres, apellido_paterno, apellido_materno, curp, info),
            self._settings.create_timeout_seconds,
            "insert",
        )

    async def find_by_identifier(
        self, matricula: int | None = None, curp: str | None = None,
    ) -> Persona:
        """Find one persona by matricula (preferred when non-zero) or curp."""
        if matricula:
            context = ErrorContext(matricula=matricula, operation="find")
            if not ENROLLMENT_NUMBER_MIN <= matricula <= ENROLLMENT_NUMBER_MAX:
                raise NotFound(context)
            stmt = select(Persona).where(Persona.matricula == matricula)
        elif curp:
            stmt = select(Persona).where(Persona.curp == curp)
            context = ErrorContext(curp=curp, operation="find")
        else:
            raise InvalidQuery()

        persona = await self._bounded(
            self._fetch_one(stmt), self._settings.read_timeout_seconds, "find",
        )
        if persona is None:
            raise NotFound(context)
        return persona

    async def _insert(
        self,
        nombres: str,
        apellido_paterno: str,
        apellido_materno: str,
        curp: str,
        info: IdentityCodeInfo,
    ) -> EnrollmentNumber:
        max_attempts = self._settings.enrollment_number_max_attempts
        for attempt in range(1, max_attempts + 1):
            matricula = EnrollmentNumber(self._next_enrollment_number())
            self._db.add(Persona(
                nombres=nombres,
                apellido_paterno=apellido_paterno,
                apellido_materno=apellido_materno,
                curp=curp,
                edad=info.age,
                fecha_nacimiento=info.birth_date,
                genero=info.gender.value,
                matricula=matricula,
            ))
            try:
                await self._db.commit()
            except IntegrityError:
                await self._db.rollback()
                if await self._curp_exists(curp):
                    raise DuplicateIdentityCode(curp)
                logger.warning(
                    "Enrollment number collision, retrying",
                    extra={"matricula": matricula, "attempt": attempt},
                )
                continue
            logger.info("Persona created", extra={"matricula": matricula})
            return matricula
        raise EnrollmentNumberExhausted(
            max_attempts, ErrorContext(curp=curp, operation="insert"),
        )

    async def _curp_exists(self, curp: str) -> bool:
        result = await self._db.execute(
            select(Persona.id).where(Persona.curp == curp),
        )
        return result.scalar_one_or_none() is not None

    async def _fetch_one(self, stmt: Select) -> Persona | None:
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def _fetch_all(self, stmt: Select) -> list[Persona]:
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def _bounded(
        self, operation: Awaitable[Any], timeout: float, name: str,
    ) -> Any:
        """Await a store operation under a timeout, mapping failures to StoreUnavailable."""
        try:
            return await asyncio.wait_for(operation, timeout)
        except asyncio.TimeoutError:
            logger.error(
                f"Store {name} timed out after {timeout}s",
                extra={"operation": name},
            )
            raise StoreUnavailable(f"timed out after {timeout}s", name)
        except SQLAlchemyError as e:
            logger.error(f"Store {name} error: {e}", extra={"operation": name})
            raise StoreUnavailable(str(getattr(e, "orig", None) or e), name)

    async def list(self, page: int, per_page: int) -> list[Persona]:
        """Return one page of personas in storage order."""
        window = resolve_page_window(
            page, per_page,
            default_per_page=self._settings.default_per_page,
            max_per_page=self._settings.max_per_page,
        )
        stmt = (
            select(Persona)
            .order_by(Persona.id)
            .offset(window.skip)
            .limit(window.limit)
        )
        return await self._bounded(
            self._fetch_all(stmt), self._settings.read_timeout_seconds, "list",
        )
