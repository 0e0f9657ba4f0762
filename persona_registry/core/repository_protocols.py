"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Route handlers depend on PersonaRepository, never on the ORM directly

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO
"""

from typing import Protocol

from persona_registry.core.domain_types import EnrollmentNumber


class PersonaRecord(Protocol):
    """Structural contract for a stored persona."""
    nombres: str
    apellido_paterno: str
    apellido_materno: str
    curp: str
    edad: int
    fecha_nacimiento: str
    genero: str
    matricula: int


class PersonaRepository(Protocol):
    """Contract for persona persistence — implemented by shell."""
    async def create(
        self, nombres: str, apellido_paterno: str, apellido_materno: str, curp: str,
    ) -> EnrollmentNumber: ...
    async def find_by_identifier(
        self, matricula: int | None = None, curp: str | None = None,
    ) -> PersonaRecord: ...
    async def list(self, page: int, per_page: int) -> list[PersonaRecord]: ...
