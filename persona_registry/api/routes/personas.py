"""Persona Routes — create, lookup and paginated listing of personas.

Invariants:
    - POST /persona replies 201 with an empty body; derived fields in the body are ignored
    - GET /persona: matricula wins over curp; neither → 400; absent → 404
    - GET /personas always 200 with a JSON array (possibly empty) unless the store fails
    - Wrong method on either path → 405 "Método no permitido" (router method matching)
    - Domain errors propagate to the global handlers; routes never build error bodies

Design Decisions:
    - Query parameters read as raw strings and parsed leniently (core/pagination.py):
      malformed numbers behave like absent ones instead of failing validation
    - Repository built per request from the injected session (ADR: explicit DI)
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from persona_registry.config import Settings, get_settings
from persona_registry.core.pagination import parse_int_param
from persona_registry.core.repository_protocols import PersonaRepository
from persona_registry.infrastructure.database import get_db
from persona_registry.schemas.persona import PersonaCreate, PersonaResponse
from persona_registry.services.persona_repository import SqlPersonaRepository

logger = logging.getLogger(__name__)
router = APIRouter(tags=["personas"])


def get_persona_repository(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> PersonaRepository:
    return SqlPersonaRepository(db, settings)


@router.post("/persona", status_code=status.HTTP_201_CREATED)
async def create_persona(
    body: PersonaCreate,
    repo: PersonaRepository = Depends(get_persona_repository),
):
    """Create a persona; edad, fecha_nacimiento, genero and matricula are server-derived."""
    await repo.create(
        nombres=body.nombres,
        apellido_paterno=body.apellido_paterno,
        apellido_materno=body.apellido_materno,
        curp=body.curp,
    )
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("/persona", response_model=PersonaResponse)
async def get_persona(
    matricula: str | None = Query(None),
    curp: str | None = Query(None),
    repo: PersonaRepository = Depends(get_persona_repository),
):
    """Look up one persona by matricula or curp."""
    persona = await repo.find_by_identifier(
        matricula=parse_int_param(matricula), curp=curp,
    )
    return PersonaResponse.model_validate(persona)


@router.get("/personas", response_model=list[PersonaResponse])
async def list_personas(
    page: str | None = Query(None),
    per_page: str | None = Query(None, alias="perPage"),
    repo: PersonaRepository = Depends(get_persona_repository),
):
    """List personas in storage order, one page at a time."""
    personas = await repo.list(parse_int_param(page), parse_int_param(per_page))
    return [PersonaResponse.model_validate(p) for p in personas]
