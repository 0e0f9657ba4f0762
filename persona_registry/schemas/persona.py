"""Persona Schemas — Pydantic models for the persona API boundary.

Invariants:
    - PersonaCreate accepts derived fields (edad, fecha_nacimiento, genero, matricula)
      and unknown fields, but never forwards them — the server derives them
    - PersonaResponse field names are the wire contract, identical to storage columns
    - curp is the only required field; names default to empty strings

Design Decisions:
    - extra="ignore" over extra="forbid": older clients send the full persona shape
    - Length of curp NOT validated here — the identity code parser owns that rule
"""

from pydantic import BaseModel, ConfigDict


class PersonaCreate(BaseModel):
    """Persona creation body — only client-owned fields are kept."""
    model_config = ConfigDict(extra="ignore")

    nombres: str = ""
    apellido_paterno: str = ""
    apellido_materno: str = ""
    curp: str


class PersonaResponse(BaseModel):
    """Persona response — public-facing stored record."""
    model_config = ConfigDict(from_attributes=True)

    nombres: str
    apellido_paterno: str
    apellido_materno: str
    curp: str
    edad: int
    fecha_nacimiento: str
    genero: str
    matricula: int
