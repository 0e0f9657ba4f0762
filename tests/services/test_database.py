"""Session Manager — rollback and close only; driver errors pass through unchanged."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from persona_registry.infrastructure.database import DatabaseSessionManager
from persona_registry.models.persona import Persona


def _persona(matricula):
    return Persona(
        curp="ABCD990101HDFRRN09", edad=27, fecha_nacimiento="1999-01-01",
        genero="Hombre", matricula=matricula,
    )


@pytest.fixture
async def manager(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'personas.db'}")
    await manager.create_all()
    yield manager
    await manager.dispose()


async def test_integrity_error_is_not_remapped(manager):
    with pytest.raises(IntegrityError):
        async with manager.session() as db:
            db.add_all([_persona(1111111111), _persona(2222222222)])
            await db.commit()

    async with manager.session() as db:
        count = await db.execute(select(func.count()).select_from(Persona))
        assert count.scalar_one() == 0


async def test_health_check_on_live_engine(manager):
    assert await manager.health_check() is True
