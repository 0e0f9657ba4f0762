"""Run the API with uvicorn: `python -m persona_registry`."""

import uvicorn

from persona_registry.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "persona_registry.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
