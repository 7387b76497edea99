"""Run the development server: ``python -m mediafetch``."""

import uvicorn

from mediafetch.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "mediafetch.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    main()
