"""Entry point so `python -m school_api` starts the app.

This mirrors running `uvicorn school_api.main:app` with the host, port and
log level taken from the environment (see school_api.core.config).
"""

import logging

import uvicorn

from school_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("Server listening on port %s", settings.port)
    uvicorn.run("school_api.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
