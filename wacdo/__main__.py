"""Run the API server: ``python -m wacdo``."""

import uvicorn

from wacdo.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "wacdo.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development and settings.debug,
    )


if __name__ == "__main__":
    main()
