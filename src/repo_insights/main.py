from __future__ import annotations
import logging
import sys
import uvicorn
from pydantic import ValidationError
from repo_insights.infrastructure.config import get_settings

def main() -> None:
    """Start the uvicorn ASGI server."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        missing = ", ".join(str(err["loc"][0]).upper() for err in exc.errors())
        sys.exit(f"Invalid configuration, check: {missing}")

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    uvicorn.run(
        "repo_insights.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
