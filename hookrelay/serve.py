"""Command-line entry point that serves the receiver with uvicorn."""

import uvicorn

from hookrelay.config import get_settings


def main() -> None:
    """Run the application on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "hookrelay.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        # logging is configured by the application lifespan
        log_config=None,
    )


if __name__ == "__main__":
    main()
