import argparse

from guest_assistant.config.logging_config import configure_logging
from guest_assistant.config.settings import AppSettings


def main(argv: list[str] | None = None) -> int:
    settings = AppSettings()
    parser = argparse.ArgumentParser("serve", description="Run the HTTP API.")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    import uvicorn  # lazy: only needed to serve

    uvicorn.run(
        "guest_assistant.interface.http.api:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
