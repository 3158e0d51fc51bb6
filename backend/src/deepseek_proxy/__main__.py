import uvicorn

from .core.config import get_settings


def main() -> None:
    settings = get_settings()
    # Serve the module-level app, built from the same cached settings
    uvicorn.run("deepseek_proxy.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
