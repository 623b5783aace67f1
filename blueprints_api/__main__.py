"""Runs the API with uvicorn: python -m blueprints_api"""
import uvicorn

from .config import Settings


def main() -> None:
    settings = Settings.from_env()
    uvicorn.run("blueprints_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
