import uvicorn

from .config import Settings
from .server import create_app


def main() -> None:
    settings = Settings.from_env()
    # uvicorn handles SIGINT/SIGTERM and runs the lifespan shutdown, which
    # disposes the database engine
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
