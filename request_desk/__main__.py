import uvicorn

from .core.settings import settings


def main() -> None:
    uvicorn.run("request_desk.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
