import uvicorn

from outflo.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "outflo.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEV_MODE
    )


if __name__ == "__main__":
    main()
