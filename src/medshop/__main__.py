import uvicorn

from medshop.config.settings import get_settings
from medshop.main import create_app


def main() -> None:
    settings = get_settings()
    # log_config=None: keep the dictConfig applied by create_app
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
