from .api import create_app
from .config import Settings, configure_logging


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = create_app(settings=settings)
    app.run(debug=settings.debug, port=settings.port)


if __name__ == "__main__":
    main()
