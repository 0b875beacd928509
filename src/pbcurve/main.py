import logging

from pbcurve.config import ServiceSettings, configure_logging


logger = logging.getLogger(__name__)


def main():
    settings = ServiceSettings.from_env()
    configure_logging(settings)

    from pbcurve.webapi.webapi import app

    logger.info("Serving curve API on %s:%d", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
