"""
Main entrypoint: serves the banner with uvicorn, scheduler included.

Usage:
    python -m hrbanner setup        # one-time Fitbit authorization
    python -m hrbanner              # serves /stats.svg on PORT
"""
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)


def _run_setup() -> None:
    from hrbanner.scripts.setup import run_setup
    run_setup()


def _serve() -> None:
    import uvicorn

    from hrbanner.api.main import create_app
    from hrbanner.config import get_settings, validate_settings
    from hrbanner.fitbit.client import FitbitClient
    from hrbanner.service import BannerService

    settings = get_settings()
    try:
        validate_settings(settings)
    except ValueError as exc:
        logger.error("Invalid configuration: %s (run `python -m hrbanner setup`)", exc)
        sys.exit(1)

    client = FitbitClient.from_settings(settings)
    if not client.auth.has_credentials():
        logger.error("No Fitbit credentials found. Run `python -m hrbanner setup` first.")
        sys.exit(1)

    logger.info(
        "Ensure Bluetooth is enabled on your phone so data can sync to Fitbit's "
        "servers, and Battery Saver mode is off."
    )
    logger.info(
        "Use the following README embed: "
        "![Fitbit Heart Rate Chart](http://HOSTIP:%d/stats.svg)", settings.port,
    )
    service = BannerService(client, settings)
    uvicorn.run(create_app(service), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    # Dispatch on first argument: `python -m hrbanner setup` or just `python -m hrbanner`
    if len(sys.argv) > 1 and sys.argv[1] == "setup":
        _run_setup()
    else:
        _serve()
