"""Entry point for the episode resolution API."""
import logging
import sys

from otakuflix.config.settings import settings
from otakuflix.web.server import run_server


# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
    handlers=[
        logging.FileHandler("otakuflix.log"),
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    try:
        logger.info("Starting OtakuFlix episode API...")

        if not settings.rpmshare_api_key and not settings.filemoon_api_key:
            logger.warning("Neither RPMSHARE_API_KEY nor FILEMOON_API_KEY is set - only fallback data will be served")
        if not settings.tvdb_api_key:
            logger.warning("TVDB_API_KEY not set - episodes will not be enriched")

        logger.info("Configuration loaded successfully")
        run_server(settings.web_server_host, settings.web_server_port, False)

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        logger.error("Check the error above and verify your .env file is configured correctly")
        sys.exit(1)


if __name__ == "__main__":
    main()
