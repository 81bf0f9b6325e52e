"""Entry point for the intentbot HTTP service."""

import logging

import uvicorn

from intentbot.api import create_app
from intentbot.catalog import IntentCatalog
from intentbot.config import Config
from intentbot.detector import DetectionSettings, IntentDetector
from intentbot.services import LlmIntentClassifier


def main() -> None:
    """Start the intent detection service."""
    try:
        config = Config.from_env()

        # Configure logging with the config-specified level
        logging.basicConfig(
            level=getattr(logging, config.log_level),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        catalog = IntentCatalog.default()
        classifier = (
            LlmIntentClassifier.from_config(config, catalog)
            if config.classifier_enabled
            else None
        )
        detector = IntentDetector(
            catalog,
            classifier=classifier,
            settings=DetectionSettings.from_config(config),
        )
        app = create_app(detector, max_text_length=config.max_text_length)
        uvicorn.run(app, host=config.host, port=config.port)
    except ValueError as e:
        logging.error(f"Configuration error: {e}")
        raise
    except KeyboardInterrupt:
        logging.info("Service interrupted by user")
    except Exception as e:
        logging.error(f"Fatal error: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
