import argparse
import json
import logging
import sys

from pulsehub.hot_topics.models.errors import FetchError, describe_error
from pulsehub.hot_topics.services.hot_topics_service import run_sync

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run one hot topics aggregation cycle and print it as JSON.")
    parser.add_argument("--config", help="Path to a hot_topics.yaml file")
    args = parser.parse_args(argv)

    try:
        response = run_sync(args.config)
    except FetchError as err:
        logger.error("Aggregation failed: %s", err.message)
        print(json.dumps({"error": describe_error(err).to_dict()}, ensure_ascii=False))
        return 1

    print(json.dumps(response.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
