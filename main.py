import asyncio
import argparse
import logging
import sys
from core.engine import Engine
from fetch.http_client import open_client
from rules.rules_loader import RuleCatalogError

logger = logging.getLogger(__name__)


async def run(engine: Engine, url: str) -> None:
    async with open_client() as client:
        report = await engine.run(client, url)

    if report is None:
        return

    logger.info(f"Detected technologies for {url}:")
    for line in report:
        print(line)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Detect the technologies behind a web endpoint")
    parser.add_argument("url", help="Target URL (e.g., https://example.com)")
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=logging.INFO,
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        engine = Engine()
    except RuleCatalogError as e:
        logger.error(f"Failed to load technology catalog: {e}")
        sys.exit(1)

    logger.info(f"Starting scan of {args.url}")
    asyncio.run(run(engine, args.url))


if __name__ == "__main__":
    main()
