"""
Main entry point for the Changelog Monitor.
Runs a single changelog check and reports the outcome.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from monitor.checker import run_check
from storage.checkpoint_store import create_checkpoint_store
from utilities.config import load_config
from utilities.logger import setup_logging, get_logger


async def main():
    """Main function to run one changelog check."""
    config = load_config()

    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.get_log_file_path(),
        debug=config.debug
    )

    logger = get_logger(__name__)
    logger.info("Starting changelog check", changelog_url=config.changelog_url)

    store = create_checkpoint_store(config)

    try:
        await store.connect()
        result = await run_check(store, config)

        if result.success:
            logger.info(
                "Changelog check completed",
                outcome=result.outcome.value,
                latest_version=result.latest_version,
                notified_versions=result.notified_versions,
                duration_seconds=result.duration_seconds
            )
        else:
            logger.error(
                "Changelog check completed with errors",
                outcome=result.outcome.value,
                latest_version=result.latest_version,
                duration_seconds=result.duration_seconds
            )

    except Exception as e:
        logger.error("Fatal error occurred", error=str(e))
        sys.exit(1)

    finally:
        await store.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
