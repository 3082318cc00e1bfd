"""
Main entry point for the changelog check scheduler.

Usage:
    python scheduler_main.py           # Daemon mode, check on the configured cron
    python scheduler_main.py --test    # Check every 2 minutes
    python scheduler_main.py --once    # Single check, then exit
"""

import asyncio
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

import structlog
from utilities.logger import setup_logging
from utilities.config import config
from monitor.scheduler_service import SchedulerService
from monitor.models import SchedulerConfig
from storage.checkpoint_store import create_checkpoint_store


async def main():
    """Main function to start the scheduler service."""
    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.get_log_file_path(),
        debug=config.debug
    )

    logger = structlog.get_logger(__name__)
    logger.info("Starting changelog check scheduler")

    test_mode = False
    run_once = False

    if len(sys.argv) > 1:
        if sys.argv[1] == '--test':
            test_mode = True
            logger.info("Running in TEST MODE - Checks will run every 2 minutes")
        elif sys.argv[1] == '--once':
            run_once = True
            logger.info("Running in RUN ONCE MODE - Single execution")
        else:
            print(f"Unknown argument: {sys.argv[1]}")
            print("Usage: python scheduler_main.py [--test|--once]")
            sys.exit(1)
    else:
        logger.info("Running in DAEMON MODE", check_cron=config.check_cron, timezone=config.timezone)

    scheduler_config = SchedulerConfig(
        check_cron=config.check_cron,
        timezone=config.timezone
    )
    scheduler_service = SchedulerService(scheduler_config, create_checkpoint_store(config))

    try:
        await scheduler_service.start(test_mode=test_mode, run_once=run_once)
    except Exception as e:
        logger.error("Scheduler service failed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("Received keyboard interrupt, shutting down...")
