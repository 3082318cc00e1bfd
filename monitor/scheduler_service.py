"""
Scheduler service for periodic changelog checks.

This module provides:
- Interval scheduling with APScheduler
- Run-once and test modes
- Job event logging and graceful shutdown
"""

import asyncio
import signal
from datetime import datetime
from typing import Dict

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.events import EVENT_JOB_EXECUTED, EVENT_JOB_ERROR

from monitor.checker import run_check
from monitor.models import SchedulerConfig
from storage.checkpoint_store import CheckpointStore

logger = structlog.get_logger(__name__)

CHECK_JOB_ID = 'changelog_check'


class SchedulerService:
    """Scheduler service running changelog checks."""

    def __init__(self, config: SchedulerConfig, store: CheckpointStore):
        """
        Initialize scheduler service.

        Args:
            config: Scheduler configuration
            store: Checkpoint store used by every check
        """
        self.config = config
        self.store = store
        self.scheduler = AsyncIOScheduler(timezone=config.timezone)
        self.logger = logger.bind(component="scheduler_service")
        self._stop_event = asyncio.Event()

        self._setup_scheduler_listeners()

    def _setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown."""
        def signal_handler(signum, frame):
            self.logger.info("Received signal, shutting down gracefully", signal=signum)
            self._stop_event.set()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def _setup_scheduler_listeners(self) -> None:
        """Setup scheduler event listeners."""
        def job_executed_listener(event):
            retval = event.retval or {}
            self.logger.info(
                "Job executed successfully",
                job_id=event.job_id,
                outcome=retval.get('outcome'),
                duration=retval.get('duration', 0)
            )

        def job_error_listener(event):
            self.logger.error(
                "Job execution failed",
                job_id=event.job_id,
                error=str(event.exception)
            )

        self.scheduler.add_listener(job_executed_listener, EVENT_JOB_EXECUTED)
        self.scheduler.add_listener(job_error_listener, EVENT_JOB_ERROR)

    async def start(self, test_mode: bool = False, run_once: bool = False) -> None:
        """Start the scheduler service."""
        if run_once:
            self.logger.info("Starting scheduler service in RUN ONCE MODE")
        elif test_mode:
            self.logger.info("Starting scheduler service in TEST MODE")
        else:
            self.logger.info("Starting scheduler service")

        await self.store.connect()

        try:
            if run_once:
                await self._check_job()
                self.logger.info("Run once mode completed. Exiting...")
                return

            self._setup_signal_handlers()
            self.add_check_job(test_mode=test_mode)
            self.scheduler.start()

            self.logger.info(
                "Scheduler service started",
                timezone=self.config.timezone,
                check_cron=self.config.check_cron,
                test_mode=test_mode
            )

            await self._stop_event.wait()
        finally:
            self.stop()
            await self.store.disconnect()

    def add_check_job(self, test_mode: bool = False) -> None:
        """Register the changelog check job."""
        if test_mode:
            self.scheduler.add_job(
                func=self._check_job,
                trigger='interval',
                minutes=self.config.test_interval_minutes,
                id=CHECK_JOB_ID,
                name=f'Test Changelog Check ({self.config.test_interval_minutes}min)',
                max_instances=1,
                coalesce=True,
                replace_existing=True
            )
            self.logger.info(
                "Added test changelog check job",
                interval_minutes=self.config.test_interval_minutes
            )
            return

        self.scheduler.add_job(
            func=self._check_job,
            trigger=CronTrigger.from_crontab(self.config.check_cron, timezone=self.config.timezone),
            id=CHECK_JOB_ID,
            name='Changelog Check',
            max_instances=1,
            coalesce=True,
            replace_existing=True
        )
        self.logger.info(
            "Added changelog check job",
            check_cron=self.config.check_cron,
            timezone=self.config.timezone
        )

    def stop(self) -> None:
        """Stop the scheduler service."""
        self.logger.info("Stopping scheduler service")

        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)

        self.logger.info("Scheduler service stopped")

    async def _check_job(self) -> Dict:
        """Scheduled changelog check job."""
        start_time = datetime.utcnow()
        job_id = f"changelog_check_{start_time.strftime('%Y%m%d_%H%M%S')}"

        self.logger.info("Scheduled trigger fired", job_id=job_id, cron=self.config.check_cron)

        result = await run_check(self.store)

        summary = {
            'job_id': job_id,
            'success': result.success,
            'outcome': result.outcome.value,
            'latest_version': result.latest_version,
            'notified_versions': result.notified_versions,
            'checkpoint_updated': result.checkpoint_updated,
            'duration': (datetime.utcnow() - start_time).total_seconds()
        }

        self.logger.info("Changelog check job completed", **summary)
        return summary

    async def get_scheduler_status(self) -> Dict:
        """Get current scheduler status."""
        jobs = []
        for job in self.scheduler.get_jobs():
            next_run_time = getattr(job, 'next_run_time', None)
            jobs.append({
                'id': job.id,
                'name': job.name,
                'next_run_time': next_run_time.isoformat() if next_run_time else None,
                'trigger': str(job.trigger)
            })

        return {
            'running': self.scheduler.running,
            'timezone': self.config.timezone,
            'jobs': jobs,
            'job_count': len(jobs)
        }
