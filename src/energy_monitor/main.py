"""
Main entry point for the energy monitor.

Runs a usage query (or a polling loop) for a set of meters and logs the totals.
"""

import sys
from typing import Callable, Dict, List, Optional

from .core import Config, DateUtils, setup_logger, LoggerContext, constants
from .api import EmsQueryAPI
from .models import ResolutionTier, Snapshot, TagExtraction, Window
from .processing import DataProcessor
from .services import EnergyService, MeterPoller, report

DAILY_RANGE = "daily"


class EnergyMonitorApp:
    """Main application for meter usage reports."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
        """
        self.config = Config(config_file)

        self.logger = setup_logger()
        self.logger.info("=" * 60)
        self.logger.info("Energy Monitor")
        self.logger.info("=" * 60)
        self.logger.info(f"Configuration: {self.config}")

        # Initialize components (will be set in initialize_components)
        self.api_client: Optional[EmsQueryAPI] = None
        self.date_utils: Optional[DateUtils] = None
        self.service: Optional[EnergyService] = None

    def initialize_components(self) -> None:
        """Initialize all application components."""
        self.logger.info("Initializing components...")

        self.api_client = EmsQueryAPI(
            base_url=self.config.api_base_url,
            timeout=self.config.api_timeout,
            max_retries=self.config.api_max_retries,
            verify_ssl=self.config.api_verify_ssl,
            logger=self.logger
        )

        self.date_utils = DateUtils(self.config.timezone, self.logger)

        self.service = EnergyService(
            api_client=self.api_client,
            date_utils=self.date_utils,
            processor=DataProcessor(self.date_utils, self.logger),
            logger=self.logger
        )

        self.logger.info("All components initialized successfully")

    def resolve_window(
        self,
        range_name: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None
    ) -> Callable[[], Window]:
        """
        Build a window factory for the requested range.

        Presets are re-evaluated on every call so a long-running poll
        follows the clock; custom windows are fixed.
        """
        if self.date_utils is None:
            raise RuntimeError("Components not properly initialized")
        date_utils = self.date_utils

        if start or end:
            if not (start and end):
                raise ValueError("Custom range requires both --start and --end")
            window = date_utils.custom_window(start, end)
            return lambda: window

        name = range_name or constants.PRESET_YESTERDAY
        if name == DAILY_RANGE:
            return date_utils.daily_energy_window

        # Fail fast on unknown preset names
        date_utils.preset_window(name)
        return lambda: date_utils.preset_window(name)

    def run(
        self,
        tag_ids: Optional[List[int]] = None,
        range_name: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
        step: Optional[str] = None,
        poll_cycles: int = 0
    ) -> Dict[int, TagExtraction]:
        """
        Run a usage report.

        Args:
            tag_ids: Meter ids (defaults to configured tags)
            range_name: Preset name or 'daily'
            start: Custom window start
            end: Custom window end
            step: Resolution override
            poll_cycles: If positive, poll this many times instead of a single query

        Returns:
            Extractions of the last successful cycle
        """
        try:
            self.initialize_components()

            if not self.service or not self.date_utils:
                raise RuntimeError("Components not properly initialized")

            tags = tag_ids or self.config.meter_tags
            if not tags:
                raise ValueError("No meter tags given (use --tags or meters.tags)")

            window_factory = self.resolve_window(range_name, start, end)
            if range_name == DAILY_RANGE and step is None:
                step = ResolutionTier.DAY.time_step

            if poll_cycles > 0:
                return self._poll(tags, window_factory, step, poll_cycles)

            window = window_factory()
            self.logger.info(
                f"Usage for tags {tags}: {self.date_utils.format_range_summary(window)}"
            )
            with LoggerContext(self.logger, "usage query"):
                snapshot = self.service.snapshot(tags, window, step=step, sequence=1)

            self._log_snapshot(snapshot)
            if not snapshot.ok:
                raise RuntimeError(f"Usage query failed: {snapshot.error}")
            return dict(snapshot.extractions)

        except Exception as e:
            self.logger.error(f"Application error: {e}", exc_info=True)
            raise

        finally:
            if self.api_client:
                self.api_client.close()

    def _poll(
        self,
        tags: List[int],
        window_factory: Callable[[], Window],
        step: Optional[str],
        cycles: int
    ) -> Dict[int, TagExtraction]:
        latest: Dict[int, TagExtraction] = {}

        def publish(snapshot: Snapshot) -> None:
            self._log_snapshot(snapshot)
            if snapshot.ok:
                latest.clear()
                latest.update(snapshot.extractions)

        poller = MeterPoller(
            service=self.service,
            tag_ids=tags,
            window_factory=window_factory,
            on_snapshot=publish,
            interval=self.config.poll_interval,
            step=step,
            max_cycles=cycles,
            logger=self.logger
        )
        poller.start()
        try:
            poller.join()
        except KeyboardInterrupt:
            self.logger.info("Interrupted, stopping poller")
            poller.stop()

        return latest

    def _log_snapshot(self, snapshot: Snapshot) -> None:
        for line in report.render_snapshot(snapshot):
            if snapshot.ok:
                self.logger.info(line)
            else:
                self.logger.error(line)


def _parse_tags(value: Optional[str]) -> Optional[List[int]]:
    if not value:
        return None
    return [int(tag.strip()) for tag in value.split(",") if tag.strip()]


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Energy Monitor - cumulative meter usage"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--tags",
        type=str,
        default=None,
        help="Comma separated meter tag ids. Default: meters.tags from config"
    )
    parser.add_argument(
        "--range",
        dest="range_name",
        choices=list(constants.PRESETS) + [DAILY_RANGE],
        default=None,
        help="Range preset. Default: yesterday"
    )
    parser.add_argument("--start", type=str, default=None, help="Custom start (YYYY-MM-DDTHH:MM)")
    parser.add_argument("--end", type=str, default=None, help="Custom end (YYYY-MM-DDTHH:MM)")
    parser.add_argument(
        "--step",
        type=str,
        default=None,
        help="Resolution: auto, 60,1, 900,1, 3600,1 or 86400,1. Default: auto"
    )
    parser.add_argument(
        "--poll",
        type=int,
        default=0,
        help="Number of polling cycles (0 runs a single query)"
    )

    args = parser.parse_args()

    try:
        tags = _parse_tags(args.tags)
    except ValueError:
        print(f"Invalid tag list: {args.tags}")
        sys.exit(1)

    try:
        app = EnergyMonitorApp(config_file=args.config)
        app.run(
            tag_ids=tags,
            range_name=args.range_name,
            start=args.start,
            end=args.end,
            step=args.step,
            poll_cycles=args.poll
        )
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
