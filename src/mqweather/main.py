"""Main entry point for publishing weather conditions over MQTT."""

import argparse
import asyncio
import logging
import signal
import sys
from typing import NoReturn

from pydantic import ValidationError

from . import __version__
from .config import MQTTConfig, Settings, WundergroundConfig
from .errors import ConfigurationError
from .producers import WeatherProducer

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGTERM, signal.SIGINT)


def setup_logging(level: str = "INFO", debug: bool = False, verbose: bool = False) -> None:
    """Configure logging for the application.

    Args:
        level: Base logging level name.
        debug: Force DEBUG level.
        verbose: Force at least INFO level.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if debug:
        log_level = logging.DEBUG
    elif verbose:
        log_level = min(log_level, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def handle_shutdown(signum: int, shutdown_event: asyncio.Event) -> None:
    """Handle shutdown signals gracefully."""
    sig_name = signal.Signals(signum).name
    logger.info("Received %s, initiating shutdown...", sig_name)
    shutdown_event.set()


async def run_producer(
    producer: WeatherProducer,
    shutdown_event: asyncio.Event,
    run_once: bool = False,
) -> None:
    """Run the producer until shutdown.

    Each cycle is followed by a wait of the producer's interval, so the
    cadence is measured from the end of one cycle to the start of the next.

    Args:
        producer: The producer to run.
        shutdown_event: Event to signal shutdown.
        run_once: If True, run once and exit instead of polling.
    """
    if run_once:
        logger.info("Running weather cycle once for %s", producer.station)
        await producer.run_once()
        return

    logger.info(
        "Publishing weather for %s every %d seconds",
        producer.station,
        producer.interval_seconds,
    )
    while not shutdown_event.is_set():
        try:
            await producer.run_once()
        except Exception as e:
            logger.error("Error in weather cycle for %s: %s", producer.station, e, exc_info=True)

        # Wait for next interval or shutdown
        try:
            await asyncio.wait_for(
                shutdown_event.wait(),
                timeout=producer.interval_seconds,
            )
            # If we get here, shutdown was signaled
            break
        except asyncio.TimeoutError:
            # Timeout means it's time for next run
            continue


async def stop_task(task: asyncio.Task, timeout: float) -> None:
    """Give a task time to finish on its own, then cancel it.

    Args:
        task: Task to stop.
        timeout: Seconds to wait before cancelling.
    """
    done, _ = await asyncio.wait({task}, timeout=timeout)
    if task in done:
        if not task.cancelled() and task.exception() is not None:
            logger.error("Producer stopped with error: %s", task.exception())
        return

    logger.warning("Weather cycle still running after %.1f seconds, cancelling", timeout)
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass


async def run_service(
    settings: Settings,
    producer: WeatherProducer | None = None,
    run_once: bool = False,
) -> None:
    """Connect to the broker, run the publish loop and shut down on signal.

    Args:
        settings: Application settings.
        producer: Optional pre-built producer for testing.
        run_once: If True, run a single cycle and exit.
    """
    if producer is None:
        producer = WeatherProducer(
            wunderground_config=settings.wunderground,
            mqtt_config=settings.mqtt,
            debug=settings.debug,
        )

    shutdown_event = asyncio.Event()

    # Set up signal handlers
    loop = asyncio.get_running_loop()
    for sig in SHUTDOWN_SIGNALS:
        loop.add_signal_handler(sig, handle_shutdown, sig, shutdown_event)

    try:
        if not await producer.connect():
            logger.warning("Starting without a broker connection, will keep retrying")

        task = asyncio.create_task(
            run_producer(producer, shutdown_event, run_once),
            name="weather",
        )
        waiter = asyncio.create_task(shutdown_event.wait(), name="shutdown")

        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        shutdown_event.set()
        await stop_task(task, settings.shutdown_timeout_seconds)
        await waiter
    finally:
        for sig in SHUTDOWN_SIGNALS:
            loop.remove_signal_handler(sig)
        logger.info("Shutting down weather producer for %s", producer.station)
        await producer.close()

    logger.info("Weather producer stopped")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="mqweather",
        description="Publish weather via MQTT using the Weather Underground API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Publish conditions for a station every minute
  mqweather --api-key KEY --station KCASANFR70

  # Publish to a remote broker every five minutes
  mqweather --host broker.local --port 1883 --interval 300

  # Run one cycle and exit (useful for testing or cron)
  mqweather --once -v

Environment Variables:
  MQTT_HOST                           MQTT broker host (default: localhost)
  MQTT_PORT                           MQTT broker port (default: 1883)
  MQTT_TOPIC_PREFIX                   First topic segment (default: mqweather)
  MQTT_DISCONNECT_GRACE_MS            Flush time on shutdown (default: 250)
  WUNDERGROUND_API_KEY                Weather Underground API key
  WUNDERGROUND_STATION                Weather Underground station id
  WUNDERGROUND_FETCH_INTERVAL_SECONDS Seconds between cycles (default: 60)
        """,
    )

    parser.add_argument("-d", "--debug", action="store_true", help="Print debug output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print verbose output")
    parser.add_argument("--host", help="MQTT host")
    parser.add_argument("--port", type=int, help="MQTT port")
    parser.add_argument("--api-key", help="Weather Underground API key")
    parser.add_argument("--station", help="Weather Underground station id")
    parser.add_argument("--interval", type=int, help="Interval in seconds")

    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single cycle and exit",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(argv)


def _overrides(**values: object) -> dict[str, object]:
    """Drop options that were not given on the command line."""
    return {key: value for key, value in values.items() if value is not None}


def build_settings(args: argparse.Namespace) -> Settings:
    """Load settings from the environment with command line overrides.

    Raises:
        ValidationError: If a value is out of range.
    """
    mqtt = MQTTConfig(**_overrides(host=args.host, port=args.port))
    wunderground = WundergroundConfig(
        **_overrides(
            api_key=args.api_key,
            station=args.station,
            fetch_interval_seconds=args.interval,
        )
    )
    app = _overrides(log_level=args.log_level)
    if args.debug:
        app["debug"] = True
    if args.verbose:
        app["verbose"] = True
    return Settings(mqtt=mqtt, wunderground=wunderground, **app)


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    args = parse_args(argv)

    try:
        settings = build_settings(args)
    except ValidationError as e:
        setup_logging(debug=args.debug, verbose=args.verbose)
        logger.critical("Invalid configuration: %s", e)
        sys.exit(1)

    # Set up logging
    setup_logging(settings.log_level, debug=settings.debug, verbose=settings.verbose)

    try:
        producer = WeatherProducer(
            wunderground_config=settings.wunderground,
            mqtt_config=settings.mqtt,
            debug=settings.debug,
        )
    except ConfigurationError as e:
        logger.critical("Invalid configuration: %s", e)
        sys.exit(1)

    logger.info("mqweather %s starting", __version__)
    logger.info("MQTT broker: %s:%d", settings.mqtt.host, settings.mqtt.port)

    # Run the async main function
    try:
        asyncio.run(run_service(settings, producer=producer, run_once=args.once))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")

    logger.info("Shutdown complete")
    sys.exit(0)


if __name__ == "__main__":
    main()
