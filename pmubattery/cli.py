#!/usr/bin/env python3
"""Command-line interface for the PMU battery collector."""

import sys
import json
import time
import signal
import logging
import argparse

from pmubattery.config import load_config, get, resolve_host, resolve_data_dir
from pmubattery.core.collector import BatteryCollector
from pmubattery.core.emitter import samples_for
from pmubattery.core.types import CollectorContext
from pmubattery.dispatch import SeriesDispatcher
from pmubattery.providers.pmu import PmuBatterySource
from pmubattery.stores import SERIES_DEFINITIONS, MemorySeriesStore, RrdSeriesStore

log = logging.getLogger(__name__)


def _create_context(config: dict) -> CollectorContext:
    return CollectorContext(
        slot_path=get(config, "pmu.slot_path"),
        host=resolve_host(config),
    )


def _create_dispatcher(config: dict, context: CollectorContext,
                       dry_run: bool = False) -> SeriesDispatcher:
    """Create a dispatcher with a store registered for every battery series."""
    dispatcher = SeriesDispatcher(context.host)
    backend = "memory" if dry_run else get(config, "storage.backend", "rrd")

    for series, definition in SERIES_DEFINITIONS.items():
        if backend == "memory":
            dispatcher.register(MemorySeriesStore(series, maxlen=1000))
        else:
            dispatcher.register(RrdSeriesStore(
                definition,
                data_dir=resolve_data_dir(config),
                rrdtool=get(config, "storage.rrdtool", "rrdtool"),
                step=int(get(config, "storage.step", 10)),
            ))
    return dispatcher


def _create_collector(context: CollectorContext,
                      dispatcher: SeriesDispatcher) -> BatteryCollector:
    return BatteryCollector(context, PmuBatterySource(context), dispatcher)


def _format_status(readings: dict, as_json: bool) -> str:
    if as_json:
        result = []
        for slot, reading in sorted(readings.items()):
            entry = {"slot": slot}
            for sample in samples_for(slot, reading):
                entry[sample.name.metric] = round(sample.value, 3)
            result.append(entry)
        return json.dumps(result)

    lines = []
    for slot, reading in sorted(readings.items()):
        samples = samples_for(slot, reading)
        if samples:
            values = ", ".join(f"{s.name.metric} {s.value:.3f}" for s in samples)
        else:
            values = "no data"
        lines.append(f"Battery {slot}: {values}")
    return "\n".join(lines)


def _run_daemon(collector: BatteryCollector, dispatcher: SeriesDispatcher,
                interval: int) -> int:
    from PyQt5.QtCore import QCoreApplication, QTimer
    from pmubattery.core.scheduler import CollectorService

    app = QCoreApplication(sys.argv[:1])
    service = CollectorService(collector, interval_ms=interval * 1000)
    service.slots_discovered.connect(
        lambda n: log.info("Collecting %d battery slot(s) every %ds", n, interval))
    service.cycle_finished.connect(
        lambda n: log.debug("Cycle finished, %d sample(s) submitted", n))

    signal.signal(signal.SIGINT, lambda *_: app.quit())
    signal.signal(signal.SIGTERM, lambda *_: app.quit())

    # Wake the event loop periodically so Python signal handlers run.
    wakeup = QTimer()
    wakeup.timeout.connect(lambda: None)
    wakeup.start(500)

    service.start()
    try:
        return app.exec_()
    finally:
        service.stop()
        dispatcher.close()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="PMU battery collector - current, voltage and charge per battery slot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  %(prog)s              Show one reading of every battery slot
  %(prog)s --json       Output as JSON
  %(prog)s --list       List discovered battery slots
  %(prog)s --watch      Continuously print readings
  %(prog)s --daemon     Poll and store readings in RRD files
""",
    )
    parser.add_argument("--list", "-l", action="store_true", help="List discovered battery slots")
    parser.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    parser.add_argument("--watch", "-w", action="store_true", help="Continuously print readings")
    parser.add_argument("--daemon", "-D", action="store_true", help="Poll and persist readings")
    parser.add_argument("--dry-run", "-n", action="store_true",
                        help="Keep samples in memory instead of writing RRD files")
    parser.add_argument("--config", "-c", type=str, default=None, help="Config file path")
    parser.add_argument(
        "--interval", "-i", type=int, default=None,
        help="Poll interval in seconds (default: from config, 10)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = load_config(args.config)
    if args.interval is not None:
        interval = args.interval
    else:
        interval = int(get(config, "polling.interval_seconds", 10))
    if interval <= 0:
        parser.error("--interval must be positive")

    context = _create_context(config)
    dispatcher = _create_dispatcher(config, context, dry_run=args.dry_run)
    collector = _create_collector(context, dispatcher)

    if args.daemon:
        return _run_daemon(collector, dispatcher, interval)

    count = collector.discover()

    if args.list:
        if not count:
            print("No PMU battery slots found.")
            print(f"\nLooked for: {get(config, 'pmu.slot_path')}")
            return 0
        print(f"Found {count} battery slot(s):\n")
        for index in range(count):
            print(f"  Battery {index}")
        return 0

    if not count:
        if args.json:
            print(json.dumps({"error": "No battery slots found"}))
        else:
            print("Error: No PMU battery slots found.")
        return 1

    if args.watch:
        print(f"Monitoring battery (every {interval}s, Ctrl+C to stop)...\n")
        try:
            while True:
                print(_format_status(collector.read_all(), args.json))
                print()
                time.sleep(interval)
        except KeyboardInterrupt:
            print("\nStopped.")
        return 0

    print(_format_status(collector.read_all(), args.json))
    return 0


if __name__ == "__main__":
    sys.exit(main())
