"""Convert a binary navigation capture into comma-separated text."""

from __future__ import annotations

import argparse
import contextlib
import functools
import sys

import structlog
from pydantic import ValidationError

from tools.decoders import DecoderCreationError, available_decoders, create_decoder
from tools.recorder import TextSink
from tools.translators.ncom_to_text import format_update

from .config import get_settings
from .demux import Sinks
from .logging_config import configure_logging
from .metrics import ProgressReporter
from .pipeline import iter_bytes, run
from .timebase import resolve_timezone

log = structlog.get_logger("ncom2text.main")

BANNER = "ncom2text: Converts NCom capture data to text."


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ncom2text",
        description="Convert a binary navigation capture into CSV-style text records.",
    )
    parser.add_argument("input", help="Binary capture to read.")
    parser.add_argument("output", help="Text file for regular updates.")
    parser.add_argument(
        "trigger",
        nargs="?",
        default=None,
        help="Optional text file for falling-edge trigger updates.",
    )
    parser.add_argument(
        "--timezone",
        default=None,
        help="Calendar policy: 'utc', 'local' or an IANA zone name (default: settings).",
    )
    parser.add_argument(
        "--decoder",
        default=None,
        help=f"Decoder to use; one of {', '.join(available_decoders())} (default: settings).",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: settings).")
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Emit JSON log lines on stderr.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    print(BANNER)
    args = parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as exc:
        configure_logging(log_level=args.log_level or "INFO", json_logs=args.json_logs)
        log.error("invalid settings", error_count=exc.error_count(), errors=str(exc))
        return 1
    configure_logging(
        log_level=args.log_level or settings.log_level,
        json_logs=args.json_logs if args.json_logs is not None else settings.json_logs,
    )

    tz_name = args.timezone or settings.timezone
    try:
        tz = resolve_timezone(tz_name)
    except ValueError as exc:
        log.error("invalid timezone", timezone=tz_name, error=str(exc))
        return 1

    format_line = functools.partial(format_update, tz=tz, epoch_delta=settings.epoch_delta)
    reporter = ProgressReporter(sys.stdout, interval=settings.progress_interval)

    with contextlib.ExitStack() as stack:
        try:
            source = stack.enter_context(open(args.input, "rb"))
        except OSError as exc:
            log.error("could not open input file", path=args.input, error=str(exc))
            return 1

        try:
            primary = stack.enter_context(TextSink.open(args.output, name="primary"))
        except OSError as exc:
            log.error("could not open output file", path=args.output, error=str(exc))
            return 1

        trigger = None
        if args.trigger is not None:
            try:
                trigger = stack.enter_context(TextSink.open(args.trigger, name="trigger"))
            except OSError as exc:
                log.error("could not open output trigger file", path=args.trigger, error=str(exc))
                return 1

        decoder_name = args.decoder or settings.decoder
        try:
            session = create_decoder(decoder_name)
        except DecoderCreationError as exc:
            log.error("unable to create decoder", decoder=decoder_name, error=str(exc))
            return 1
        stack.callback(session.close)

        try:
            run(
                iter_bytes(source, settings.read_chunk_size),
                session,
                Sinks(primary=primary, trigger=trigger),
                reporter=reporter,
                format_line=format_line,
            )
        except OSError as exc:
            log.error("conversion aborted by I/O error", path=args.input, error=str(exc))
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
