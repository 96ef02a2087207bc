# SPDX-License-Identifier: MIT
"""Batch linting entry point — reads certificate records, lints them on worker threads, writes JSON.

Usage:
    python -m certlint --input-file certs.jsonl --output-file results.jsonl

Input is JSON lines, one record per certificate::

    {"raw": "<base64 DER>", "validation": {"nss": {"valid": true, "was_valid": true}}}

Environment variables:
    CERTLINT_PROFILE    — selection profile (all, baseline, rfc, community)
    CERTLINT_INCLUDE    — comma-separated allow-list of lint names
    CERTLINT_EXCLUDE    — comma-separated deny-list of lint names
    CERTLINT_SOURCES    — comma-separated source families (overrides the profile)
    CERTLINT_LOG_LEVEL  — logging level (default: INFO)
"""

from __future__ import annotations

import argparse
import base64
import contextlib
import json
import logging
import os
import queue
import sys
import threading
import warnings
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import IO, Any

from pydantic import BaseModel, ConfigDict, ValidationError

from certlint.certificate import Certificate
from certlint.errors import CertificateParseError, LintConfigWarning
from certlint.lints.config import PROFILES, load_config, parse_severity
from certlint.lints.engine import LintEngine, Selection, check_gate
from certlint.lints.registry import default_registry
from certlint.lints.result import LintStatus, ResultSet

log = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 1000

# --- Validation annotation (optional side payload per input record) ---


class NssValidation(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    valid: bool
    was_valid: bool


class ValidationAnnotation(BaseModel):
    """Typed view of the external validation payload attached to an input record."""

    model_config = ConfigDict(extra="ignore")

    nss: NssValidation | None = None


def parse_validation(payload: Any) -> ValidationAnnotation | None:
    """Return the typed annotation, or None when absent or not the expected shape."""
    if payload is None:
        return None
    try:
        return ValidationAnnotation.model_validate(payload)
    except ValidationError:
        return None


# --- Output records ---


class CertificateRecord(BaseModel):
    """One output line: raw DER, parsed view, lint statuses, and the passed-through validation."""

    raw: str
    parsed: dict[str, Any] | None = None
    lint: dict[str, str] | None = None
    validation: Any = None

    def to_json_line(self) -> str:
        return self.model_dump_json(exclude_none=True)


def _dn_field(text: str) -> str:
    return text.replace(",", ":")


def format_process_line(
    cert: Certificate,
    result_set: ResultSet,
    annotation: ValidationAnnotation | None,
) -> str:
    """Build the per-certificate summary line for --output-process.

    Records without a usable NSS validation annotation produce an empty line.
    """
    if annotation is None or annotation.nss is None:
        return "\n"
    parsed = cert.to_dict()
    fields = [
        str(len(result_set.errors)),
        str(len(result_set.warnings)),
        str(annotation.nss.valid).lower(),
        str(annotation.nss.was_valid).lower(),
        parsed["not_before"],
        parsed["not_after"],
        _dn_field(parsed["issuer"]),
        _dn_field(parsed["subject"]),
        parsed["fingerprint_sha256"],
        str(len(result_set.fatals)),
        ",".join(result_set.errors),
        ",".join(result_set.warnings),
    ]
    return ",".join(fields) + "\n"


# --- Pipeline ---


@dataclass
class BatchStats:
    read: int = 0
    linted: int = 0
    skipped: int = 0
    gated: int = 0


_DONE = object()


class BatchRunner:
    """Fans certificate records out to worker threads and serializes their output."""

    def __init__(
        self,
        engine: LintEngine,
        out: IO[str],
        *,
        selection: Selection | None = None,
        process_out: IO[str] | None = None,
        fatal_parse_errors: bool = False,
        fail_on: LintStatus | None = None,
    ) -> None:
        self._engine = engine
        self._selection = selection if selection is not None else engine.select()
        self._out = out
        self._process_out = process_out
        self._fatal_parse_errors = fatal_parse_errors
        self._fail_on = fail_on
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._abort_error: CertificateParseError | None = None
        self.stats = BatchStats()

    def process(self, item: Any) -> None:
        """Lint one decoded input record and write its output lines."""
        if not isinstance(item, dict) or not isinstance(item.get("raw"), str):
            msg = "input record has no base64 'raw' field"
            raise CertificateParseError(msg)
        cert = Certificate.from_base64(item["raw"])
        result_set = self._engine.run(cert, self._selection)

        validation = item.get("validation")
        record = CertificateRecord(
            raw=base64.b64encode(cert.raw).decode("ascii"),
            parsed=cert.to_dict(),
            lint=result_set.to_dict(),
            validation=validation,
        )
        line = record.to_json_line()
        process_line = format_process_line(cert, result_set, parse_validation(validation))
        gated = self._fail_on is not None and check_gate(result_set, self._fail_on)

        with self._lock:
            self._out.write(line + "\n")
            if self._process_out is not None:
                self._process_out.write(process_line)
            self.stats.linted += 1
            if gated:
                self.stats.gated += 1

    def _handle(self, item: Any) -> None:
        try:
            self.process(item)
        except CertificateParseError as exc:
            if self._fatal_parse_errors:
                log.error("could not parse certificate with error: %s", exc)
                with self._lock:
                    if self._abort_error is None:
                        self._abort_error = exc
                self._stop.set()
                return
            log.info("could not parse certificate with error: %s", exc)
            with self._lock:
                self.stats.skipped += 1
        except Exception:
            log.exception("unexpected failure while linting certificate; skipping")
            with self._lock:
                self.stats.skipped += 1

    def _worker(self, work: queue.Queue[Any]) -> None:
        while True:
            item = work.get()
            try:
                if item is _DONE:
                    return
                if not self._stop.is_set():
                    self._handle(item)
            finally:
                work.task_done()

    def run(
        self,
        lines: Iterable[str],
        *,
        threads: int = 1,
        queue_size: int = DEFAULT_QUEUE_SIZE,
    ) -> BatchStats:
        """Lint every record in *lines* using *threads* workers.

        Raises:
            CertificateParseError: If fatal_parse_errors is set and a record
                could not be decoded or parsed.
        """
        threads = max(1, threads)
        work: queue.Queue[Any] = queue.Queue(maxsize=max(1, queue_size))
        workers = [
            threading.Thread(
                target=self._worker,
                args=(work,),
                name=f"certlint-worker-{i}",
                daemon=True,
            )
            for i in range(threads)
        ]
        log.info("Processing certificates with %d worker thread(s)...", threads)
        for worker in workers:
            worker.start()

        try:
            for line in lines:
                if self._stop.is_set():
                    break
                if not line.strip():
                    continue
                self.stats.read += 1
                try:
                    item = json.loads(line)
                except json.JSONDecodeError as exc:
                    if self._fatal_parse_errors:
                        log.error("could not decode input line %d: %s", self.stats.read, exc)
                        msg = f"input line {self.stats.read} is not valid JSON: {exc}"
                        with self._lock:
                            if self._abort_error is None:
                                self._abort_error = CertificateParseError(msg)
                                self._abort_error.__cause__ = exc
                        self._stop.set()
                        break
                    log.warning("skipping malformed input line %d: %s", self.stats.read, exc)
                    with self._lock:
                        self.stats.skipped += 1
                    continue
                work.put(item)
        finally:
            for _ in workers:
                work.put(_DONE)
            for worker in workers:
                worker.join()

        if self._abort_error is not None:
            raise self._abort_error
        return self.stats


# --- CLI ---


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="certlint",
        description="Lint X.509 certificates against RFC 5280 and CA/B Forum requirements",
    )
    parser.add_argument("--input-file", default="", help="JSON-lines file of certificate records")
    parser.add_argument("--output-file", default="-", help="File path for the output JSON")
    parser.add_argument(
        "--output-process",
        default=None,
        help="File path for per-certificate summary lines (omit to skip)",
    )
    parser.add_argument(
        "--list-lints-json",
        action="store_true",
        help="Print supported lints in JSON format, one per line",
    )
    parser.add_argument("--cert-threads", type=int, default=1, help="Number of worker threads")
    parser.add_argument(
        "--channel-size",
        type=int,
        default=DEFAULT_QUEUE_SIZE,
        help="Maximum number of records buffered between reader and workers",
    )
    parser.add_argument(
        "--fatal-parse-errors",
        action="store_true",
        help="Stop if a certificate cannot be parsed (logged and skipped by default)",
    )
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        default=None,
        help="Selection profile (overrides CERTLINT_PROFILE env var)",
    )
    parser.add_argument("--include", default=None, help="Comma-separated lint names to run")
    parser.add_argument("--exclude", default=None, help="Comma-separated lint names to skip")
    parser.add_argument("--sources", default=None, help="Comma-separated source families")
    parser.add_argument(
        "--fail-on",
        default=None,
        help="Exit 1 if any certificate has a verdict at or above this (pass/info/warn/error/fatal)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")
    return parser


def _open_output(path: str, stack: contextlib.ExitStack) -> IO[str]:
    if path == "-":
        return sys.stdout
    return stack.enter_context(open(path, "w", encoding="utf-8"))


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    level = (args.log_level or os.environ.get("CERTLINT_LOG_LEVEL") or "INFO").upper()
    level_known = level in logging.getLevelNamesMapping()
    logging.basicConfig(
        level=level if level_known else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if not level_known:
        log.error("Unknown log level: %r", level)
        return 1

    # Registry is built once, before any worker starts.
    registry = default_registry()
    if args.list_lints_json:
        sys.stdout.write(registry.to_json_lines())
        return 0

    try:
        config = load_config(
            profile=args.profile,
            include=args.include,
            exclude=args.exclude,
            sources=args.sources,
        )
        fail_on = parse_severity(args.fail_on) if args.fail_on else None
    except ValueError as exc:
        log.error("Invalid configuration: %s", exc)
        return 1

    if not args.input_file:
        log.error("--input-file is required")
        return 1

    engine = LintEngine(registry)
    with warnings.catch_warnings():
        # Unknown names are already logged by select().
        warnings.simplefilter("ignore", LintConfigWarning)
        selection = engine.select(config)
    log.info("Running %d of %d lints", len(selection.entries), len(registry))

    with contextlib.ExitStack() as stack:
        try:
            if args.input_file == "-":
                source: IO[str] = sys.stdin
            else:
                source = stack.enter_context(open(args.input_file, encoding="utf-8"))
            out = _open_output(args.output_file, stack)
            process_out = (
                _open_output(args.output_process, stack) if args.output_process else None
            )
        except OSError as exc:
            log.error("Could not open file: %s", exc)
            return 1

        runner = BatchRunner(
            engine,
            out,
            selection=selection,
            process_out=process_out,
            fatal_parse_errors=args.fatal_parse_errors,
            fail_on=fail_on,
        )
        try:
            stats = runner.run(source, threads=args.cert_threads, queue_size=args.channel_size)
        except CertificateParseError:
            return 1

    log.info(
        "Linted %d certificate(s): %d read, %d skipped, %d at or above fail-on",
        stats.linted,
        stats.read,
        stats.skipped,
        stats.gated,
    )
    if fail_on is not None and stats.gated:
        return 1
    return 0
