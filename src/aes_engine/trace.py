"""
Trace recording and pretty printing for AES operations.

Contains:
- TraceRecorder: per-operation state records, JSON Lines file output and
  compact verbose stdout
- print_header / print_result: shared formatting helpers for the CLI
"""

import json
from typing import Any, TextIO

from .utils import format_state_words


class TraceRecorder:
    """
    Records the state after every round transformation.

    Supports:
    - In-memory records   (when keep; default when nothing is streamed)
    - JSON Lines file      (when trace_file is set)
    - Compact stdout lines (when verbose)
    """

    def __init__(
        self,
        verbose: bool = False,
        trace_file: TextIO | None = None,
        keep: bool | None = None,
    ):
        """
        Args:
            verbose: Print one line per operation to stdout
            trace_file: Stream records as JSON Lines to this file
            keep: Retain records in memory for get_records(). Defaults to
                True only when nothing is being streamed.
        """
        self.verbose = verbose
        self.trace_file = trace_file
        if keep is None:
            keep = trace_file is None and not verbose
        self.keep = keep
        self._records: list[dict[str, Any]] = []
        self._block = 0

    def start_block(self, index: int) -> None:
        """Mark the start of a new block; later records carry its index."""
        self._block = index

    def record(self, **kwargs) -> None:
        """
        Record a trace entry.

        Expected keys are direction, round, operation and state, but any
        JSON-serializable keyword is stored as-is.
        """
        kwargs.setdefault("block", self._block)
        if self.keep:
            self._records.append(kwargs)

        if self.trace_file:
            self._write_jsonl(kwargs)

        if self.verbose:
            self._print_verbose(kwargs)

    def _write_jsonl(self, record: dict[str, Any]) -> None:
        serializable = self._make_serializable(record)
        self.trace_file.write(json.dumps(serializable) + "\n")
        self.trace_file.flush()

    def _make_serializable(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._make_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._make_serializable(item) for item in obj]
        elif isinstance(obj, bytes):
            return obj.hex()
        else:
            return obj

    def _print_verbose(self, record: dict[str, Any]) -> None:
        """One line per operation: block, direction, round, state words."""
        block = record.get("block", 0)
        direction = record.get("direction", "?")
        round_num = record.get("round", "?")
        operation = record.get("operation", "unknown")

        if "state" in record:
            words = format_state_words(record["state"])
            print(f"B{block:04d} {direction[:3].upper()} R{round_num:<2} "
                  f"{operation:16s} STATE:{words}")

    def get_records(self) -> list[dict[str, Any]]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()
        self._block = 0


# ------------------------------------------------------------------
# Shared formatting functions
# ------------------------------------------------------------------

def print_header(title: str) -> None:
    """Print a section header."""
    print(f"\n{'#'*70}")
    print(f"# {title}")
    print(f"{'#'*70}")


def print_result(label: str, data_hex: str, blocks: int,
                 passed: bool | None = None) -> None:
    """Print an encryption/decryption result, with optional cross-check status."""
    print(f"\n{'='*70}")
    print("RESULT")
    print(f"{'='*70}")
    print(f"{label}: {data_hex}")
    print(f"Blocks: {blocks}")

    if passed is not None:
        status = "PASS" if passed else "FAIL"
        marker = "[OK]" if passed else "[ERROR]"
        print(f"Verification: {marker} {status}")
    print(f"{'='*70}")
