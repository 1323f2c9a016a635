"""Core logic for unic: collapse adjacent runs of equal lines."""

import sys
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from typing import BinaryIO, Optional, TextIO, Union

COUNT_WIDTH = 4
PROGRESS_INTERVAL = 1000  # Lines between progress callbacks

Line = Union[str, bytes]


def strip_terminator(line: Line) -> Line:
    """Remove a single trailing newline, leaving any other trailing whitespace.

    A carriage return before the newline is kept, so ``"a\\r\\n"`` and
    ``"a\\n"`` do not compare equal.

    Args:
        line: Raw line (str or bytes), with or without its terminator

    Returns:
        The line without its trailing ``\\n`` (same type as input)
    """
    terminator: Line = b"\n" if isinstance(line, bytes) else "\n"
    if line.endswith(terminator):  # type: ignore[arg-type]
        return line[:-1]
    return line


def render_run(line: Line, count: int, show_count: bool) -> Line:
    """Render one run for output.

    Args:
        line: Representative line of the run, terminator included
        count: Number of lines in the run
        show_count: Prefix the count, right-aligned in a field of at least 4

    Returns:
        Rendered line (same type as input)
    """
    if not show_count:
        return line
    prefix = f"{count:>{COUNT_WIDTH}} "
    if isinstance(line, bytes):
        return prefix.encode("ascii") + line
    return prefix + line


class RunCollapser:
    """
    Streaming run collapser.

    Holds at most one open run (its first raw line and a running count) and
    emits it exactly once, when a differing line arrives or input ends.
    """

    def __init__(self, show_count: bool = False):
        """
        Initialize the collapser.

        Args:
            show_count: If True, prefix each output line with its run length
                        (default: False)
        """
        self.show_count = show_count

        # Open run: representative line and count (count == 0 means no run open)
        self.pending_line: Line = ""
        self.pending_count = 0

        self.line_num_input = 0  # Lines read from input
        self.runs_emitted = 0  # Output lines written (one per run)

        # Output buffer for iterator API (holds at most one rendered run)
        self._output_buffer: deque[Line] = deque()

    def process_lines(
        self,
        lines: Iterable[Line],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> Iterator[Line]:
        """
        Process lines, yielding one rendered line per run.

        Args:
            lines: Iterable of raw lines (terminators included)
            progress_callback: Optional callback(line_num, runs_emitted)
                             called every 1000 lines

        Yields:
            Rendered runs (str or bytes matching input type)

        Example:
            >>> from unic import RunCollapser
            >>> collapser = RunCollapser(show_count=True)
            >>> list(collapser.process_lines(["a\\n", "a\\n", "b\\n"]))
            ['   2 a\\n', '   1 b\\n']
        """
        for line in lines:
            self._process_line_internal(line, progress_callback)
            while self._output_buffer:
                yield self._output_buffer.popleft()

        self.flush()
        while self._output_buffer:
            yield self._output_buffer.popleft()

    def process_line(
        self,
        line: Line,
        output: Union[TextIO, BinaryIO] = sys.stdout,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        """
        Process a single line, writing any completed run to a stream.

        Args:
            line: Raw line (terminator included, str or bytes)
            output: Output stream (default: stdout)
            progress_callback: Optional callback(line_num, runs_emitted)
                             called every 1000 lines
        """
        self._process_line_internal(line, progress_callback)
        self._drain(output)

    def flush_to_stream(self, output: Union[TextIO, BinaryIO] = sys.stdout) -> None:
        """
        Flush the open run to a stream. Call once after the last line.

        Args:
            output: Output stream (default: stdout)
        """
        self.flush()
        self._drain(output)

    def flush(self) -> None:
        """Close the open run, if any, and queue it for output."""
        if self.pending_count > 0:
            self._output_buffer.append(
                render_run(self.pending_line, self.pending_count, self.show_count)
            )
            self.runs_emitted += 1
            self.pending_count = 0

    def get_stats(self) -> dict[str, Union[int, float]]:
        """
        Get collapsing statistics.

        Returns:
            Dictionary with keys: total, emitted, collapsed, redundancy_pct
        """
        collapsed = self.line_num_input - self.runs_emitted - self.pending_count
        redundancy_pct = 100 * collapsed / self.line_num_input if self.line_num_input > 0 else 0.0
        return {
            "total": self.line_num_input,
            "emitted": self.runs_emitted,
            "collapsed": collapsed,
            "redundancy_pct": redundancy_pct,
        }

    def _process_line_internal(
        self,
        line: Line,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        self.line_num_input += 1

        # No open run: the line starts one even if it matches the stale pending line
        if self.pending_count == 0 or strip_terminator(line) != strip_terminator(
            self.pending_line
        ):
            self.flush()
            self.pending_line = line
        self.pending_count += 1

        if progress_callback and self.line_num_input % PROGRESS_INTERVAL == 0:
            progress_callback(self.line_num_input, self.runs_emitted)

    def _drain(self, output: Union[TextIO, BinaryIO]) -> None:
        while self._output_buffer:
            output.write(self._output_buffer.popleft())  # type: ignore[arg-type]
