"""Run a configured collapse pass from source to sink."""

from collections.abc import Callable
from typing import Optional

from .collapser import RunCollapser
from .config import UnicConfig
from .errors import StreamError
from .streams import open_sink, open_source


def run(
    config: UnicConfig,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    collapser: Optional[RunCollapser] = None,
) -> RunCollapser:
    """Collapse runs from the configured input into the configured output.

    The source is opened before the sink, so a missing input never creates
    or truncates the output file.

    Args:
        config: Input path, output path and count flag
        progress_callback: Optional callback(line_num, runs_emitted)
                         called every 1000 lines
        collapser: Collapser to use (default: a new one built from config).
                   Passing one lets the caller read partial statistics
                   after an interrupt

    Returns:
        The collapser used for the pass (for statistics)

    Raises:
        SourceOpenError: If the input cannot be opened
        SinkOpenError: If the output cannot be created
        StreamError: If reading or writing fails mid-stream
    """
    if collapser is None:
        collapser = RunCollapser(show_count=config.show_count)

    try:
        with open_source(config.in_file) as source, open_sink(config.out_file) as sink:
            try:
                for line in source:
                    collapser.process_line(line, sink, progress_callback=progress_callback)
            except KeyboardInterrupt:
                # Emit what we have before unwinding
                collapser.flush_to_stream(sink)
                raise
            collapser.flush_to_stream(sink)
    except OSError as e:
        raise StreamError.from_os_error(e, e.filename) from e

    return collapser
