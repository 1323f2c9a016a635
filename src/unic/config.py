"""Configuration record for a unic run."""

from dataclasses import dataclass
from typing import Optional

STDIN_PATH = "-"


@dataclass
class UnicConfig:
    """Where to read, where to write, and whether to prefix counts.

    ``in_file`` of ``"-"`` reads standard input; ``out_file`` of ``None``
    writes standard output.
    """

    in_file: str = STDIN_PATH
    out_file: Optional[str] = None
    show_count: bool = False
