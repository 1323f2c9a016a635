"""unic - Collapse adjacent duplicate lines in text streams and files."""

from .collapser import RunCollapser
from .config import UnicConfig
from .errors import SinkOpenError, SourceOpenError, StreamError, UnicError
from .runner import run

# Version is managed by hatch-vcs and set during build
try:
    from ._version import __version__
except ImportError:
    # Fallback for development installs without build
    __version__ = "0.0.0.dev0+unknown"

__all__ = [
    "RunCollapser",
    "SinkOpenError",
    "SourceOpenError",
    "StreamError",
    "UnicConfig",
    "UnicError",
    "__version__",
    "run",
]
