"""
Logging utilities for darkroom
Provides structured logging and per-render stage statistics
"""

import logging
import sys
import time
from typing import Optional, Dict, Any, List
import json

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_console_handler: Optional[logging.Handler] = None


class StructuredLogger:
    """Provides structured logging with metadata"""

    def __init__(self, name: str, metadata: Optional[Dict[str, Any]] = None):
        """
        Initialize structured logger

        Args:
            name: Logger name
            metadata: Default metadata to include in all logs
        """
        self.logger = logging.getLogger(name)
        self.metadata = metadata or {}

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with metadata"""
        data = {**self.metadata, **kwargs}
        if data:
            return f"{message} | {json.dumps(data, default=str)}"
        return message

    def debug(self, message: str, **kwargs):
        """Log debug message with metadata"""
        self.logger.debug(self._format_message(message, **kwargs))


class RenderStats:
    """Tracks which pipeline stages ran during one render and how long they took"""

    def __init__(self):
        self.start_time = time.perf_counter()
        self.end_time: Optional[float] = None
        self.applied: List[str] = []
        self.skipped: List[str] = []
        self.stage_times: Dict[str, float] = {}
        self.composited = False

    def add_stage(self, name: str, duration: float):
        """Record an applied stage and its duration in seconds"""
        self.applied.append(name)
        self.stage_times[name] = duration

    def skip_stage(self, name: str):
        """Record a stage skipped because its inputs were at identity"""
        self.skipped.append(name)

    def finish(self):
        self.end_time = time.perf_counter()

    def get_elapsed_time(self) -> float:
        """Get elapsed time in seconds"""
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time

    def get_summary(self) -> Dict[str, Any]:
        """Get render summary"""
        return {
            'applied_stages': list(self.applied),
            'skipped_stages': list(self.skipped),
            'stage_times': dict(self.stage_times),
            'composited': self.composited,
            'elapsed_time': self.get_elapsed_time(),
        }


def setup_console_logging(level: str = "INFO", color: bool = True,
                          fmt: str = DEFAULT_FORMAT):
    """
    Setup console logging with optional color support

    Args:
        level: Logging level
        color: Whether to use colored output
        fmt: Log record format
    """
    global _console_handler
    console_handler = logging.StreamHandler(sys.stderr)

    if color and sys.stderr.isatty():
        # Use colored formatter if the optional colorlog extra is installed
        try:
            import colorlog
            formatter = colorlog.ColoredFormatter(
                '%(log_color)s' + fmt + '%(reset)s',
                log_colors={
                    'DEBUG': 'cyan',
                    'INFO': 'green',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                    'CRITICAL': 'red,bg_white',
                }
            )
        except ImportError:
            formatter = logging.Formatter(fmt)
    else:
        formatter = logging.Formatter(fmt)

    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    # Replace the handler from an earlier call instead of stacking a second one
    if _console_handler is not None:
        root_logger.removeHandler(_console_handler)
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.addHandler(console_handler)
    _console_handler = console_handler
    return console_handler
