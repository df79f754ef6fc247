import atexit
from datetime import (
    datetime,
)
import logging
import logging.handlers
import os
from pathlib import (
    Path,
)
import queue
import sys
import tempfile
import threading
from typing import (
    Any,
)

# Create a log queue
log_queue: "queue.Queue[Any]" = queue.Queue()

# Store the current listener to stop it on exit
_current_listener: logging.handlers.QueueListener | None = None

# Event to track when the listener is ready
_listener_ready = threading.Event()

# Default format for log messages
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ROOT_LOGGER_NAME = "didlink"


def _parse_debug_modules(debug_str: str) -> dict[str, int]:
    """
    Parse the DIDLINK_DEBUG environment variable to determine module-specific
    log levels.

    Format examples:
    - "DEBUG"  # All modules at DEBUG level
    - "didlink.resolver.state_machine:DEBUG"  # Only the state machine at DEBUG
    - "resolver.state_machine:DEBUG"  # Same as above, didlink prefix is optional
    - "didlink.resolver:DEBUG,didlink.cid:INFO"  # Multiple modules
    """
    module_levels: dict[str, int] = {}

    # Handle empty or whitespace-only string
    if not debug_str or debug_str.isspace():
        return module_levels

    # If it's a plain log level without any colons, apply to all
    if ":" not in debug_str and debug_str.upper() in logging._nameToLevel:
        return {"": getattr(logging, debug_str.upper())}

    # Handle module-specific levels
    for part in debug_str.split(","):
        if part.count(":") != 1:
            continue

        module, level = part.split(":")
        level = level.strip().upper()

        if level not in logging._nameToLevel:
            continue

        module = module.strip()
        # Remove didlink prefix if present, it is added back when creating logger
        if module == ROOT_LOGGER_NAME:
            module = ""
        elif module.startswith(ROOT_LOGGER_NAME + "."):
            module = module[len(ROOT_LOGGER_NAME) + 1 :]
        module = module.replace("/", ".").strip(".")

        module_levels[module] = getattr(logging, level)

    return module_levels


def _disable_logging() -> None:
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.WARNING)
    root_logger.propagate = False


def setup_logging() -> None:
    """
    Set up logging configuration based on environment variables.

    Environment Variables:
        DIDLINK_DEBUG
            Controls logging levels. Examples:
            - "DEBUG" (all modules at DEBUG level)
            - "didlink.resolver:DEBUG" (only the resolver package at DEBUG)
            - "resolver:DEBUG" (same as above, didlink prefix optional)
            - "didlink.resolver:DEBUG,didlink.cid:INFO" (multiple modules)

        DIDLINK_DEBUG_FILE
            If set, logs are also written to this file. If not set, they go
            to a timestamped file in the system's temp directory as well as
            to stderr.

    When DIDLINK_DEBUG is unset the ``didlink`` logger only passes warnings
    and has no handlers of its own.
    """
    global _current_listener, _listener_ready

    _listener_ready.clear()

    if _current_listener is not None:
        _current_listener.stop()
        _current_listener = None

    debug_str = os.environ.get("DIDLINK_DEBUG", "")
    module_levels = _parse_debug_modules(debug_str)

    if not module_levels:
        _disable_logging()
        _listener_ready.set()
        return

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)

    handlers: list[logging.StreamHandler[Any] | logging.FileHandler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    log_file = os.environ.get("DIDLINK_DEBUG_FILE")

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        unique_id = os.urandom(4).hex()  # Add a unique identifier to prevent collisions
        log_file = str(
            Path(tempfile.gettempdir()) / f"didlink_{timestamp}_{unique_id}.log"
        )

        # Print the log file path so users know where to find it
        print(f"Logging to: {log_file}", file=sys.stderr)

    file_handler = logging.FileHandler(log_file, mode="w")
    file_handler.setFormatter(formatter)
    handlers.append(file_handler)

    queue_handler = logging.handlers.QueueHandler(log_queue)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(queue_handler)
    root_logger.propagate = False

    if "" in module_levels:
        root_logger.setLevel(module_levels[""])
    else:
        # Default to INFO for module-specific logging
        root_logger.setLevel(logging.INFO)

    for module, level in module_levels.items():
        if module:
            logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{module}")
            logger.handlers.clear()
            logger.addHandler(queue_handler)
            logger.setLevel(level)
            logger.propagate = False  # Prevent message duplication

    # Start the listener AFTER configuring all loggers
    _current_listener = logging.handlers.QueueListener(
        log_queue, *handlers, respect_handler_level=True
    )
    _current_listener.start()

    _listener_ready.set()


@atexit.register
def cleanup_logging() -> None:
    """Clean up logging resources on exit."""
    global _current_listener
    if _current_listener is not None:
        _current_listener.stop()
        _current_listener = None
