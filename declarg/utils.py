# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Process helpers shared by the Declarg runner, help renderer and package CLI.

- get_program_invocation: Name used in usage lines when a spec has no name.
- running_in_container: Container detection used to pick the log mode.
- setup_logging: Rich or JSON console logs on stderr, plus an optional log file.

Logs never go to stdout: stdout is reserved for help, completion scripts and the
JSON printed by `declarg parse`.
"""
from __future__ import annotations

import logging
import os
import shutil
import sys

import pythonjsonlogger.json
from rich.logging import RichHandler

from declarg.console import error_console

LOG_MODES = ("cli", "json")
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
CONTAINER_MARKERS = ("docker", "kubepods", "containerd", "podman")


def get_program_invocation() -> str:
    """Return how the running program was invoked, e.g. `app` or `python app.py`."""
    script = sys.argv[0]
    if shutil.which(script):
        return os.path.basename(script)
    if "python" in os.path.basename(sys.executable):
        return f"python {os.path.basename(script)}"
    return script


def running_in_container() -> bool:
    try:
        with open("/proc/1/cgroup", "r", encoding="UTF-8") as cgroup:
            content = cgroup.read()
    except OSError:
        return False
    return any(marker in content for marker in CONTAINER_MARKERS)


def _console_handler(mode: str) -> logging.Handler:
    if mode == "cli":
        return RichHandler(
            console=error_console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(pythonjsonlogger.json.JsonFormatter(LOG_FORMAT))
    return handler


def _file_handler(log_filename: str, as_json: bool) -> logging.Handler:
    handler = logging.FileHandler(log_filename, "a", "UTF-8")
    if as_json:
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(LOG_FORMAT))
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    return handler


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
):
    """
    Configure the root logger for a Declarg program.

    Args:
        mode (str | None): "cli" for Rich console logs or "json" for one JSON
            object per line. Defaults to the `DECLARG_LOG_MODE` environment
            variable, then to "json" inside containers and "cli" elsewhere.
        log_filename (str | None): Also append logs to this file.
        json_log_to_file (bool): Write the log file as JSON instead of plain text.
        file_log_level (int): Level of the file handler.
        console_log_level (int): Level of the console handler.

    Raises:
        ValueError: If `mode` is not one of `LOG_MODES`.
    """
    if not mode:
        mode = os.getenv("DECLARG_LOG_MODE") or (
            "json" if running_in_container() else "cli"
        )
    if mode not in LOG_MODES:
        raise ValueError(f"Invalid log mode: {mode}")

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    console_handler = _console_handler(mode)
    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = _file_handler(log_filename, json_log_to_file)
        file_handler.setLevel(file_log_level)
        root.addHandler(file_handler)

    logger = logging.getLogger("declarg")
    logger.propagate = True
    logger.debug("Logging initialized in '%s' mode.", mode)
