"""Decorators and helpers shared by command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer

from joinboard.exceptions import BoardError
from joinboard.services.board_context import BoardContext
from joinboard.services.config_service import get_config_service
from joinboard.utils.exit_codes import exit_code_for, get_exit_code_name
from joinboard.utils.logger import get_logger
from joinboard.utils.ui.formatters import format_error


def open_board_context() -> BoardContext:
    """Build a BoardContext for the current configuration."""
    return BoardContext.from_config(get_config_service().config)


def command_wrapper(func: Callable):
    """Run sync or async commands, logging them and mapping errors to exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except BoardError as e:
            elapsed = time.monotonic() - start
            code = exit_code_for(e)
            logger.error(
                "command failed: %s (%.3fs) [%s] - %s",
                cmd,
                elapsed,
                get_exit_code_name(code),
                str(e),
            )
            format_error(str(e))
            raise typer.Exit(code=code) from e

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=1) from e

    return wrapper
