from ..context import ReplContext
import logging

from ...logging_config import ROOT_LOGGER_NAME


def handle_debug_command(ctx: ReplContext, cmd: str) -> None:
    """Handle the 'debug' command."""
    parts = str(cmd).split()
    if len(parts) > 1:
        mode = parts[1].lower()
        if mode in ("on", "true", "enabled"):
            ctx.debug_mode = True
            logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.DEBUG)
            print("Debug mode enabled (raw derivative + debug logging).")
        elif mode in ("off", "false", "disabled"):
            ctx.debug_mode = False
            logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.WARNING)
            print("Debug mode disabled.")
        else:
            print("Usage: debug <on|off>")
    else:
        print("Usage: debug <on|off>")
