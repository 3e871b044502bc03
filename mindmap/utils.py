# Utility functions for MindMap
import colorsys
import logging
import re
import traceback
import uuid
from typing import Optional, Tuple


def generate_node_id() -> str:
    """Mint a fresh, opaque node id."""
    return f"node_{uuid.uuid4().hex[:12]}"


def hex_to_rgb(color_str: str) -> Tuple[int, int, int]:
    """Convert hex (#rgb or #rrggbb) or HSL color to RGB."""
    logger = logging.getLogger(__name__)

    # Handle HSL format
    hsl_match = re.match(r'hsl\((\d+),\s*(\d+)%,\s*(\d+)%\)', color_str)
    if hsl_match:
        h, s, l = [int(x) for x in hsl_match.groups()]
        r, g, b = colorsys.hls_to_rgb(h / 360, l / 100, s / 100)
        return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))

    # Handle hex format
    hex_color = color_str.lstrip('#')
    if len(hex_color) == 3:
        hex_color = ''.join(c * 2 for c in hex_color)
    try:
        return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        logger.error(f"Invalid color format: {color_str}")
        # Default gray when conversion fails
        return (128, 128, 128)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return "#{:02x}{:02x}{:02x}".format(r, g, b)


def handle_error(e: Exception, logger: Optional[logging.Logger] = None,
                 message: Optional[str] = None, log_traceback: bool = True) -> str:
    """Standardized error handling utility.

    Provides a consistent way to handle exceptions across the application
    with proper logging and optional traceback.

    Args:
        e: The exception to handle
        logger: Optional logger instance. If not provided, uses this module's logger.
        message: Optional custom message prefix. If not provided, uses a default.
        log_traceback: Whether to log the full traceback. Default is True.

    Returns:
        Error message string suitable for user-facing error messages.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if message:
        error_msg = f"{message}: {str(e)}"
    else:
        error_msg = f"An error occurred: {str(e)}"

    logger.error(error_msg)
    logger.error(f"Error type: {type(e).__name__}")

    if log_traceback:
        logger.error(f"Traceback: {traceback.format_exc()}")

    return error_msg


def standard_response(success: bool, message: str = '', **data) -> dict:
    """Build the result dictionary returned by session commands."""
    response = {'success': success, 'message': message}
    response.update(data)
    return response
