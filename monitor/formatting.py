"""
Message formatting for version notifications.
"""

from monitor.models import VersionEntry

ELLIPSIS_SUFFIX = "\n..."


def format_version_message(entry: VersionEntry, product_name: str = "Claude Code") -> str:
    """Render a version entry as notification text."""
    return f"📦 {product_name} v{entry.version}\n\n{entry.content}"


def truncate_message(message: str, max_length: int) -> str:
    """
    Truncate a message to fit a platform limit.

    Over-long messages are cut and end with an ellipsis line; the result is
    never longer than ``max_length``.
    """
    if len(message) <= max_length:
        return message
    if max_length < len(ELLIPSIS_SUFFIX):
        return message[:max(max_length, 0)]
    return message[:max_length - len(ELLIPSIS_SUFFIX)] + ELLIPSIS_SUFFIX
