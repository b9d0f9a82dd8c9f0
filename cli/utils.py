"""Utility functions for formatting console output."""

import json
from typing import Any

from storage_client.models import NOT_MODIFIED, StoredObject


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"


def format_content(content: bytes) -> str:
    """Decode content for display, falling back to a size summary for binary data."""
    try:
        return content.decode('utf-8')
    except UnicodeDecodeError:
        return f"<binary content, {format_file_size(len(content))}>"


def format_result(result: Any) -> str:
    """
    Render an operation result for the console.

    Args:
        result: Value returned by a StorageClient operation

    Returns:
        Printable text
    """
    if result is NOT_MODIFIED:
        return "Not modified."
    if isinstance(result, StoredObject):
        return (
            f"Type: {result.mimetype}\n"
            f"ETag: {result.etag}\n"
            f"Size: {format_file_size(len(result.content))}\n\n"
            f"{format_content(result.content)}"
        )
    if isinstance(result, bytes):
        return format_content(result)
    return json.dumps(result, indent=2, ensure_ascii=False)
