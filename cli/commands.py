"""Command handler functions for console operations."""

import httpx

from cli.constants import GREEN, RESET
from cli.models import (
    BucketsCommand,
    CommandRequest,
    DeleteCommand,
    GetCommand,
    ListCommand,
    MetaCommand,
    SaveCommand,
    WriteCommand,
    WriteFileCommand,
    WriteFileMultiCommand,
    WriteMultiCommand,
)
from cli.utils import format_file_size, format_result
from common.logging_config import get_logger
from storage_client import StorageClient
from storage_client.exceptions import ParseError, ServerError

logger = get_logger(__name__)


async def handle_write(cmd: WriteCommand, client: StorageClient) -> str:
    """Handle 'write' command."""
    result = await client.write(cmd.bucket, cmd.object_id, cmd.mime_type, cmd.content)
    return format_result(result)


async def handle_write_multi(cmd: WriteMultiCommand, client: StorageClient) -> str:
    """Handle 'write-multi' command."""
    logger.info(f"Executing write-multi command: bucket={cmd.bucket} entries={len(cmd.entries)}")
    result = await client.write_multi(cmd.bucket, list(cmd.entries))
    return format_result(result)


async def handle_write_file(cmd: WriteFileCommand, client: StorageClient) -> str:
    """Handle 'write-file' command, with or without an explicit MIME type."""
    if cmd.mime_type:
        result = await client.write_file_with_type(cmd.bucket, cmd.object_id, cmd.path, cmd.mime_type)
    else:
        result = await client.write_file(cmd.bucket, cmd.object_id, cmd.path)
    return format_result(result)


async def handle_write_file_multi(cmd: WriteFileMultiCommand, client: StorageClient) -> str:
    """Handle 'write-file-multi' command."""
    logger.info(f"Executing write-file-multi command: bucket={cmd.bucket} files={len(cmd.entries)}")
    result = await client.write_file_multi(cmd.bucket, list(cmd.entries))
    return format_result(result)


async def handle_get(cmd: GetCommand, client: StorageClient) -> str:
    """Handle 'get' command."""
    result = await client.get(cmd.bucket, cmd.object_id, with_type=cmd.with_type, etag=cmd.etag)
    return format_result(result)


async def handle_save(cmd: SaveCommand, client: StorageClient) -> str:
    """Handle 'save' command."""
    path = await client.save(cmd.bucket, cmd.object_id, cmd.path)
    return f"Saved to: {path.absolute()} ({format_file_size(path.stat().st_size)})"


async def handle_meta(cmd: MetaCommand, client: StorageClient) -> str:
    """Handle 'meta' command."""
    return format_result(await client.get_meta(cmd.bucket, cmd.object_id))


async def handle_delete(cmd: DeleteCommand, client: StorageClient) -> str:
    """Handle 'delete' command."""
    await client.delete(cmd.bucket, cmd.object_id)
    return f"Deleted /{cmd.bucket}/{cmd.object_id}"


async def handle_list(cmd: ListCommand, client: StorageClient) -> str:
    """Handle 'list' command."""
    return format_result(await client.list_objects(cmd.bucket))


async def handle_buckets(cmd: BucketsCommand, client: StorageClient) -> str:
    """Handle 'buckets' command."""
    return format_result(await client.list_buckets())


HANDLERS = {
    WriteCommand: handle_write,
    WriteMultiCommand: handle_write_multi,
    WriteFileCommand: handle_write_file,
    WriteFileMultiCommand: handle_write_file_multi,
    GetCommand: handle_get,
    SaveCommand: handle_save,
    MetaCommand: handle_meta,
    DeleteCommand: handle_delete,
    ListCommand: handle_list,
    BucketsCommand: handle_buckets,
}


async def dispatch_command(cmd: CommandRequest, client: StorageClient) -> str:
    """
    Run a parsed command and render its outcome.

    Failures are reported as text so the console can keep running.

    Args:
        cmd: Parsed command
        client: StorageClient to run it against

    Returns:
        Reply text or an 'Error: ...' line
    """
    handler = HANDLERS.get(type(cmd))
    if handler is None:
        return f"Unknown command type: {type(cmd)}"

    try:
        reply = await handler(cmd, client)
    except ServerError as e:
        logger.warning(f"{cmd.command} failed: status={e.status_code}")
        return f"Error ({e.status_code}): {e}"
    except ParseError as e:
        return f"Error: {e}"
    except httpx.TransportError as e:
        logger.error(f"{cmd.command} failed: {type(e).__name__}: {e}")
        return f"Error: cannot reach storage server ({type(e).__name__}: {e})"
    except (OSError, ValueError) as e:
        return f"Error: {e}"

    return f"\nReply:\n{reply}\n{GREEN}Done.{RESET}"
