"""Transport adapter executing request descriptors with httpx."""

from contextlib import ExitStack

import httpx

from common.logging_config import get_logger
from storage_client.models import BytesPayload, MultipartPayload, RawResponse, RequestDescriptor

logger = get_logger(__name__)


class HttpTransport:
    """Sends RequestDescriptors through an httpx.AsyncClient."""

    def __init__(self, http_client: httpx.AsyncClient):
        self.http_client = http_client

    def _encode_part(self, payload: MultipartPayload, stack: ExitStack) -> tuple:
        """
        Convert a payload into an httpx ``files`` entry.

        File payloads are opened here and registered on ``stack`` so they are
        closed once the request finishes, whether it succeeded or not.
        """
        if isinstance(payload, BytesPayload):
            return payload.field_name, (payload.filename, payload.content, payload.content_type)

        stream = stack.enter_context(open(payload.file_path, 'rb'))
        if payload.content_type:
            return payload.field_name, (payload.filename, stream, payload.content_type)
        return payload.field_name, (payload.filename, stream)

    async def send(self, descriptor: RequestDescriptor) -> RawResponse:
        """
        Execute a request descriptor.

        Args:
            descriptor: Signed request to send

        Returns:
            RawResponse with text or binary body depending on the descriptor

        Raises:
            httpx.TransportError: On network failure
            OSError: If an upload source cannot be opened
        """
        with ExitStack() as stack:
            files = [self._encode_part(payload, stack) for payload in descriptor.payloads]

            logger.debug(f"Sending request: {descriptor.method} {descriptor.url} parts={len(files)}")

            response = await self.http_client.request(
                descriptor.method,
                descriptor.url,
                headers=dict(descriptor.headers),
                files=files or None,
            )

        logger.debug(f"Response received: {descriptor.method} {descriptor.url} status={response.status_code}")

        body = response.content if descriptor.accept_binary else response.text
        return RawResponse(
            status_code=response.status_code,
            headers=response.headers,
            body=body,
        )
