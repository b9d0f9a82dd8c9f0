"""Request signing: token derivation and request descriptor assembly."""

import hashlib
from datetime import datetime
from typing import Iterable, Optional

from common.constants import CLIENT_ID_HEADER, IF_NONE_MATCH_HEADER, TOKEN_HEADER
from storage_client.models import ClientIdentity, MultipartPayload, RequestDescriptor


def token_window(now: Optional[datetime] = None) -> str:
    """
    Build the hour-granular time string mixed into the token.

    The month is zero-based and no field is zero padded, so that tokens
    match what deployed servers compute (e.g. 2024-03-05 07:59 -> "2024:2:5:7").

    Args:
        now: Local time to use (defaults to the current local time)

    Returns:
        Colon-joined year, month, day and hour
    """
    if now is None:
        now = datetime.now()
    return f"{now.year}:{now.month - 1}:{now.day}:{now.hour}"


def derive_token(client_id: str, secret: str, now: Optional[datetime] = None) -> str:
    """
    Derive the signed token for the hour containing ``now``.

    Args:
        client_id: Client identifier
        secret: Shared secret
        now: Local time to use (defaults to the current local time)

    Returns:
        Lowercase hex SHA-256 digest
    """
    material = client_id + secret + token_window(now)
    return hashlib.sha256(material.encode('utf-8')).hexdigest()


def build_request(
    identity: ClientIdentity,
    method: str,
    path: str,
    payloads: Optional[Iterable[MultipartPayload]] = None,
    accept_binary: bool = False,
    conditional_tag: Optional[str] = None,
    now: Optional[datetime] = None,
) -> RequestDescriptor:
    """
    Build a signed request descriptor.

    Args:
        identity: Client identity to sign with
        method: HTTP method (GET, POST, DELETE)
        path: Request path, starting with '/'
        payloads: Multipart parts for the body, if any
        accept_binary: Return the response body as raw bytes
        conditional_tag: Etag to send as If-None-Match
        now: Signing time (defaults to the current local time)

    Returns:
        Immutable RequestDescriptor
    """
    headers = {
        CLIENT_ID_HEADER: identity.client_id,
        TOKEN_HEADER: derive_token(identity.client_id, identity.secret, now),
    }

    if conditional_tag:
        headers[IF_NONE_MATCH_HEADER] = conditional_tag

    return RequestDescriptor(
        method=method.upper(),
        url=identity.server_url.rstrip('/') + path,
        headers=headers,
        payloads=tuple(payloads or ()),
        accept_binary=accept_binary,
        conditional_tag=conditional_tag,
    )
