"""Shared pytest fixtures for all tests."""

import json
import re

import httpx
import pytest

from cli.config import Config
from storage_client import StorageClient

SERVER_URL = 'http://storage.test'
CLIENT_ID = 'client-1'
SECRET = 's3cr3t'


def parse_multipart(request: httpx.Request) -> list[dict]:
    """
    Split a multipart/form-data request body into its parts.

    Returns:
        List of dicts with name, filename, content_type and content, in wire order
    """
    boundary = request.headers['content-type'].split('boundary=')[1].encode()
    parts = []
    for chunk in request.content.split(b'--' + boundary)[1:-1]:
        head, _, body = chunk[2:-2].partition(b'\r\n\r\n')
        head = head.decode()
        name = re.search(r'name="([^"]*)"', head)
        filename = re.search(r'filename="([^"]*)"', head)
        content_type = re.search(r'Content-Type: (.+)', head)
        parts.append({
            'name': name.group(1) if name else None,
            'filename': filename.group(1) if filename else None,
            'content_type': content_type.group(1).strip() if content_type else None,
            'content': body,
        })
    return parts


class FakeStorageServer:
    """In-memory stand-in for the storage API, used as an httpx.MockTransport handler."""

    def __init__(self):
        self.buckets: dict[str, dict[str, dict]] = {}
        self.requests: list[httpx.Request] = []
        self._next_id = 1

    def _etag(self, bucket: str, object_id: str) -> str:
        return f'"{bucket}-{object_id}-{len(self.buckets[bucket][object_id]["content"])}"'

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        segments = [s for s in request.url.path.split('/') if s]

        if request.method == 'GET' and not segments:
            return httpx.Response(200, json=sorted(self.buckets))

        if request.method == 'POST':
            bucket = self.buckets.setdefault(segments[0], {})
            assigned = []
            for part in parse_multipart(request):
                object_id = segments[1] if len(segments) > 1 else f'obj{self._next_id}'
                self._next_id += 1
                bucket[object_id] = {'content': part['content'], 'mimetype': part['content_type']}
                assigned.append(object_id)
            return httpx.Response(200, json={'ids': assigned})

        bucket = self.buckets.get(segments[0])
        if bucket is None:
            return httpx.Response(404, text='bucket not found')

        if len(segments) == 1:
            return httpx.Response(200, json={oid: obj['mimetype'] for oid, obj in bucket.items()})

        obj = bucket.get(segments[1])
        if obj is None:
            return httpx.Response(404, text='not found')

        if request.method == 'DELETE':
            del bucket[segments[1]]
            return httpx.Response(200)

        if len(segments) == 3 and segments[2] == 'meta':
            return httpx.Response(200, text=json.dumps({'id': segments[1], 'mimetype': obj['mimetype']}))

        etag = self._etag(segments[0], segments[1])
        if request.headers.get('if-none-match') == etag:
            return httpx.Response(304)
        return httpx.Response(
            200,
            content=obj['content'],
            headers={'Content-Type': obj['mimetype'], 'ETag': etag},
        )


@pytest.fixture
def fake_server():
    """Empty in-memory storage server."""
    return FakeStorageServer()


@pytest.fixture
def make_client():
    """
    Factory building a StorageClient whose HTTP traffic goes to a handler.

    Returns:
        Callable taking an httpx.MockTransport handler
    """
    def _make(handler) -> StorageClient:
        return StorageClient(SERVER_URL, CLIENT_ID, SECRET, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .metastorage directory
    """
    config_dir = tmp_path / '.metastorage'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file for testing file uploads.

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'test.txt'
    file_path.write_text('Sample content for testing')
    return file_path


@pytest.fixture
def multiple_sample_files(tmp_path):
    """
    Create multiple sample files for testing bulk operations.

    Returns:
        List of Paths to sample files
    """
    files = []
    for i in range(3):
        file_path = tmp_path / f'test{i}.txt'
        file_path.write_text(f'Sample content {i}')
        files.append(file_path)
    return files
