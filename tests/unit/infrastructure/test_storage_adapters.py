"""
Name: Object Storage Adapter Tests

Responsibilities:
  - Validate content-addressed keys
  - Validate Pinata adapter (httpx mocked via MockTransport)
  - Validate S3 adapter (boto3 client mocked) and error mapping
"""

from unittest.mock import MagicMock

import httpx
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from albaranes.crosscutting.exceptions import UpstreamError
from albaranes.infrastructure.storage import (
    InMemoryObjectStorage,
    PinataConfig,
    PinataObjectStorage,
    S3Config,
    S3ObjectStorage,
)
from albaranes.infrastructure.storage.errors import (
    StorageConfigurationError,
    StoragePermissionError,
    StorageUnavailableError,
)
from albaranes.infrastructure.storage.naming import content_key

pytestmark = pytest.mark.unit


def test_content_key_is_stable_and_keeps_extension():
    first = content_key(b"abc", "Firma.PNG")
    second = content_key(b"abc", "other.png")

    assert first == second
    assert first.endswith(".png")
    assert content_key(b"abc", "x.png", prefix="/sig/").startswith("sig/")


def test_in_memory_storage_roundtrip():
    storage = InMemoryObjectStorage()

    url = storage.upload(b"png-bytes", filename="sign.png", content_type="image/png")

    assert url.startswith("memory://objects/")
    assert storage.get(url) == b"png-bytes"
    assert len(storage.keys()) == 1


# ============================================================================
# Pinata
# ============================================================================


def _pinata(handler) -> PinataObjectStorage:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return PinataObjectStorage(
        PinataConfig(jwt="token", gateway_url="https://gw.example/ipfs/"),
        client=client,
    )


def test_pinata_upload_returns_gateway_url():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"IpfsHash": "QmHash"})

    url = _pinata(handler).upload(b"data", filename="a.png", content_type="image/png")

    assert url == "https://gw.example/ipfs/QmHash"
    assert seen["auth"] == "Bearer token"


def test_pinata_auth_failure_maps_to_permission_error():
    storage = _pinata(lambda request: httpx.Response(401, json={}))

    with pytest.raises(StoragePermissionError):
        storage.upload(b"data", filename="a.png", content_type="image/png")


def test_pinata_server_error_maps_to_unavailable():
    storage = _pinata(lambda request: httpx.Response(503, json={}))

    with pytest.raises(StorageUnavailableError):
        storage.upload(b"data", filename="a.png", content_type="image/png")


def test_pinata_requires_jwt():
    with pytest.raises(StorageConfigurationError):
        PinataObjectStorage(PinataConfig(jwt=" "))


# ============================================================================
# S3
# ============================================================================


def _s3_config(**overrides) -> S3Config:
    values = dict(bucket="albaranes", access_key="ak", secret_key="sk")
    values.update(overrides)
    return S3Config(**values)


def test_s3_upload_puts_object_and_builds_public_url():
    client = MagicMock()
    storage = S3ObjectStorage(
        _s3_config(public_base_url="https://cdn.example/"), client=client
    )

    url = storage.upload(b"pdf", filename="note.pdf", content_type="application/pdf")

    kwargs = client.put_object.call_args.kwargs
    assert kwargs["Bucket"] == "albaranes"
    assert kwargs["Key"].startswith("albaranes/")
    assert kwargs["ContentType"] == "application/pdf"
    assert url == f"https://cdn.example/{kwargs['Key']}"


def test_s3_public_url_falls_back_to_endpoint_then_aws_host():
    client = MagicMock()
    minio = S3ObjectStorage(_s3_config(endpoint_url="http://minio:9000"), client=client)
    aws = S3ObjectStorage(_s3_config(region="eu-west-1"), client=client)

    assert minio.public_url("k") == "http://minio:9000/albaranes/k"
    assert aws.public_url("k") == "https://albaranes.s3.eu-west-1.amazonaws.com/k"


def test_s3_access_denied_maps_to_permission_error():
    client = MagicMock()
    client.put_object.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "no"}}, "PutObject"
    )
    storage = S3ObjectStorage(_s3_config(), client=client)

    with pytest.raises(StoragePermissionError):
        storage.upload(b"x", filename="x.png", content_type="image/png")


def test_s3_connection_failure_is_upstream_error():
    client = MagicMock()
    client.put_object.side_effect = EndpointConnectionError(endpoint_url="http://s3")
    storage = S3ObjectStorage(_s3_config(), client=client)

    with pytest.raises(UpstreamError):
        storage.upload(b"x", filename="x.png", content_type="image/png")


def test_s3_requires_bucket_and_credentials():
    with pytest.raises(StorageConfigurationError):
        S3ObjectStorage(_s3_config(bucket=""), client=MagicMock())
    with pytest.raises(StorageConfigurationError):
        S3ObjectStorage(_s3_config(secret_key=""), client=MagicMock())
