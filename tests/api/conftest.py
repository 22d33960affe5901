"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from doccontrol.config import Settings
from doccontrol.interfaces.api.app import create_app
from doccontrol.interfaces.api.middleware.auth import AuthMiddleware
from doccontrol.main import build_api_resources

BOUNDARY = "----DocControlBoundary"


def multipart_body(fields: dict[str, str], file: tuple[str, bytes, str] | None = None) -> bytes:
    """Encode fields and an optional (file name, data, content type) file part."""
    chunks: list[bytes] = []
    for name, value in fields.items():
        chunks.append(
            (
                f"--{BOUNDARY}\r\n"
                f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
                f"{value}\r\n"
            ).encode()
        )
    if file is not None:
        file_name, data, content_type = file
        chunks.append(
            (
                f"--{BOUNDARY}\r\n"
                f'Content-Disposition: form-data; name="file"; filename="{file_name}"\r\n'
                f"Content-Type: {content_type}\r\n\r\n"
            ).encode()
            + data
            + b"\r\n"
        )
    chunks.append(f"--{BOUNDARY}--\r\n".encode())
    return b"".join(chunks)


def multipart_headers(user_id: str) -> dict[str, str]:
    return {
        "Content-Type": f"multipart/form-data; boundary={BOUNDARY}",
        "X-User-Id": user_id,
    }


def as_user(user_id: str) -> dict[str, str]:
    return {"X-User-Id": user_id}


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def app(settings, uow_factory, grant_checker, blob_store, clock, sink):
    """Falcon ASGI app over the in-memory store; callers identify via X-User-Id."""
    resources = build_api_resources(settings, uow_factory, grant_checker, blob_store, clock, sink)
    return create_app(resources, middleware=[AuthMiddleware()])


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def upload(client):
    """Upload a document as user and return its JSON."""

    def _upload(user_id: str = "alice", title: str = "SOP-1", **fields: str) -> dict:
        body = multipart_body(
            {"title": title, "category": "SOP", **fields},
            ("sop.pdf", b"%PDF-1.7 v1", "application/pdf"),
        )
        r = client.simulate_post("/v1/documents", body=body, headers=multipart_headers(user_id))
        assert r.status_code == 201, r.text
        return r.json

    return _upload
