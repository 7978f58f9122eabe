import io
import zipfile

import pytest
from fastapi.testclient import TestClient

from stutterlint.api import app


def _make_zip_bytes(files: dict[str, str] | None = None) -> bytes:
    files = files or {
        "repo/cache/cache.go": "package cache\n\nvar CacheSize int\n",
        "repo/vendor/x/x.go": "package x\n\nvar XValue int\n",
    }
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, text in files.items():
            archive.writestr(name, text)
    return buffer.getvalue()


def test_health() -> None:
    client = TestClient(app)
    assert client.get("/health").json() == {"status": "ok"}


def test_lint_endpoint() -> None:
    client = TestClient(app)

    response = client.post(
        "/lint",
        files={"file": ("repo.zip", _make_zip_bytes(), "application/zip")},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["findings"] == [
        {
            "kind": "stutter",
            "package": "cache",
            "symbol": "CacheSize",
            "file": "cache/cache.go",
            "line": 3,
            "column": 5,
            "message": 'cache/cache.go:3:5: consider changing "cache.CacheSize" to "cache.Size"',
            "suggestion": "cache.Size",
        }
    ]
    assert data["stats"]["count"] == 1


def test_lint_reports_parse_errors() -> None:
    client = TestClient(app)
    zip_bytes = _make_zip_bytes({"repo/bad/bad.go": "package bad\n\nfunc (\n"})

    response = client.post(
        "/lint",
        files={"file": ("repo.zip", zip_bytes, "application/zip")},
    )

    assert response.status_code == 422
    assert response.json()["detail"].startswith("bad/bad.go:")


def test_lint_rejects_non_zip() -> None:
    client = TestClient(app)
    response = client.post(
        "/lint",
        files={"file": ("repo.txt", b"not zip", "text/plain")},
    )
    assert response.status_code == 400


def test_lint_rejects_corrupt_zip() -> None:
    client = TestClient(app)
    response = client.post(
        "/lint",
        files={"file": ("repo.zip", b"not really a zip", "application/zip")},
    )
    assert response.status_code == 400


def test_lint_requires_input() -> None:
    client = TestClient(app)
    response = client.post("/lint")
    assert response.status_code == 400


def test_lint_archive_url(monkeypatch: pytest.MonkeyPatch) -> None:
    client = TestClient(app)
    zip_bytes = _make_zip_bytes()
    requested: list[str] = []

    class FakeResponse:
        def __init__(self, status_code: int, content: bytes) -> None:
            self.status_code = status_code
            self.content = content

    def fake_get(url: str, timeout: float = 60.0, **_kwargs) -> FakeResponse:
        requested.append(url)
        return FakeResponse(200, zip_bytes)

    monkeypatch.setattr("stutterlint.api.httpx.get", fake_get)

    response = client.post("/lint?archive_url=https://example.com/widgets.zip")

    assert response.status_code == 200
    assert response.json()["findings"][0]["suggestion"] == "cache.Size"
    assert requested == ["https://example.com/widgets.zip"]


def test_lint_archive_url_download_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    client = TestClient(app)

    class FakeResponse:
        status_code = 404
        content = b""

    monkeypatch.setattr("stutterlint.api.httpx.get", lambda url, **_kwargs: FakeResponse())

    response = client.post("/lint?archive_url=https://example.com/missing.zip")

    assert response.status_code == 400


def test_lint_archive_url_rejects_other_schemes() -> None:
    client = TestClient(app)
    response = client.post("/lint?archive_url=ftp://example.com/widgets.zip")
    assert response.status_code == 400
