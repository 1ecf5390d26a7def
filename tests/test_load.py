import json
from pathlib import Path

import httpx
import pytest

import src.data.load as load_module
import src.utils.io as io_module
from src.data.load import load_underwriting_data


def test_mapping_is_returned_as_is(underwriting_data):
    assert load_underwriting_data(underwriting_data) is underwriting_data


@pytest.mark.parametrize("source", [None, ""])
def test_missing_source_fails(source):
    with pytest.raises(TypeError, match="source is required"):
        load_underwriting_data(source)


def test_unsupported_source_type_fails():
    with pytest.raises(TypeError, match="mapping or a string"):
        load_underwriting_data(42)


def test_reads_local_file(tmp_path, underwriting_data):
    path = tmp_path / "underwriting.json"
    path.write_text(json.dumps(underwriting_data), encoding="utf-8")

    assert load_underwriting_data(str(path)) == underwriting_data
    assert load_underwriting_data(Path(path)) == underwriting_data


def test_missing_file_fails(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_underwriting_data(str(tmp_path / "nope.json"))


def test_invalid_json_fails(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON"):
        load_underwriting_data(str(path))


def test_fetches_url(monkeypatch, underwriting_data):
    seen = {}

    def fake_get(url, headers=None, timeout=None):
        seen["url"] = url
        seen["headers"] = headers
        return httpx.Response(200, json=underwriting_data, request=httpx.Request("GET", url))

    monkeypatch.setattr(io_module.httpx, "get", fake_get)

    assert load_underwriting_data("https://example.com/underwriting.json") == underwriting_data
    assert seen["url"] == "https://example.com/underwriting.json"
    assert seen["headers"] == {"Accept": "application/json"}


def test_url_error_status_fails(monkeypatch):
    def fake_get(url, headers=None, timeout=None):
        return httpx.Response(404, request=httpx.Request("GET", url))

    monkeypatch.setattr(io_module.httpx, "get", fake_get)

    with pytest.raises(RuntimeError, match="404 Not Found"):
        load_underwriting_data("https://example.com/missing.json")


def test_s3_source_reads_downloaded_copy(monkeypatch, tmp_path, underwriting_data):
    local = tmp_path / "cache.json"
    calls = {}

    def fake_download(*, data_s3_uri, local_path, aws_region=None):
        calls["uri"] = data_s3_uri
        local.write_text(json.dumps(underwriting_data), encoding="utf-8")
        return str(local)

    monkeypatch.setattr(load_module, "ensure_dataset_downloaded", fake_download)

    assert load_underwriting_data("s3://bucket/underwriting.json") == underwriting_data
    assert calls["uri"] == "s3://bucket/underwriting.json"


def test_ensure_dataset_downloaded_rejects_non_s3(tmp_path):
    from src.utils.data_store import ensure_dataset_downloaded

    with pytest.raises(ValueError, match="s3://"):
        ensure_dataset_downloaded(data_s3_uri="https://example.com/x.json", local_path=str(tmp_path / "x.json"))


@pytest.mark.parametrize("uri", ["s3://bucket", "s3:///key.json"])
def test_parse_s3_uri_requires_bucket_and_key(uri):
    from src.utils.data_store import parse_s3_uri

    with pytest.raises(ValueError, match="bucket and key"):
        parse_s3_uri(uri)


def test_ensure_dataset_downloaded_fetches_once(monkeypatch, tmp_path):
    import src.utils.data_store as store

    downloads = []

    class FakeS3:
        def download_file(self, bucket, key, filename):
            downloads.append((bucket, key))
            Path(filename).write_text('{"carriers": []}', encoding="utf-8")

    monkeypatch.setattr(store.boto3, "client", lambda service, **kwargs: FakeS3())

    local = tmp_path / "cache" / "underwriting.json"
    for _ in range(2):
        out = store.ensure_dataset_downloaded(data_s3_uri="s3://bucket/data/underwriting.json", local_path=str(local))

    assert out == str(local)
    assert downloads == [("bucket", "data/underwriting.json")]
    assert json.loads(local.read_text(encoding="utf-8")) == {"carriers": []}
    assert not (tmp_path / "cache" / "underwriting.json.part").exists()
