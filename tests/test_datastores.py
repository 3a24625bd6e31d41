"""Unit tests for the file and S3 datastores."""

import io
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import ClientError

from asset_pipeline.datastores import (
    DataNotFound,
    DataStoreError,
    FileDataStore,
    S3DataStore,
)


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class TestFileDataStore:
    """Tests for FileDataStore."""

    def test_store_and_retrieve(self, tmp_path):
        datastore = FileDataStore(tmp_path)

        uid = datastore.store(b"payload", meta={"name": "cat.png"})

        assert datastore.retrieve(uid) == b"payload"
        assert datastore.retrieve_meta(uid)["name"] == "cat.png"
        assert (tmp_path / uid).is_file()

    def test_store_without_meta(self, tmp_path):
        datastore = FileDataStore(tmp_path, store_meta=False)

        uid = datastore.store(b"payload")

        assert datastore.retrieve_meta(uid) == {}

    def test_store_meta_failure_removes_payload(self, tmp_path):
        """A failed sidecar write leaves no orphaned payload behind."""
        datastore = FileDataStore(tmp_path)
        original_write_text = Path.write_text

        def failing_write_text(self, *args, **kwargs):
            if self.name.endswith(".meta.json"):
                raise OSError("disk full")
            return original_write_text(self, *args, **kwargs)

        with patch.object(Path, "write_text", failing_write_text):
            with pytest.raises(DataStoreError, match="disk full"):
                datastore.store(b"payload", meta={"name": "cat.png"})

        assert [p for p in tmp_path.rglob("*") if p.is_file()] == []

    def test_retrieve_missing(self, tmp_path):
        with pytest.raises(DataNotFound):
            FileDataStore(tmp_path).retrieve("2024/01/01/missing")

    def test_retrieve_outside_root(self, tmp_path):
        """Uids that escape the root directory are rejected."""
        (tmp_path / "secret").write_bytes(b"secret")
        datastore = FileDataStore(tmp_path / "store")

        with pytest.raises(DataStoreError):
            datastore.retrieve("../secret")

    def test_destroy(self, tmp_path):
        datastore = FileDataStore(tmp_path)
        uid = datastore.store(b"payload", meta={"a": 1})

        datastore.destroy(uid)

        with pytest.raises(DataNotFound):
            datastore.retrieve(uid)
        assert datastore.retrieve_meta(uid) == {}

    def test_destroy_missing(self, tmp_path):
        with pytest.raises(DataNotFound):
            FileDataStore(tmp_path).destroy("2024/01/01/missing")


class TestS3DataStore:
    """Tests for S3DataStore with a mocked boto3 client."""

    @pytest.fixture
    def s3_client(self):
        client = Mock()
        client.get_object = Mock(return_value={"Body": io.BytesIO(b"payload")})
        return client

    def test_store_puts_object_under_prefix(self, s3_client):
        datastore = S3DataStore("assets", key_prefix="dev/assets/", client=s3_client)

        uid = datastore.store(b"payload", meta={"width": 10})

        s3_client.put_object.assert_called_once()
        kwargs = s3_client.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "assets"
        assert kwargs["Key"] == f"dev/assets/{uid}"
        assert kwargs["Body"] == b"payload"
        assert kwargs["Metadata"] == {"width": "10"}

    def test_retrieve(self, s3_client):
        datastore = S3DataStore("assets", key_prefix="dev/", client=s3_client)

        assert datastore.retrieve("abc") == b"payload"
        s3_client.get_object.assert_called_once_with(Bucket="assets", Key="dev/abc")

    def test_retrieve_missing_key(self, s3_client):
        s3_client.get_object.side_effect = _client_error("NoSuchKey", "GetObject")
        datastore = S3DataStore("assets", client=s3_client)

        with pytest.raises(DataNotFound):
            datastore.retrieve("abc")

    def test_retrieve_other_error(self, s3_client):
        s3_client.get_object.side_effect = _client_error("AccessDenied", "GetObject")
        datastore = S3DataStore("assets", client=s3_client)

        with pytest.raises(DataStoreError) as exc_info:
            datastore.retrieve("abc")
        assert not isinstance(exc_info.value, DataNotFound)

    def test_store_failure(self, s3_client):
        s3_client.put_object.side_effect = _client_error("AccessDenied", "PutObject")
        datastore = S3DataStore("assets", client=s3_client)

        with pytest.raises(DataStoreError):
            datastore.store(b"payload")

    def test_destroy(self, s3_client):
        datastore = S3DataStore("assets", key_prefix="p/", client=s3_client)

        datastore.destroy("abc")

        s3_client.delete_object.assert_called_once_with(Bucket="assets", Key="p/abc")
