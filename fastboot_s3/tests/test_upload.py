from unittest.mock import Mock

import pytest

from fastboot_s3.services.uploader import upload_archive
from fastboot_s3.utils.s3_handler import S3Handler

BUCKET = "fastboot-builds"


def test_upload_writes_raw_bytes(s3, handler, tmp_path):
    archive = tmp_path / "dist.zip"
    payload = b"PK\x03\x04 fake zip \x00\xff"
    archive.write_bytes(payload)

    key = upload_archive(handler, archive, "app/dist-", "v7")

    assert key == "app/dist-v7.zip"
    body = s3.get_object(Bucket=BUCKET, Key="app/dist-v7.zip")["Body"].read()
    assert body == payload


def test_upload_overwrites_existing_revision(s3, handler, tmp_path):
    archive = tmp_path / "dist.zip"
    archive.write_bytes(b"first")
    upload_archive(handler, archive, "dist-", "v1")
    archive.write_bytes(b"second")
    upload_archive(handler, archive, "dist-", "v1")

    assert s3.get_object(Bucket=BUCKET, Key="dist-v1.zip")["Body"].read() == b"second"


def test_missing_archive_fails_before_upload(tmp_path):
    client = Mock()
    handler = S3Handler(bucket_name=BUCKET, region_name="us-east-1", s3_client=client)

    with pytest.raises(FileNotFoundError):
        upload_archive(handler, tmp_path / "missing.zip", "dist-", "v1")
    client.put_object.assert_not_called()
