import logging
from pathlib import Path

from fastboot_s3.utils.keys import archive_key

logger = logging.getLogger(__name__)


def upload_archive(handler, archive_path, archive_key_prefix: str, revision_key: str) -> str:
    """
    Uploads the build archive at archive_path as `<archive_key_prefix><revision_key>.zip`
    and returns the key. Existing objects at that key are overwritten.
    """
    # read fully before touching the network so a bad path fails fast
    data = Path(archive_path).read_bytes()
    key = archive_key(archive_key_prefix, revision_key)

    logger.info(f"Uploading {archive_path} ({len(data)} bytes) as revision {revision_key}")
    handler.put_bytes(key, data)
    return key
