import json
import logging
from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


def try_fetch_manifest(handler, key: str) -> Optional[Dict[str, Any]]:
    """
    Fetch and parse the manifest at `key`.

    Returns None when the object is missing, unreadable, not valid JSON or not
    a JSON object. Those cases are indistinguishable to callers.
    """
    try:
        document = handler.get_json(key)
    except (ClientError, BotoCoreError) as e:
        logger.debug(f"Manifest s3://{handler.bucket_name}/{key} unavailable: {e}")
        return None
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError
        logger.debug(f"Manifest s3://{handler.bucket_name}/{key} is not valid JSON: {e}")
        return None

    if not isinstance(document, dict):
        logger.debug(f"Manifest s3://{handler.bucket_name}/{key} is not a JSON object")
        return None
    return document


def default_manifest_content(bucket: str, key: str) -> str:
    """Manifest body understood by the fastboot app-server S3 downloader."""
    return json.dumps({"bucket": bucket, "key": key})
