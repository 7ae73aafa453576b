import logging
from typing import List

from fastboot_s3.models.revision import Revision
from fastboot_s3.services.manifest import try_fetch_manifest
from fastboot_s3.utils.keys import alias_key, extract_revision

logger = logging.getLogger(__name__)


def list_revisions(handler, archive_key_prefix: str, manifest_key: str,
                   warn_on_missing_manifest: bool = False) -> List[Revision]:
    """
    List the build archives under archive_key_prefix, newest first, marking the
    one the manifest points at as active.

    Listing errors propagate. A missing or broken manifest only means that no
    revision is active. Objects that are not `<prefix><revision>.zip` are skipped, as is the
    stable alias copy of the active archive.
    """
    objects = handler.list_objects(archive_key_prefix)

    manifest = try_fetch_manifest(handler, manifest_key)
    if manifest is None:
        if warn_on_missing_manifest:
            logger.warning(f"No usable manifest at s3://{handler.bucket_name}/{manifest_key}, "
                           f"no revision is active")
        manifest = {}

    if not objects:
        return []

    active_key = manifest.get("key")
    stable_key = alias_key(archive_key_prefix)
    revisions = []
    for obj in objects:
        key = obj.get("Key", "")
        if key == stable_key:
            continue
        revision = extract_revision(archive_key_prefix, key)
        if revision is None:
            continue
        revisions.append(Revision.from_s3_object(revision, obj, active_key=active_key))

    revisions.sort(key=lambda r: r.timestamp, reverse=True)
    logger.info(f"Found {len(revisions)} revisions under s3://{handler.bucket_name}/{archive_key_prefix}")
    return revisions
