import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple

from fastboot_s3.models.activation import ActivationError, ActivationResult, OperationOutcome
from fastboot_s3.services.manifest import default_manifest_content
from fastboot_s3.utils.keys import alias_key, archive_key

logger = logging.getLogger(__name__)

WRITE_MANIFEST = "write_manifest"
COPY_ARCHIVE = "copy_archive"


def activate_revision(handler, revision_key: str, archive_key_prefix: str, manifest_key: str,
                      activate_manifest: bool = True, activate_zip: bool = False,
                      manifest_content: Optional[Callable[[str, str], str]] = None,
                      acl: Optional[str] = None) -> ActivationResult:
    """
    Point the deploy target at revision_key.

    Writes the manifest and/or copies the archive to its stable alias key,
    concurrently when both are enabled. Raises ActivationError if any step
    failed; steps that succeeded stay applied.
    """
    source_key = archive_key(archive_key_prefix, revision_key)
    steps: List[Tuple[str, str, Callable[[], object]]] = []

    if activate_manifest:
        generate = manifest_content or default_manifest_content
        body = generate(handler.bucket_name, source_key)
        steps.append((WRITE_MANIFEST, manifest_key,
                      lambda: handler.put_bytes(manifest_key, _encode(body), acl=acl,
                                                content_type="application/json")))

    if activate_zip:
        target_key = alias_key(archive_key_prefix)
        steps.append((COPY_ARCHIVE, target_key,
                      lambda: handler.copy(source_key, target_key, acl=acl)))

    result = ActivationResult(revision=revision_key)
    if not steps:
        logger.warning(f"Neither manifest nor zip activation enabled, revision {revision_key} not activated")
        return result

    with ThreadPoolExecutor(max_workers=len(steps)) as pool:
        futures = [(name, key, pool.submit(fn)) for name, key, fn in steps]

    for name, key, future in futures:
        error = future.exception()
        result.outcomes.append(OperationOutcome(name=name, key=key, ok=error is None, error=error))

    if not result.ok:
        first = result.failed[0].error
        logger.error(f"Activation of {revision_key} incomplete: "
                     f"{[o.name for o in result.failed]} failed, "
                     f"{[o.name for o in result.outcomes if o.ok]} applied")
        raise ActivationError(result) from first

    logger.info(f"Activated revision {revision_key} ({source_key})")
    return result


def _encode(body):
    if isinstance(body, bytes):
        return body
    return body.encode("utf-8")
