import re
from typing import Optional, Tuple

from fastboot_s3.Keywords import Keywords

SEPARATOR = "/"
ZIP_SUFFIX = Keywords.ZIP_SUFFIX.value


def join_key(*segments: Optional[str]) -> str:
    """Join the non-empty segments with '/'; empty or missing ones are skipped."""
    return SEPARATOR.join(s for s in segments if s)


def resolve_prefixes(prefix: Optional[str], archive_prefix: Optional[str],
                     manifest_filename: Optional[str]) -> Tuple[str, str]:
    """
    Compute the archive key prefix and the full manifest key for a deploy target.

    >>> resolve_prefixes("app", "builds/", "fastboot-deploy-info.json")
    ('app/builds/', 'app/fastboot-deploy-info.json')
    """
    return join_key(prefix, archive_prefix), join_key(prefix, manifest_filename)


def archive_key(archive_key_prefix: str, revision: str) -> str:
    return f"{archive_key_prefix}{revision}{ZIP_SUFFIX}"


def alias_key(archive_key_prefix: str) -> str:
    """
    Stable key mirroring the active archive, e.g. 'app/dist-' -> 'app/dist.zip'.
    """
    base = archive_key_prefix
    if base.endswith("-") or base.endswith(SEPARATOR):
        base = base[:-1]
    return f"{base}{ZIP_SUFFIX}"


def revision_pattern(archive_key_prefix: str) -> "re.Pattern[str]":
    # prefix may contain regex metacharacters ('.', '+', ...)
    return re.compile(re.escape(archive_key_prefix) + r"([^.]*)" + re.escape(ZIP_SUFFIX))


def extract_revision(archive_key_prefix: str, key: str) -> Optional[str]:
    """Return the revision id encoded in `key`, or None when the key is not a build archive."""
    match = revision_pattern(archive_key_prefix).fullmatch(key)
    if not match:
        return None
    return match.group(1)
