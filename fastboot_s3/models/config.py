import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from fastboot_s3.Keywords import Keywords

ManifestContent = Callable[[str, str], str]


class ConfigurationError(ValueError):
    """Raised when a hook is missing configuration it cannot run without."""


def _region() -> Optional[str]:
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION")


def _endpoint_url() -> Optional[str]:
    return os.environ.get("AWS_ENDPOINT_URL_S3")


# defaults computed from the deploy context the pipeline hands to every hook
def default_archive_prefix(context: Dict[str, Any]) -> Optional[str]:
    return context.get("fastboot_archive_prefix")


def default_revision_key(context: Dict[str, Any]) -> Optional[str]:
    command_options = context.get("command_options") or {}
    revision_data = context.get("revision_data") or {}
    return (command_options.get("revision")
            or revision_data.get("revision_key")
            or context.get("revision_key"))


def default_manifest_content(context: Dict[str, Any]) -> Optional[ManifestContent]:
    # set up by the fastboot app-server plugin earlier in the pipeline
    return context.get("fastboot_downloader_manifest_content")


DEFAULTS: Dict[str, Any] = {
    "archive_prefix": default_archive_prefix,
    "revision_key": default_revision_key,
    "manifest_content": default_manifest_content,
    "manifest_filename": Keywords.MANIFEST_FILENAME.value,
    "activate_manifest": True,
    "activate_zip": False,
    "acl": Keywords.PUBLIC_READ.value,
    "warn_on_missing_manifest": False,
}

REQUIRED = ("bucket", "region")


@dataclass
class PluginConfig:
    bucket: str
    region: str
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    session_token: Optional[str] = None
    profile: Optional[str] = None
    endpoint_url: Optional[str] = None
    prefix: Optional[str] = None
    archive_prefix: Optional[str] = None
    manifest_filename: str = Keywords.MANIFEST_FILENAME.value
    revision_key: Optional[str] = None
    manifest_content: Optional[ManifestContent] = field(default=None, repr=False)
    activate_manifest: bool = True
    activate_zip: bool = False
    acl: Optional[str] = Keywords.PUBLIC_READ.value
    warn_on_missing_manifest: bool = False

    @classmethod
    def resolve(cls, options: Optional[Dict[str, Any]], context: Optional[Dict[str, Any]] = None):
        """
        Build the configuration for one hook invocation.

        Explicit plugin options win; otherwise the default for the field is used,
        calling it with the deploy context when it is a function. Region and
        endpoint fall back to the standard AWS environment variables.
        """
        options = options or {}
        context = context or {}

        def read(name: str):
            if options.get(name) is not None:
                return options[name]
            default = DEFAULTS.get(name)
            if callable(default):
                return default(context)
            return default

        values = {
            "bucket": read("bucket"),
            "region": read("region") or _region(),
            "access_key_id": read("access_key_id"),
            "secret_access_key": read("secret_access_key"),
            "session_token": read("session_token"),
            "profile": read("profile"),
            "endpoint_url": read("endpoint_url") or _endpoint_url(),
            "prefix": read("prefix"),
            "archive_prefix": read("archive_prefix"),
            "manifest_filename": read("manifest_filename"),
            "revision_key": read("revision_key"),
            "manifest_content": read("manifest_content"),
            "activate_manifest": bool(read("activate_manifest")),
            "activate_zip": bool(read("activate_zip")),
            "acl": read("acl"),
            "warn_on_missing_manifest": bool(read("warn_on_missing_manifest")),
        }

        missing = [name for name in REQUIRED if not values[name]]
        if missing:
            raise ConfigurationError(f"Missing required config: {', '.join(missing)}")

        return cls(**values)
