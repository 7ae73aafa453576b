import logging
from typing import Any, Dict, Optional

from fastboot_s3.models.config import ConfigurationError, PluginConfig
from fastboot_s3.services.activator import activate_revision
from fastboot_s3.services.revision_lister import list_revisions
from fastboot_s3.services.uploader import upload_archive
from fastboot_s3.utils.keys import resolve_prefixes
from fastboot_s3.utils.s3_handler import S3Handler

logger = logging.getLogger(__name__)

DEFAULT_NAME = "fastboot-app-server-aws"


class FastbootS3Plugin:
    """
    Deploy-pipeline hooks that keep fastboot app-server builds in S3.

    Every hook takes the deploy context, resolves configuration afresh and
    creates its own S3 client. Nothing is kept on the instance between hooks;
    the bucket is the only state.
    """

    def __init__(self, name: str = DEFAULT_NAME, options: Optional[Dict[str, Any]] = None):
        self.name = name
        self.options = dict(options or {})

    def read_config(self, context: Dict[str, Any]) -> PluginConfig:
        return PluginConfig.resolve(self.options, context)

    def _handler(self, config: PluginConfig) -> S3Handler:
        return S3Handler.from_config(config)

    def _prefixes(self, config: PluginConfig, context: Dict[str, Any]):
        archive_key_prefix, manifest_key = resolve_prefixes(
            config.prefix, config.archive_prefix, config.manifest_filename)
        # setup() normally put these in the context already
        if context.get("archive_key_prefix") is not None:
            archive_key_prefix = context["archive_key_prefix"]
        if context.get("manifest_key") is not None:
            manifest_key = context["manifest_key"]
        return archive_key_prefix, manifest_key

    def setup(self, context: Dict[str, Any]) -> Dict[str, str]:
        config = self.read_config(context)
        archive_key_prefix, manifest_key = resolve_prefixes(
            config.prefix, config.archive_prefix, config.manifest_filename)
        _check_alias_prefix(config, archive_key_prefix)
        logger.info(f"[{self.name}] archives under '{archive_key_prefix}', manifest at '{manifest_key}'")
        return {"archive_key_prefix": archive_key_prefix, "manifest_key": manifest_key}

    def upload(self, context: Dict[str, Any]) -> None:
        config = self.read_config(context)
        archive_path = context.get("archive_path") or context.get("fastboot_archive_path")
        if not archive_path:
            raise ConfigurationError("archive_path missing from deploy context")
        if not config.revision_key:
            raise ConfigurationError("No revision key to upload")

        archive_key_prefix, _ = self._prefixes(config, context)
        upload_archive(self._handler(config), archive_path, archive_key_prefix, config.revision_key)

    def activate(self, context: Dict[str, Any]):
        config = self.read_config(context)
        if not config.revision_key:
            raise ConfigurationError("No revision key to activate")

        archive_key_prefix, manifest_key = self._prefixes(config, context)
        _check_alias_prefix(config, archive_key_prefix)
        return activate_revision(
            self._handler(config),
            config.revision_key,
            archive_key_prefix,
            manifest_key,
            activate_manifest=config.activate_manifest,
            activate_zip=config.activate_zip,
            manifest_content=config.manifest_content,
            acl=config.acl,
        )

    def _list(self, context: Dict[str, Any]):
        config = self.read_config(context)
        archive_key_prefix, manifest_key = self._prefixes(config, context)
        return list_revisions(self._handler(config), archive_key_prefix, manifest_key,
                              warn_on_missing_manifest=config.warn_on_missing_manifest)

    def fetch_revisions(self, context: Dict[str, Any]) -> Dict[str, Any]:
        return {"revisions": [r.to_dict() for r in self._list(context)]}

    def fetch_initial_revisions(self, context: Dict[str, Any]) -> Dict[str, Any]:
        return {"initial_revisions": [r.to_dict() for r in self._list(context)]}


def _check_alias_prefix(config: PluginConfig, archive_key_prefix: str) -> None:
    # the alias key is derived from the prefix; without one it would be ".zip"
    if config.activate_zip and not archive_key_prefix:
        raise ConfigurationError("activate_zip needs a prefix or archive_prefix")


def create_deploy_plugin(options: Optional[Dict[str, Any]] = None) -> FastbootS3Plugin:
    options = dict(options or {})
    name = options.pop("name", None) or DEFAULT_NAME
    return FastbootS3Plugin(name=name, options=options)
