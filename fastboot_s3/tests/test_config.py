import pytest

from fastboot_s3.models.config import ConfigurationError, PluginConfig


def test_defaults():
    config = PluginConfig.resolve({"bucket": "b", "region": "eu-west-1"}, {})
    assert config.manifest_filename == "fastboot-deploy-info.json"
    assert config.activate_manifest is True
    assert config.activate_zip is False
    assert config.acl == "public-read"
    assert config.warn_on_missing_manifest is False
    assert config.prefix is None


@pytest.mark.parametrize("options", [
    {"region": "eu-west-1"},
    {"bucket": "b"},
    {},
])
def test_missing_required_fields(options, monkeypatch):
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.delenv("AWS_DEFAULT_REGION", raising=False)
    with pytest.raises(ConfigurationError):
        PluginConfig.resolve(options, {})


def test_region_from_environment(monkeypatch):
    monkeypatch.setenv("AWS_REGION", "ap-southeast-2")
    config = PluginConfig.resolve({"bucket": "b"}, {})
    assert config.region == "ap-southeast-2"


def test_context_defaults():
    generator = lambda bucket, key: "{}"
    context = {
        "fastboot_archive_prefix": "dist-",
        "fastboot_downloader_manifest_content": generator,
        "revision_data": {"revision_key": "from-data"},
    }
    config = PluginConfig.resolve({"bucket": "b", "region": "r"}, context)
    assert config.archive_prefix == "dist-"
    assert config.manifest_content is generator
    assert config.revision_key == "from-data"


def test_revision_key_precedence():
    context = {
        "command_options": {"revision": "from-cli"},
        "revision_data": {"revision_key": "from-data"},
        "revision_key": "from-context",
    }
    base = {"bucket": "b", "region": "r"}
    assert PluginConfig.resolve(base, context).revision_key == "from-cli"

    context["command_options"] = {}
    assert PluginConfig.resolve(base, context).revision_key == "from-data"

    del context["revision_data"]
    assert PluginConfig.resolve(base, context).revision_key == "from-context"

    assert PluginConfig.resolve(dict(base, revision_key="explicit"), context).revision_key == "explicit"


def test_explicit_options_override_context():
    config = PluginConfig.resolve(
        {"bucket": "b", "region": "r", "archive_prefix": "builds/", "activate_zip": True},
        {"fastboot_archive_prefix": "dist-"},
    )
    assert config.archive_prefix == "builds/"
    assert config.activate_zip is True
