"""
Tests for settings, the Configuration builder and YAML registration files.
"""

import textwrap

import pytest
import yaml

from gatekeep import ConfigurationError, UsageError, authorizer
from gatekeep.config import Settings
from gatekeep.config_loader import ConfigLoader, import_provider, load_authorizer
from gatekeep.configuration import Configuration

from tests.blog import Post, User, post_acl


def write(path, text):
    path.write_text(textwrap.dedent(text))
    return path


# =============================================================================
# Settings Tests
# =============================================================================


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GATEKEEP_EXPLAIN_DENIALS", raising=False)
        monkeypatch.delenv("GATEKEEP_ENVIRONMENT", raising=False)
        settings = Settings(_env_file=None)

        assert settings.explain_denials is True
        assert settings.config_dir is None
        assert not settings.is_production

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("GATEKEEP_EXPLAIN_DENIALS", "false")
        monkeypatch.setenv("GATEKEEP_ENVIRONMENT", "production")
        settings = Settings(_env_file=None)

        assert settings.explain_denials is False
        assert settings.is_production


# =============================================================================
# Configuration Tests
# =============================================================================


class TestConfiguration:
    def test_register_is_chainable(self):
        config = (
            Configuration()
            .register_resource("post", ["read"], post_acl)
            .register_resource("page", ["read"], post_acl)
        )
        assert [r.resource_type for r in config.resources] == ["post", "page"]

    def test_invalid_registration_fails_immediately(self):
        with pytest.raises(ConfigurationError):
            Configuration().register_resource("post", [], post_acl)

    def test_authorizer_factory(self):
        authz = authorizer(
            lambda c: c.register_resource("post", ["read"], post_acl),
            settings=Settings(),
        )
        assert authz.has_resource_type("post")


# =============================================================================
# YAML Loader Tests
# =============================================================================


class TestConfigLoader:
    def test_static_acl(self, tmp_path):
        path = write(tmp_path / "authz.yaml", """
            resources:
              - type: page
                actions: [read, edit]
                acl:
                  allow:
                    anonymous: [read]
                    authenticated: [read, edit]
                  deny:
                    "org:666": [read, edit]
        """)
        authz = load_authorizer(path, settings=Settings())
        page = Post(id="p", author_id="a", resource_type="page")

        assert authz.is_authorized(User(id="u", sids=["anonymous"]), page, "read")
        assert authz.is_authorized(User(id="u", sids=["authenticated"]), page, "edit")
        assert not authz.is_authorized(User(id="u", sids=["authenticated", "org:666"]), page, "read")

    def test_provider_import_path(self, tmp_path):
        path = write(tmp_path / "authz.yml", """
            resources:
              - type: post
                actions: [read, write, comment, delete]
                provider: tests.blog:post_acl
        """)
        authz = load_authorizer(path, settings=Settings())
        post = Post(id="p", author_id="a")

        assert authz.allowed_actions(User(id="u", sids=["authenticated"]), post) == {"read", "comment"}

    def test_directory(self, tmp_path):
        write(tmp_path / "a.yaml", """
            resources:
              - type: post
                actions: [read]
                provider: tests.blog:post_acl
        """)
        write(tmp_path / "b.yml", """
            resources:
              - type: page
                actions: [read]
                acl:
                  allow: {anonymous: [read]}
        """)
        write(tmp_path / "notes.txt", "ignored")

        loader = ConfigLoader()
        assert loader.load_directory(tmp_path) == 2
        authz = loader.configuration.build(settings=Settings())
        assert sorted(authz.resource_types) == ["page", "post"]

    def test_settings_config_dir(self, tmp_path):
        write(tmp_path / "authz.yaml", """
            resources:
              - type: page
                actions: [read]
                acl:
                  allow: {anonymous: [read]}
        """)
        authz = load_authorizer(settings=Settings(config_dir=str(tmp_path)))
        assert authz.has_resource_type("page")

    def test_no_path(self):
        with pytest.raises(ConfigurationError, match="GATEKEEP_CONFIG_DIR"):
            load_authorizer(settings=Settings(config_dir=None))

    def test_duplicate_types_across_files(self, tmp_path):
        for name in ("a.yaml", "b.yaml"):
            write(tmp_path / name, """
                resources:
                  - type: page
                    actions: [read]
                    acl:
                      allow: {anonymous: [read]}
            """)
        with pytest.raises(ConfigurationError, match="registered multiple times"):
            load_authorizer(tmp_path, settings=Settings())

    @pytest.mark.parametrize("body", [
        # neither provider nor acl
        """
        resources:
          - type: page
            actions: [read]
        """,
        # both
        """
        resources:
          - type: page
            actions: [read]
            provider: tests.blog:post_acl
            acl: {allow: {anonymous: [read]}}
        """,
        # actions missing
        """
        resources:
          - type: page
            provider: tests.blog:post_acl
        """,
    ])
    def test_invalid_documents(self, tmp_path, body):
        path = write(tmp_path / "bad.yaml", body)
        with pytest.raises(ConfigurationError, match="Invalid registration file"):
            ConfigLoader().load_file(path)

    def test_empty_actions_in_file(self, tmp_path):
        path = write(tmp_path / "bad.yaml", """
            resources:
              - type: page
                actions: []
                acl: {allow: {anonymous: [read]}}
        """)
        with pytest.raises(ConfigurationError, match="Empty possible actions"):
            ConfigLoader().load_file(path)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ConfigurationError, match="does not exist"):
            ConfigLoader().load_directory(tmp_path / "nope")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Invalid registration file"):
            ConfigLoader().load_file(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = write(tmp_path / "broken.yaml", """
            resources:
              - type: page
                actions: [read
        """)
        with pytest.raises(ConfigurationError, match="Invalid registration file") as exc:
            ConfigLoader().load_file(path)
        assert isinstance(exc.value.__cause__, yaml.YAMLError)


class TestImportProvider:
    def test_resolves(self):
        assert import_provider("tests.blog:post_acl", "post") is post_acl

    @pytest.mark.parametrize("path, match", [
        ("tests.blog.post_acl", "should look like 'module:attribute'"),
        ("tests.nonexistent_module:acl", "cannot be imported"),
        ("tests.blog:missing", "not found"),
        ("tests.blog:__doc__", "not callable"),
    ])
    def test_errors(self, path, match):
        with pytest.raises(ConfigurationError, match=match):
            import_provider(path, "post")

    def test_static_provider_is_checked_like_any_other(self, tmp_path):
        path = write(tmp_path / "authz.yaml", """
            resources:
              - type: page
                actions: [read]
                acl: {allow: {anonymous: [read]}}
        """)
        authz = load_authorizer(path, settings=Settings())
        with pytest.raises(UsageError, match="not registered as possible"):
            authz.is_authorized(User(id="u", sids=["anonymous"]), Post(id="p", author_id="a", resource_type="page"), "edit")
