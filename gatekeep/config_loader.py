"""
YAML registration loader.

Loads resource type registrations from YAML files so wiring can live
next to the rest of an app's configuration:

    resources:
      - type: post
        actions: [read, write, comment]
        provider: myapp.acl:post_acl
      - type: page
        actions: [read]
        acl:
          allow:
            anonymous: [read]
          deny:
            "org:666": [read]

A resource names either a provider ("module:attribute") or a static acl,
never both.
"""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from gatekeep.configuration import Configuration
from gatekeep.core.acl import AccessList, EntryListBuilder
from gatekeep.core.authorizer import Authorizer
from gatekeep.core.errors import ConfigurationError

if TYPE_CHECKING:
    from gatekeep.config import Settings

logger = logging.getLogger(__name__)


# =============================================================================
# File Schema
# =============================================================================


class StaticAcl(BaseModel):
    """An ACL written out in the file: SID -> actions."""

    allow: dict[str, list[str]] = Field(default_factory=dict)
    deny: dict[str, list[str]] = Field(default_factory=dict)

    def to_access_list(self) -> AccessList:
        builder = EntryListBuilder()
        for sid, actions in self.allow.items():
            builder.allow(sid, actions)
        for sid, actions in self.deny.items():
            builder.deny(sid, actions)
        return builder.build()


class ResourceSpec(BaseModel):
    """One entry of the resources list."""

    type: str
    actions: list[str]
    provider: str | None = None
    acl: StaticAcl | None = None

    @model_validator(mode="after")
    def _one_acl_source(self) -> ResourceSpec:
        if (self.provider is None) == (self.acl is None):
            raise ValueError(f"resource '{self.type}' needs exactly one of 'provider' or 'acl'")
        return self


class RegistrationFile(BaseModel):
    resources: list[ResourceSpec] = Field(default_factory=list)


# =============================================================================
# Loader
# =============================================================================


class ConfigLoader:
    """
    Loads registration files into a Configuration.

    Usage:
        loader = ConfigLoader()
        loader.load_directory("config/authz")
        authz = loader.configuration.build()
    """

    def __init__(self, configuration: Configuration | None = None):
        self.configuration = configuration or Configuration()

    def load_file(self, path: Path | str) -> int:
        """
        Load one YAML file.

        Returns:
            Number of resource types registered from the file
        """
        path = Path(path)
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Invalid registration file '{path}': {e}") from e

        try:
            document = RegistrationFile.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid registration file '{path}': {e}") from e

        for spec in document.resources:
            self.configuration.register_resource(spec.type, spec.actions, self._provider(spec))

        logger.info(f"Loaded {len(document.resources)} resource type(s) from {path}")
        return len(document.resources)

    def load_directory(self, directory: Path | str) -> int:
        """Load every *.yaml and *.yml file in a directory, in name order."""
        directory = Path(directory)
        if not directory.is_dir():
            raise ConfigurationError(f"Registration directory '{directory}' does not exist")

        paths = sorted([*directory.glob("*.yaml"), *directory.glob("*.yml")])
        return sum(self.load_file(path) for path in paths)

    def _provider(self, spec: ResourceSpec) -> Callable[..., AccessList]:
        if spec.acl is not None:
            acl = spec.acl.to_access_list()

            def static_provider(resource: Any, **context: Any) -> AccessList:
                return acl

            return static_provider

        return import_provider(spec.provider, spec.type)


def import_provider(path: str, resource_type: str = "") -> Callable[..., AccessList]:
    """Resolve a "package.module:attribute" path to a callable."""
    module_name, _, attribute = path.partition(":")
    if not module_name or not attribute:
        raise ConfigurationError(
            f"'{resource_type}' resource provider '{path}' should look like 'module:attribute'"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(
            f"'{resource_type}' resource provider module '{module_name}' cannot be imported: {e}"
        ) from e

    provider = getattr(module, attribute, None)
    if provider is None:
        raise ConfigurationError(
            f"'{resource_type}' resource provider '{attribute}' not found in '{module_name}'"
        )
    if not callable(provider):
        raise ConfigurationError(
            f"'{resource_type}' resource provider '{path}' is not callable"
        )
    return provider


def load_authorizer(
    path: Path | str | None = None,
    settings: Settings | None = None,
) -> Authorizer:
    """
    Convenience function: build an Authorizer from a file or directory.

    Falls back to settings.config_dir when no path is given.
    """
    if path is None:
        from gatekeep.config import get_settings
        settings = settings or get_settings()
        if not settings.config_dir:
            raise ConfigurationError("No registration path given and GATEKEEP_CONFIG_DIR is not set")
        path = settings.config_dir

    path = Path(path)
    loader = ConfigLoader()
    if path.is_dir():
        loader.load_directory(path)
    else:
        loader.load_file(path)
    return loader.configuration.build(settings=settings)
