"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``CONTENTCTL_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``contentctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from contentctl.config.discovery import find_config
from contentctl.config.models import (
    CacheConfig,
    ContentConfig,
    MarkupConfig,
    QueryConfig,
    ReadingConfig,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``contentctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ContentSettings(BaseSettings):
    """Resolved settings for the library and the CLI.

    Attributes:
        site_root: Directory holding the content root (parent of
            ``contentctl.toml``, or CWD if no config was found).
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CONTENTCTL_",
        "env_nested_delimiter": "__",
    }

    site_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    content: ContentConfig = Field(default_factory=ContentConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    markup: MarkupConfig = Field(default_factory=MarkupConfig)
    reading: ReadingConfig = Field(default_factory=ReadingConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)

    @property
    def content_root(self) -> Path:
        """Absolute-or-relative directory holding the per-type folders."""
        return self.site_root / self.content.root

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        site_root: Path | None = None,
        **cli_flags: Any,
    ) -> ContentSettings:
        """Construct settings from a CLI invocation.

        Discovers ``contentctl.toml`` via walk-up from *site_root* (or CWD),
        unless *config_path* names one explicitly.  *site_root* defaults to
        the config file's directory.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
            toml_path = p
        else:
            toml_path = find_config(site_root)

        resolved_root = site_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                site_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
