"""Application settings and assembler configuration loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from prompt_assembly.core.errors import ConfigurationError
from prompt_assembly.domain.assembler import AssemblerConfig, ContextSettings
from prompt_assembly.domain.prompt_store import FilesystemPromptStore, PromptStore


class Settings(BaseSettings):
    # Assembler configuration file (JSON: templates, variables, contextSettings)
    config_path: Optional[str] = None

    # Filesystem template store root (holds templates/<id>.md), merged over the file's catalog
    store_dir: Optional[str] = None

    # Context policy used when no config file is given
    max_tokens: int = 2000
    include_history: bool = True
    history_length: int = 5

    class Config:
        env_file = ".env"
        env_prefix = "PROMPT_ASSEMBLY_"


settings = Settings()


def load_assembler_config(path: str | Path) -> AssemblerConfig:
    """Load an assembler configuration from a JSON file.

    Args:
        path: JSON file shaped like ``{"templates": {...}, "variables": {...},
            "contextSettings": {...}}``.

    Returns:
        Validated, immutable AssemblerConfig.

    Raises:
        ConfigurationError: If the file is missing, not JSON, or invalid.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError(
            f"Config file '{path}' not found. Check the path or set PROMPT_ASSEMBLY_CONFIG_PATH."
        ) from None
    except OSError as exc:
        raise ConfigurationError(f"Failed to read config file '{path}': {exc}") from exc

    try:
        payload: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Config file '{path}' is not valid JSON: {exc}") from exc

    try:
        return AssemblerConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Config file '{path}' is invalid: {exc}") from exc


def build_assembler_config(store: PromptStore, base: AssemblerConfig | None = None) -> AssemblerConfig:
    """Snapshot a template store's catalog into a configuration.

    Templates from the store win over same-named templates in ``base``.
    """
    base = base or AssemblerConfig()
    return base.model_copy(update={"templates": {**base.templates, **store.list_templates()}})


def assembler_config_from_settings(app_settings: Settings) -> AssemblerConfig:
    if app_settings.config_path:
        config = load_assembler_config(app_settings.config_path)
    else:
        try:
            context_settings = ContextSettings(
                max_tokens=app_settings.max_tokens,
                include_history=app_settings.include_history,
                history_length=app_settings.history_length,
            )
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid context settings: {exc}") from exc
        config = AssemblerConfig(context_settings=context_settings)

    if app_settings.store_dir:
        store_dir = Path(app_settings.store_dir)
        if not store_dir.is_dir():
            raise ConfigurationError(f"Template store directory '{store_dir}' does not exist.")
        config = build_assembler_config(FilesystemPromptStore(base_dir=store_dir), config)

    return config
