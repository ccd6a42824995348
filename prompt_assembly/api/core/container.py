# --------------------------------
# DI container
# --------------------------------
from functools import lru_cache

from prompt_assembly.config import Settings, assembler_config_from_settings, settings
from prompt_assembly.runtime.prompt_service import PromptService


class Container:
    def __init__(self, app_settings: Settings = settings):
        self._settings = app_settings
        self._prompt_service = PromptService.from_config(
            assembler_config_from_settings(app_settings)
        )

    @property
    def prompt_service(self) -> PromptService:
        return self._prompt_service

    def reload(self) -> None:
        """Re-read configuration and swap in a fresh assembler."""
        self._prompt_service.swap_config(assembler_config_from_settings(self._settings))


@lru_cache
def get_container():
    return Container()
