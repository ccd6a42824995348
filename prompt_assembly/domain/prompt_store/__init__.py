"""This module handles reading prompt templates from storage."""
from .prompt_store import PromptStore
from .file_system_prompt_store import FilesystemPromptStore
from .in_memory_prompt_store import InMemoryPromptStore
