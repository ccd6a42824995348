from typing import Protocol


class PromptStore(Protocol):
    def get_template(self, template_id: str) -> str:
        ...

    def list_templates(self) -> dict[str, str]:
        ...
