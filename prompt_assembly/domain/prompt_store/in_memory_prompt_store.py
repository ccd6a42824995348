from prompt_assembly.core.errors import TemplateNotFoundError


class InMemoryPromptStore:
    def __init__(self, templates: dict[str, str]):
        self._templates = dict(templates)

    def get_template(self, template_id: str) -> str:
        try:
            return self._templates[template_id]
        except KeyError:
            raise TemplateNotFoundError(template_id) from None

    def list_templates(self) -> dict[str, str]:
        return dict(self._templates)
