from pathlib import Path

from prompt_assembly.core.errors import TemplateNotFoundError

TEMPLATE_SUFFIX = ".md"


class FilesystemPromptStore:
    """
    Read-only PromptStore backed by a local filesystem.

    Expected layout:
        <base_dir>/
          templates/
            <template_id>.md
    """

    def __init__(self, *, base_dir: Path) -> None:
        self._base_dir = base_dir

    @property
    def templates_dir(self) -> Path:
        return self._base_dir / "templates"

    def _path(self, template_id: str) -> Path:
        path = self.templates_dir / f"{template_id}{TEMPLATE_SUFFIX}"
        # Ids like "../secrets" must not escape the templates directory.
        if path.resolve().parent != self.templates_dir.resolve():
            raise TemplateNotFoundError(template_id)
        return path

    def get_template(self, template_id: str) -> str:
        path = self._path(template_id)
        if not path.is_file():
            raise TemplateNotFoundError(template_id)
        return path.read_text(encoding="utf-8")

    def list_templates(self) -> dict[str, str]:
        if not self.templates_dir.is_dir():
            return {}
        return {
            path.stem: path.read_text(encoding="utf-8")
            for path in sorted(self.templates_dir.glob(f"*{TEMPLATE_SUFFIX}"))
            if path.is_file()
        }
