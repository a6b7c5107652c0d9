"""
TemplateManager - Handles circuit template discovery, save, and load.

Templates are stored as JSON files in the circuit interchange format,
plus metadata fields (id, name, description, category, difficulty).
Built-in templates ship with the package; user templates are saved to
~/.circuitforge/templates/.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from circuitforge.models.template import TemplateData

from .file_controller import validate_circuit_data

logger = logging.getLogger(__name__)

BUILTIN_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
USER_TEMPLATES_DIR = Path.home() / ".circuitforge" / "templates"


class TemplateManager:
    """Manages circuit template discovery, saving, and loading."""

    def __init__(
        self,
        builtin_dir: Optional[Path] = None,
        user_dir: Optional[Path] = None,
    ):
        self.builtin_dir = Path(builtin_dir) if builtin_dir else BUILTIN_TEMPLATES_DIR
        self.user_dir = Path(user_dir) if user_dir else USER_TEMPLATES_DIR

    def list_templates(self) -> list[TemplateData]:
        """Return all available templates (built-in, then user), sorted by category then name.

        A user template with the same id as a built-in one replaces it.
        """
        templates: dict[str, TemplateData] = {}
        for template in self._scan_directory(self.builtin_dir):
            templates[template.template_id] = template
        for template in self._scan_directory(self.user_dir):
            templates[template.template_id] = template
        return sorted(templates.values(), key=lambda t: (t.category, t.name))

    def _scan_directory(self, directory: Path) -> list[TemplateData]:
        if not directory.is_dir():
            return []
        templates = []
        for filepath in sorted(directory.glob("*.json")):
            try:
                templates.append(self._read_template(filepath))
            except (OSError, ValueError, KeyError) as e:
                # json.JSONDecodeError is a ValueError
                logger.warning("Failed to read template %s: %s", filepath, e)
        return templates

    @staticmethod
    def _read_template(filepath: Path) -> TemplateData:
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        validate_circuit_data(data)
        data.setdefault("id", filepath.stem)
        return TemplateData.from_dict(data)

    def get_template(self, template_id: str) -> Optional[TemplateData]:
        for template in self.list_templates():
            if template.template_id == template_id:
                return template
        return None

    def load_template(self, template_id: str) -> TemplateData:
        """
        Return the template with the given id.

        Raises:
            KeyError: If no template has that id.
        """
        template = self.get_template(template_id)
        if template is None:
            raise KeyError(f"Unknown template '{template_id}'")
        return template

    def save_template(self, template: TemplateData) -> Path:
        """Save a template into the user directory, overwriting any file with the same id."""
        self.user_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.user_dir / f"{template.template_id}.json"
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(template.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info("Saved template %s to %s", template.template_id, filepath)
        return filepath

    def delete_template(self, template_id: str) -> bool:
        """Delete a user template. Built-in templates cannot be deleted."""
        filepath = self.user_dir / f"{template_id}.json"
        if not filepath.exists():
            return False
        filepath.unlink()
        return True
