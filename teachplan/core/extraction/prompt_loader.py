"""Prompt configuration loader.

Loads YAML instruction templates from config/templates/ and renders
the standards extraction instructions for a subject and grade.
"""
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


class PromptLoader:
    """Load prompt configurations from YAML files."""

    _instance: Optional["PromptLoader"] = None

    def __init__(self, templates_dir: Path = None):
        """Initialize loader.

        Args:
            templates_dir: Path to templates directory.
                           Defaults to teachplan/config/templates/
        """
        if templates_dir is None:
            templates_dir = Path(__file__).parents[2] / "config" / "templates"
        self._templates_dir = templates_dir
        self._cache: Dict[str, Dict[str, Any]] = {}

    @classmethod
    def get_instance(cls) -> "PromptLoader":
        """Get singleton instance for shared access."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton (for testing)."""
        cls._instance = None

    def load(self, name: str) -> Dict[str, Any]:
        """Load a template by name.

        Args:
            name: Template name (e.g., "standards")

        Returns:
            Dictionary with prompt configuration

        Raises:
            FileNotFoundError: If template file not found
        """
        if name in self._cache:
            return self._cache[name]

        path = self._templates_dir / f"{name}.yaml"
        if not path.exists():
            raise FileNotFoundError(f"Prompt template not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        self._cache[name] = config
        return config

    def get_system_prompt(self, name: str = "standards") -> str:
        return self.load(name).get("system_prompt", "")

    def get_schema(self, name: str = "standards") -> Dict[str, Any]:
        """Output schema declared alongside the prompt."""
        return self.load(name).get("schema", {})

    def build_standards_instructions(
        self,
        subject: str,
        grade: str,
        scope: Optional[str] = None,
    ) -> str:
        """Render extraction instructions.

        Args:
            subject: Subject name, used as the only subject to extract
            grade: Grade value ("1", "2", "3")
            scope: Optional content-scope filter, forwarded verbatim

        Returns:
            Instruction text
        """
        template = self.load("standards")
        scope_clause = ""
        if scope and scope.strip():
            scope_clause = template.get("scope_clause", "").replace("{scope}", scope.strip())

        # replace() rather than format() so braces in user input stay literal
        prompt = template.get("user_prompt", "")
        for key, value in (("{subject}", subject), ("{grade}", grade), ("{scope_clause}", scope_clause)):
            prompt = prompt.replace(key, value)
        return prompt

    def clear_cache(self) -> None:
        """Clear the configuration cache."""
        self._cache.clear()


def get_prompt_loader() -> PromptLoader:
    """Get the singleton PromptLoader instance."""
    return PromptLoader.get_instance()
