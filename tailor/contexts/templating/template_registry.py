from pathlib import Path
from typing import Dict

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound

TEMPLATES_PATH = Path(__file__).parent / "templates"


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for LaTeX generation.

    Templates are stored in tailor/contexts/templating/templates/{name}.tex.jinja
    and use custom delimiters to avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding *.tex.jinja files. Defaults to
                           tailor/contexts/templating/templates/
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = templates_path
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            # Custom delimiters to avoid LaTeX brace conflicts
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            # Preserve whitespace (important for LaTeX)
            trim_blocks=False,
            lstrip_blocks=False,
            keep_trailing_newline=False,
        )

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            name: Template name without extension (e.g., 'basic_document')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
        """
        if name in self._cache:
            return self._cache[name]

        template_file = f"{name}.tex.jinja"

        try:
            template = self.env.get_template(template_file)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template '{name}' not found at {self.templates_path / template_file}"
            ) from e

        self._cache[name] = template
        return template
