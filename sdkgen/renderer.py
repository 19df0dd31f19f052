"""Template rendering for the shared Java sources"""

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

logger = logging.getLogger(__name__)


class Renderer:
    """Renders Jinja2 templates into the output tree.

    Undefined variables are errors: a context that does not match the
    template's expected shape aborts the run instead of emitting blanks.
    """

    def __init__(self, templates_dir: Path):
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render(self, template_name: str, context: dict) -> str:
        return self.env.get_template(template_name).render(**context)

    def render_file(self, template_name: str, context: dict, out_path: Path) -> Path:
        source = self.render(template_name, context)
        with out_path.open("w", encoding="utf-8") as f:
            f.write(source)
        logger.debug("Rendered %s -> %s", template_name, out_path)
        return out_path
