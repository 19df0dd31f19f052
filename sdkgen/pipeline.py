"""Generation pipeline: class sources first, then the shared Types.java"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .class_generator import ClassGenerator
from .common_generator import CommonGenerator
from .config import GeneratorConfig
from .context import GenerationContext, GenerationSnapshot
from .marshal_generator import MarshalGenerator
from .naming import enum_of_wire
from .renderer import Renderer
from .type_mapper import TypeMapper
from .types import ApiSchema

logger = logging.getLogger(__name__)

TYPES_TEMPLATE = "Types.java.jinja"
API_VERSION_TEMPLATE = "APIVersion.java.jinja"


@dataclass
class GenerationResult:
    """Files written by a run and the registries they were generated from"""
    written: list[Path] = field(default_factory=list)
    snapshot: Optional[GenerationSnapshot] = None
    types_context: dict = field(default_factory=dict)


class Pipeline:
    """Runs one generation over a schema.

    Phase 1 emits every class, filling the GenerationContext. The context is
    then frozen and phase 2 builds Types.java from the snapshot alone.
    """

    def __init__(self, schema: ApiSchema, config: GeneratorConfig):
        self.schema = schema
        self.config = config
        self.context = GenerationContext()
        self.common = CommonGenerator(schema.releases, config.licence_header)
        self.mapper = TypeMapper(self.context, config.enum_default_overrides)
        self.class_generator = ClassGenerator(self.mapper, self.common, config.java_package)
        self.renderer = Renderer(config.templates_dir)

    def emit_classes(self, folder: Path, written: list[Path]):
        # The object kinds are switched on when decoding event snapshots
        self.mapper.java_type(TypeMapper.object_kind_enum(self.schema.classes))
        for cls in self.schema.classes:
            written.append(self.class_generator.write(cls, folder))

    def shared_context(self) -> dict:
        return {
            "licence": self.config.licence_header,
            "java_package": self.config.java_package,
        }

    def api_version_context(self) -> dict:
        releases = [
            {
                "name_uppercase": enum_of_wire(r.code_name),
                "version": r.version,
                "branding": r.branding,
            }
            for r in self.schema.releases
        ]
        return {**self.shared_context(), "releases": releases}

    def copy_license(self, written: list[Path]):
        resources = self.config.resources_dir
        resources.mkdir(parents=True, exist_ok=True)
        target = resources / "LICENSE"
        shutil.copyfile(self.config.license_file, target)
        written.append(target)

    def run(self) -> GenerationResult:
        folder = self.config.class_dir
        folder.mkdir(parents=True, exist_ok=True)
        result = GenerationResult()

        try:
            self.emit_classes(folder, result.written)
            logger.info("Emitted %d classes", len(self.schema.classes))

            result.snapshot = self.context.freeze()
            marshal = MarshalGenerator(result.snapshot, self.common)
            result.types_context = marshal.generate(self.schema.errors)

            types_context = {**self.shared_context(), **result.types_context}
            result.written.append(
                self.renderer.render_file(TYPES_TEMPLATE, types_context, folder / "Types.java"))
            result.written.append(
                self.renderer.render_file(API_VERSION_TEMPLATE, self.api_version_context(),
                                          folder / "APIVersion.java"))

            if self.config.license_file:
                self.copy_license(result.written)
        except Exception:
            # Artifacts written so far stay on disk
            logger.error("Generation failed; %d files were already written", len(result.written))
            for path in result.written:
                logger.debug("Left in place: %s", path)
            raise

        logger.info(
            "Generated %d files: %d types, %d enums, %d errors",
            len(result.written), len(result.types_context["types"]),
            len(result.types_context["enums"]), len(result.types_context["errors"]),
        )
        return result


def generate(schema: ApiSchema, config: GeneratorConfig) -> GenerationResult:
    return Pipeline(schema, config).run()
