"""Class Generator - generates one Java source per API class"""

import logging
from pathlib import Path

from .common_generator import CommonGenerator
from .method_generator import MethodGenerator
from .naming import class_case, camel_case
from .record_generator import RecordGenerator, SyntheticField, walk
from .type_mapper import TypeMapper
from .types import ApiClass, Primitive, STRING

logger = logging.getLogger(__name__)

EVENT_CLASS = "event"
EVENT_KIND_FIELD = "class"
SNAPSHOT_FIELD = "snapshot"

IMPORTS = [
    "import com.fasterxml.jackson.annotation.JsonProperty;",
    "import com.fasterxml.jackson.core.type.TypeReference;",
    "import com.xensource.xenapi.Types.BadServerResponse;",
    "import com.xensource.xenapi.Types.XenAPIException;",
    "import java.io.PrintWriter;",
    "import java.io.StringWriter;",
    "import java.util.*;",
    "import java.io.IOException;",
]


def is_event_class(name: str) -> bool:
    return name.lower() == EVENT_CLASS


class ClassGenerator:
    """Generates reference wrapper classes with their Record and methods"""

    def __init__(self, mapper: TypeMapper, common: CommonGenerator, java_package: str):
        self.mapper = mapper
        self.common = common
        self.java_package = java_package
        self.records = RecordGenerator(mapper, common)
        self.methods = MethodGenerator(mapper, common)

    def event_fields(self, cls: ApiClass) -> list[SyntheticField]:
        """Members of Event.Record that the datamodel does not declare"""
        fields = []
        if not any(rf.path == EVENT_KIND_FIELD for rf in walk(cls.contents)):
            kind_type = Primitive(STRING)
            fields.append(SyntheticField(
                name=camel_case(EVENT_KIND_FIELD),
                wire_name=EVENT_KIND_FIELD,
                java_type=self.mapper.java_type(kind_type),
                description="The class of the object that was added, changed or deleted",
                layout_type=kind_type,
            ))
        fields.append(SyntheticField(
            name=SNAPSHOT_FIELD,
            wire_name=SNAPSHOT_FIELD,
            java_type="Object",
            description=("The record of the database object that was added, changed or deleted\n"
                         "(the actual type will be VM.Record, VBD.Record or similar)"),
        ))
        return fields

    def _reference_lines(self, cls: ApiClass) -> list[str]:
        class_name = class_case(cls.name)
        if cls.is_empty:
            # No fields means no ref: such classes are not really referenceable
            return [
                "",
                "    public String toWireString() {",
                "        return null;",
                "    }",
                "",
            ]
        return [
            "    /**",
            "     * The XenAPI reference (OpaqueRef) to this object.",
            "     */",
            "    protected final String ref;",
            "",
            "    /**",
            "     * For internal use only.",
            "     */",
            f"    {class_name}(String ref) {{",
            "       this.ref = ref;",
            "    }",
            "",
            "    /**",
            "     * @return The XenAPI reference (OpaqueRef) to this object.",
            "     */",
            "    public String toWireString() {",
            "       return this.ref;",
            "    }",
            "",
        ]

    def _equality_lines(self, cls: ApiClass) -> list[str]:
        class_name = class_case(cls.name)
        return [
            "    /**",
            f"     * If obj is a {class_name}, compares XenAPI references for equality.",
            "     */",
            "    @Override",
            "    public boolean equals(Object obj)",
            "    {",
            f"        if (obj instanceof {class_name})",
            "        {",
            f"            {class_name} other = ({class_name}) obj;",
            "            return other.ref.equals(this.ref);",
            "        } else",
            "        {",
            "            return false;",
            "        }",
            "    }",
            "",
            "    @Override",
            "    public int hashCode()",
            "    {",
            "        return ref.hashCode();",
            "    }",
            "",
        ]

    def generate(self, cls: ApiClass) -> str:
        """Generate the Java source of one class"""
        class_name = class_case(cls.name)
        lines = self.common.licence_lines()
        lines.append(f"package {self.java_package};")
        lines.extend(IMPORTS)
        lines.extend([
            "",
            "/**",
            f" * {self.common.escape_javadoc(cls.description)}",
        ])
        publish_info = self.common.published_info(cls.lifecycle)
        if publish_info:
            lines.append(f" * {publish_info}")
        lines.extend([
            " *",
            " * @author Cloud Software Group, Inc.",
            " */",
            f"public class {class_name} extends XenAPIObject {{",
            "",
        ])

        lines.extend(self._reference_lines(cls))

        if not cls.is_empty:
            lines.extend(self._equality_lines(cls))
            synthetic = self.event_fields(cls) if is_event_class(cls.name) else []
            lines.extend(self.records.generate(cls, synthetic))

        for message in cls.messages:
            lines.extend(self.methods.generate(cls, message))

        lines.append("}")
        return "\n".join(lines)

    def write(self, cls: ApiClass, folder: Path) -> Path:
        """Generate and write <ClassName>.java into folder"""
        path = folder / f"{class_case(cls.name)}.java"
        source = self.generate(cls)
        with path.open("w", encoding="utf-8") as f:
            f.write(source)
        logger.debug("Wrote %s", path)
        return path
