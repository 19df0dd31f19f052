"""Record Generator - generates the nested Record class of an API class"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from .common_generator import CommonGenerator
from .naming import camel_case, class_case
from .type_mapper import TypeMapper
from .types import ApiClass, Field, FieldNode, Namespace, Type, DEPRECATED

logger = logging.getLogger(__name__)

TOSTRING_FORMAT = '%1$20s: %2$s\\n'


@dataclass(frozen=True)
class RecordField:
    """Leaf of a field tree together with its flattened path"""
    path: str
    field: Field

    @property
    def name(self) -> str:
        return camel_case(self.path)


@dataclass(frozen=True)
class SyntheticField:
    """Record member that does not come from the schema's field tree"""
    name: str
    wire_name: str
    java_type: str
    description: str
    layout_type: Optional[Type] = None

    def declaration_lines(self) -> list[str]:
        return [
            "        /**",
            *(f"         * {line}" for line in self.description.splitlines()),
            "         */",
            f'        @JsonProperty("{self.wire_name}")',
            f"        public {self.java_type} {self.name};",
            "",
        ]

    def tostring_line(self) -> str:
        return f'            print.printf("{TOSTRING_FORMAT}", "{self.name}", this.{self.name});'

    def tomap_line(self) -> str:
        return f'            map.put("{self.wire_name}", this.{self.name});'


def walk(contents: Sequence[FieldNode], prefix: tuple[str, ...] = ()) -> Iterator[RecordField]:
    """Flatten a field tree in declaration order.

    Every fragment of a Record is generated from this one sequence, so the
    fields, toString and toMap always list members in the same order.
    """
    for node in contents:
        if isinstance(node, Namespace):
            yield from walk(node.contents, prefix + (node.name,))
        else:
            yield RecordField("_".join(prefix + (node.name,)), node)


class RecordGenerator:
    """Generates Record classes and registers their field layouts"""

    def __init__(self, mapper: TypeMapper, common: CommonGenerator):
        self.mapper = mapper
        self.common = common

    def declaration(self, rf: RecordField) -> list[str]:
        """Javadoc, JSON annotations and the typed field"""
        f = rf.field
        java_type = self.mapper.java_type(f.ty)
        publish_info = self.common.published_info(f.lifecycle)
        lines = [
            "        /**",
            f"         * {self.common.escape_javadoc(f.description)}",
        ]
        if publish_info:
            lines.append(f"         * {publish_info}")
        lines.extend([
            "         */",
            f'        @JsonProperty("{rf.path}")',
        ])
        if f.lifecycle.state == DEPRECATED:
            lines.append(f"        {self.common.deprecated_annotation(f.lifecycle)}")
        lines.append(f"        public {java_type} {rf.name};")
        lines.append("")
        return lines

    def tostring_line(self, rf: RecordField) -> str:
        return f'            print.printf("{TOSTRING_FORMAT}", "{rf.name}", this.{rf.name});'

    def tomap_line(self, rf: RecordField) -> str:
        default = self.mapper.default_value(rf.field.ty)
        return f'            map.put("{rf.path}", this.{rf.name} == null ? {default} : this.{rf.name});'

    def generate(self, cls: ApiClass, synthetic: Sequence[SyntheticField] = ()) -> list[str]:
        """Generate the Record class for cls, registering its layout as a side effect"""
        fields = list(walk(cls.contents))
        layout = [(rf.path, rf.field.ty) for rf in fields]
        layout.extend((s.wire_name, s.layout_type) for s in synthetic if s.layout_type is not None)
        self.mapper.context.register_record(cls.name, layout)

        lines = [
            "    /**",
            f"     * Represents all the fields in a {class_case(cls.name)}",
            "     */",
            "    public static class Record implements Types.Record {",
            "        public String toString() {",
            "            StringWriter writer = new StringWriter();",
            "            PrintWriter print = new PrintWriter(writer);",
        ]
        lines.extend(self.tostring_line(rf) for rf in fields)
        lines.extend(s.tostring_line() for s in synthetic)
        lines.extend([
            "            return writer.toString();",
            "        }",
            "",
            "        /**",
            f"         * Convert a {cls.name}.Record to a Map",
            "         */",
            "        public Map<String,Object> toMap() {",
            "            var map = new HashMap<String,Object>();",
        ])
        lines.extend(self.tomap_line(rf) for rf in fields)
        lines.extend(s.tomap_line() for s in synthetic)
        lines.extend([
            "            return map;",
            "        }",
            "",
        ])
        for rf in fields:
            lines.extend(self.declaration(rf))
        for s in synthetic:
            lines.extend(s.declaration_lines())
        lines.extend([
            "    }",
            "",
        ])
        logger.debug("Generated %s.Record with %d fields", class_case(cls.name), len(fields) + len(synthetic))
        return lines
