"""Marshal Generator - generates the Types.java decoding functions, enums and errors"""

import logging
from dataclasses import dataclass
from typing import Optional

from .class_generator import is_event_class, EVENT_KIND_FIELD, SNAPSHOT_FIELD
from .common_generator import CommonGenerator
from .context import GenerationSnapshot
from .errors import MissingSnapshotCaseError, UnregisteredRecordError
from .naming import camel_case, class_case, enum_of_wire, error_field_name, exception_class_case
from .type_mapper import TypeMapper, OBJECT_KIND_ENUM
from .types import (
    Type, Primitive, EnumType, SetType, MapType, Ref, Record, Option, ErrorDef,
    STRING, SECRET_STRING, INT, FLOAT, BOOL, DATETIME,
)

logger = logging.getLogger(__name__)

PRIMITIVE_BODIES = {
    STRING: "return (String) object;",
    SECRET_STRING: "return (String) object;",
    INT: "return Long.valueOf((String) object);",
    FLOAT: "return (Double) object;",
    BOOL: "return (Boolean) object;",
    DATETIME: "\n".join([
        "try {",
        "            return (Date) object;",
        "        } catch (ClassCastException e) {",
        "            // Dates occasionally arrive as a float of seconds since the epoch",
        "            return (new Date((long) (1000*Double.parseDouble((String) object))));",
        "        }",
    ]),
}


def erase_option(ty: Type) -> Type:
    while isinstance(ty, Option):
        ty = ty.inner
    return ty


@dataclass(frozen=True)
class SnapshotCase:
    kind: str
    marshal_function: str

    @property
    def label(self) -> str:
        return enum_of_wire(self.kind)


@dataclass(frozen=True)
class SnapshotDispatch:
    """Selects the Record decoder for an event snapshot from the object kind.

    Built once per run with one case per object kind; building fails if any
    kind has no registered record, so the generated switch is exhaustive.
    """
    kind_function: str
    kind_field: str
    cases: tuple[SnapshotCase, ...]

    def lines(self) -> list[str]:
        lines = [
            f'        Object a = map.get("{SNAPSHOT_FIELD}");',
            f"        switch ({self.kind_function}(record.{self.kind_field})) {{",
        ]
        for case in self.cases:
            lines.append(f"            case {case.label}: record.{SNAPSHOT_FIELD} = {case.marshal_function}(a); break;")
        lines.extend([
            "            default:",
            '                throw new RuntimeException("Internal error in auto-generated code whilst unmarshalling event snapshot");',
            "        }",
        ])
        return lines


class MarshalGenerator:
    """Second pass: turns the frozen registries into the Types.java context"""

    def __init__(self, snapshot: GenerationSnapshot, common: CommonGenerator):
        self.snapshot = snapshot
        self.common = common
        self.mapper = TypeMapper()
        self._dispatch: Optional[SnapshotDispatch] = None

    def record_layout(self, cls: str) -> tuple[tuple[str, Type], ...]:
        try:
            return self.snapshot.records[cls]
        except KeyError:
            raise UnregisteredRecordError(cls) from None

    def snapshot_dispatch(self) -> SnapshotDispatch:
        if self._dispatch is None:
            kinds = self.snapshot.enums.get(OBJECT_KIND_ENUM, ())
            cases = []
            for kind, _ in kinds:
                if kind not in self.snapshot.records:
                    raise MissingSnapshotCaseError(kind)
                cases.append(SnapshotCase(kind, self.mapper.marshal_function(Record(kind))))
            kind_type = EnumType(OBJECT_KIND_ENUM, tuple(kinds))
            self._dispatch = SnapshotDispatch(
                kind_function=self.mapper.marshal_function(kind_type),
                kind_field=camel_case(EVENT_KIND_FIELD),
                cases=tuple(cases),
            )
        return self._dispatch

    def _record_body(self, cls: str) -> str:
        layout = self.record_layout(cls)
        cls_name = class_case(cls)
        lines = [
            "Map<String,Object> map = (Map<String,Object>) object;",
            f"        {cls_name}.Record record = new {cls_name}.Record();",
        ]
        for path, ty in layout:
            fn = self.mapper.marshal_function(ty)
            lines.append(f'        record.{camel_case(path)} = {fn}(map.get("{path}"));')
        if is_event_class(cls):
            lines.extend(self.snapshot_dispatch().lines())
        lines.append("        return record;")
        return "\n".join(lines)

    def marshal_body(self, ty: Type) -> str:
        """Java body of the function decoding a wire object into ty"""
        if isinstance(ty, Primitive):
            return PRIMITIVE_BODIES[ty.kind]
        if isinstance(ty, Ref):
            return f"return new {class_case(ty.cls)}((String) object);"
        if isinstance(ty, EnumType):
            enum_name = class_case(ty.name)
            # Unknown values degrade to UNRECOGNIZED so newer servers never break old clients
            return "\n".join([
                "try {",
                f"            return {enum_name}.valueOf(((String) object).toUpperCase().replace('-','_'));",
                "        } catch (IllegalArgumentException ex) {",
                f"            return {enum_name}.UNRECOGNIZED;",
                "        }",
            ])
        if isinstance(ty, SetType):
            item_type = self.mapper.java_type(ty.item)
            fn = self.mapper.marshal_function(ty.item)
            return "\n".join([
                "Object[] items = (Object[]) object;",
                f"        Set<{item_type}> result = new LinkedHashSet<>();",
                "        for (Object item : items) {",
                f"            {item_type} typed = {fn}(item);",
                "            result.add(typed);",
                "        }",
                "        return result;",
            ])
        if isinstance(ty, MapType):
            key_type = self.mapper.java_type(ty.key)
            value_type = self.mapper.java_type(ty.value)
            return "\n".join([
                "var map = (Map<Object, Object>) object;",
                f"        var result = new HashMap<{key_type}, {value_type}>();",
                "        for (var entry : map.entrySet()) {",
                f"            var key = {self.mapper.marshal_function(ty.key)}(entry.getKey());",
                f"            var value = {self.mapper.marshal_function(ty.value)}(entry.getValue());",
                "            result.put(key, value);",
                "        }",
                "        return result;",
            ])
        if isinstance(ty, Record):
            return self._record_body(ty.cls)
        if isinstance(ty, Option):
            return self.marshal_body(ty.inner)
        raise TypeError(f"Unknown type: {ty!r}")

    def _marshalled_types(self) -> list[Type]:
        types = list(self.snapshot.types)
        erased = [erase_option(ty) for ty in types]
        if any(isinstance(ty, Record) and is_event_class(ty.cls) for ty in erased):
            # Snapshot cases call the Record decoder of every object kind
            types.extend(Record(case.kind) for case in self.snapshot_dispatch().cases)
        return types

    def type_entries(self) -> list[dict]:
        entries = {}
        for ty in self._marshalled_types():
            method_name = self.mapper.marshal_function(ty)
            if method_name in entries:
                # String/SecretString and T/Option<T> share one decoder
                continue
            erased = erase_option(ty)
            type_string = self.mapper.java_type(ty)
            entries[method_name] = {
                "name": type_string,
                "class_name": class_case(type_string),
                "method_name": method_name,
                "suppress_unchecked_warning": isinstance(erased, (MapType, Record)),
                "generate_reference_task_result_func": isinstance(erased, Ref),
                "method_body": self.marshal_body(ty),
            }
        logger.debug("Generated %d marshal functions", len(entries))
        return [entries[name] for name in sorted(entries)]

    def enum_entries(self) -> list[dict]:
        entries = []
        for enum_name in sorted(self.snapshot.enums):
            values = []
            for wire, description in self.snapshot.enums[enum_name]:
                description = description.replace("*/", "* /").replace("\n", "\n         * ")
                values.append({
                    "name": wire,
                    "name_uppercase": enum_of_wire(wire),
                    "description": description,
                })
            entries.append({"class_name": class_case(enum_name), "values": values})
        return entries

    def error_entries(self, errors: list[ErrorDef]) -> list[dict]:
        """Exception classes whose fields are filled from the error's wire parameters by position"""
        entries = []
        for error in sorted(errors, key=lambda e: e.name):
            err_params = [
                {
                    "name": error_field_name(param),
                    "index": index,
                    "last": index == len(error.params) - 1,
                }
                for index, param in enumerate(error.params)
            ]
            entries.append({
                "name": error.name,
                "description": self.common.escape_javadoc(error.description),
                "class_name": exception_class_case(error.name),
                "err_params": err_params,
            })
        return entries

    def generate(self, errors: list[ErrorDef]) -> dict:
        """Template context for Types.java"""
        return {
            "errors": self.error_entries(errors),
            "enums": self.enum_entries(),
            "types": self.type_entries(),
        }
