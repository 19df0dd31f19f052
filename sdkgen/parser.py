"""Schema parser: JSON or YAML API description to datamodel"""

import json
import re
from pathlib import Path

import yaml

from .errors import SchemaError
from .types import (
    ApiClass, ApiSchema, ErrorDef, Field, FieldNode, Lifecycle, Message, Namespace,
    Param, Release, Type, Primitive, EnumType, SetType, MapType, Ref, Record, Option,
    PRIMITIVE_KINDS, DEPRECATED, PUBLISHED,
)

# ctor<argument>, e.g. set<ref<VM>>
TYPE_PATTERN = re.compile(r'(\w+)\s*<(.+)>')


def load_schema(path: Path) -> ApiSchema:
    """Load a schema from a .json, .yml or .yaml file"""
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yml", ".yaml"}:
        document = yaml.safe_load(raw)
    else:
        document = json.loads(raw)
    return SchemaParser(document).parse()


def split_top_level(text: str) -> list[str]:
    """Split on commas that are not nested inside angle brackets"""
    parts, depth, start = [], 0, 0
    for i, ch in enumerate(text):
        if ch == '<':
            depth += 1
        elif ch == '>':
            depth -= 1
        elif ch == ',' and depth == 0:
            parts.append(text[start:i].strip())
            start = i + 1
    parts.append(text[start:].strip())
    return parts


class SchemaParser:
    """Builds an ApiSchema from a decoded schema document"""

    def __init__(self, document: dict):
        if not isinstance(document, dict):
            raise SchemaError("Schema document must be a mapping")
        self.document = document
        try:
            self.enums = self._parse_enums()
            self.errors = {e.name: e for e in self._parse_errors()}
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SchemaError(f"Malformed enum or error definition: {e}") from e

    def parse(self) -> ApiSchema:
        try:
            return ApiSchema(
                classes=[self._parse_class(c) for c in self.document.get("classes", [])],
                errors=list(self.errors.values()),
                releases=[self._parse_release(r) for r in self.document.get("releases", [])],
            )
        except KeyError as e:
            raise SchemaError(f"Missing required key {e}") from e
        except (TypeError, ValueError, AttributeError) as e:
            # Entries of the wrong shape, e.g. a null list or a bare string for a mapping
            raise SchemaError(f"Malformed schema document: {e}") from e

    def _parse_enums(self) -> dict[str, EnumType]:
        enums = {}
        for name, values in self.document.get("enums", {}).items():
            pairs = []
            for v in values:
                if isinstance(v, str):
                    pairs.append((v, ""))
                else:
                    wire, description = v
                    pairs.append((wire, description))
            enums[name] = EnumType(name, tuple(pairs))
        return enums

    def _parse_errors(self) -> list[ErrorDef]:
        return [
            ErrorDef(
                name=e["name"],
                params=list(e.get("params", [])),
                description=e.get("description", ""),
            )
            for e in self.document.get("errors", [])
        ]

    def _parse_release(self, r: dict) -> Release:
        return Release(code_name=r["code_name"], branding=r.get("branding", r["code_name"]),
                       version=str(r.get("version", "")))

    def parse_type(self, text: str) -> Type:
        text = text.strip()
        if text in PRIMITIVE_KINDS:
            return Primitive(text)

        m = TYPE_PATTERN.fullmatch(text)
        if not m:
            raise SchemaError(f"Cannot parse type '{text}'")
        ctor, arg = m.group(1), m.group(2).strip()

        if ctor == 'enum':
            if arg not in self.enums:
                raise SchemaError(f"Undeclared enum '{arg}'")
            return self.enums[arg]
        if ctor == 'ref':
            return Ref(arg)
        if ctor == 'record':
            return Record(arg)
        if ctor == 'set':
            return SetType(self.parse_type(arg))
        if ctor == 'option':
            return Option(self.parse_type(arg))
        if ctor == 'map':
            parts = split_top_level(arg)
            if len(parts) != 2:
                raise SchemaError(f"Map type needs a key and a value: '{text}'")
            return MapType(self.parse_type(parts[0]), self.parse_type(parts[1]))
        raise SchemaError(f"Unknown type constructor '{ctor}' in '{text}'")

    def _parse_lifecycle(self, data: dict) -> Lifecycle:
        lc = data.get("lifecycle") or {}
        deprecated = lc.get("deprecated")
        state = lc.get("state", DEPRECATED if deprecated else PUBLISHED)
        return Lifecycle(state=state, published=lc.get("published"), deprecated=deprecated)

    def _parse_fields(self, entries: list) -> list[FieldNode]:
        nodes = []
        for entry in entries:
            if "namespace" in entry:
                nodes.append(Namespace(entry["namespace"], self._parse_fields(entry.get("fields", []))))
            else:
                nodes.append(Field(
                    name=entry["name"],
                    ty=self.parse_type(entry["type"]),
                    description=entry.get("description", ""),
                    lifecycle=self._parse_lifecycle(entry),
                ))
        return nodes

    def _parse_param(self, p: dict) -> Param:
        return Param(
            name=p["name"],
            ty=self.parse_type(p["type"]),
            description=p.get("description", ""),
            optional=bool(p.get("optional", False)),
            lifecycle=self._parse_lifecycle(p),
        )

    def _parse_message(self, cls_name: str, m: dict) -> Message:
        result = m.get("result")
        if isinstance(result, str):
            result = (self.parse_type(result), "")
        elif result is not None:
            result = (self.parse_type(result["type"]), result.get("description", ""))

        errors = []
        for name in m.get("errors", []):
            if name not in self.errors:
                raise SchemaError(f"Message {cls_name}.{m['name']} declares unknown error '{name}'")
            errors.append(self.errors[name])

        return Message(
            obj_name=cls_name,
            name=m["name"],
            params=[self._parse_param(p) for p in m.get("params", [])],
            result=result,
            description=m.get("description", ""),
            session=bool(m.get("session", True)),
            is_async=bool(m.get("async", False)),
            errors=errors,
            lifecycle=self._parse_lifecycle(m),
            min_role=m.get("min_role", ""),
            is_static=bool(m.get("static", False)),
        )

    def _parse_class(self, c: dict) -> ApiClass:
        name = c["name"]
        return ApiClass(
            name=name,
            description=c.get("description", ""),
            contents=self._parse_fields(c.get("fields", [])),
            messages=[self._parse_message(name, m) for m in c.get("messages", [])],
            lifecycle=self._parse_lifecycle(c),
        )
