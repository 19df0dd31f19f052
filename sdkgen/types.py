"""Data types for the API datamodel"""

from dataclasses import dataclass, field
from typing import Optional, Union


# ── Types ────────────────────────────────────────────────────────────
#
# Frozen so that two types with the same shape compare and hash equal;
# the encountered-types registry relies on that for deduplication.

STRING = "string"
SECRET_STRING = "secret_string"
INT = "int"
FLOAT = "float"
BOOL = "bool"
DATETIME = "datetime"

PRIMITIVE_KINDS = (STRING, SECRET_STRING, INT, FLOAT, BOOL, DATETIME)


@dataclass(frozen=True)
class Primitive:
    """Scalar wire type"""
    kind: str


@dataclass(frozen=True)
class EnumType:
    """Named enumeration with ordered (wire value, description) pairs"""
    name: str
    values: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class SetType:
    item: "Type"


@dataclass(frozen=True)
class MapType:
    key: "Type"
    value: "Type"


@dataclass(frozen=True)
class Ref:
    """Opaque reference to an instance of an API class"""
    cls: str


@dataclass(frozen=True)
class Record:
    """Snapshot of all fields of an API class"""
    cls: str


@dataclass(frozen=True)
class Option:
    inner: "Type"


Type = Union[Primitive, EnumType, SetType, MapType, Ref, Record, Option]


# ── Datamodel ────────────────────────────────────────────────────────

PUBLISHED = "published"
DEPRECATED = "deprecated"
PROTOTYPED = "prototyped"
REMOVED = "removed"


@dataclass
class Lifecycle:
    """Release history of a class, field or message"""
    state: str = PUBLISHED
    published: Optional[str] = None
    deprecated: Optional[str] = None


@dataclass
class Release:
    """Product release, used to brand deprecation notices"""
    code_name: str
    branding: str
    version: str = ""


@dataclass
class Field:
    """Leaf of a class's field tree"""
    name: str
    ty: Type
    description: str = ""
    lifecycle: Lifecycle = field(default_factory=Lifecycle)


@dataclass
class Namespace:
    """Named group of fields; its name prefixes the wire key of its children"""
    name: str
    contents: list["FieldNode"] = field(default_factory=list)


FieldNode = Union[Field, Namespace]


@dataclass
class ErrorDef:
    """Declared API error"""
    name: str
    params: list[str] = field(default_factory=list)
    description: str = ""


@dataclass
class Param:
    """Message parameter"""
    name: str
    ty: Type
    description: str = ""
    optional: bool = False
    lifecycle: Lifecycle = field(default_factory=Lifecycle)


@dataclass
class Message:
    """Remote-callable method of an API class"""
    obj_name: str
    name: str
    params: list[Param] = field(default_factory=list)
    result: Optional[tuple[Type, str]] = None
    description: str = ""
    session: bool = True
    is_async: bool = False
    errors: list[ErrorDef] = field(default_factory=list)
    lifecycle: Lifecycle = field(default_factory=Lifecycle)
    min_role: str = ""
    is_static: bool = False


@dataclass
class ApiClass:
    """API object class"""
    name: str
    description: str = ""
    contents: list[FieldNode] = field(default_factory=list)
    messages: list[Message] = field(default_factory=list)
    lifecycle: Lifecycle = field(default_factory=Lifecycle)

    @property
    def is_empty(self) -> bool:
        return not self.contents


@dataclass
class ApiSchema:
    """Complete parsed API"""
    classes: list[ApiClass] = field(default_factory=list)
    errors: list[ErrorDef] = field(default_factory=list)
    releases: list[Release] = field(default_factory=list)
