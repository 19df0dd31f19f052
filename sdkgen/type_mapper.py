"""Type mapping from datamodel types to Java types and marshalling functions"""

from typing import Optional

from .context import GenerationContext
from .errors import RecordDefaultError
from .naming import class_case
from .types import (
    Type, Primitive, EnumType, SetType, MapType, Ref, Record, Option, ApiClass,
    STRING, SECRET_STRING, INT, FLOAT, BOOL, DATETIME,
)

OBJECT_KIND_ENUM = "XenAPIObjects"

NULL_REF = "OpaqueRef:NULL"


class TypeMapper:
    """Maps datamodel types to Java types, marshal functions and defaults.

    Every type passed through java_type, marshal_function or default_value
    is recorded in the context, which decides the marshal functions that
    Types.java will contain. Without a context the mapper only resolves
    names, which is what marshalling generation needs once the registries
    are frozen.
    """

    # Java type and marshal function suffix share the same name for scalars
    JAVA_TYPES = {
        STRING: 'String',
        SECRET_STRING: 'String',
        INT: 'Long',
        FLOAT: 'Double',
        BOOL: 'Boolean',
        DATETIME: 'Date',
    }

    JAVA_DEFAULTS = {
        STRING: '""',
        SECRET_STRING: '""',
        INT: '0',
        FLOAT: '0.0',
        BOOL: 'false',
        DATETIME: 'new Date(0)',
    }

    def __init__(self, context: Optional[GenerationContext] = None,
                 enum_default_overrides: Optional[dict] = None):
        self.context = context
        self.enum_default_overrides = enum_default_overrides or {}

    def _visit(self, ty: Type):
        if self.context is None:
            return
        self.context.register_type(ty)
        if isinstance(ty, EnumType):
            self.context.register_enum(ty.name, ty.values)

    def java_type(self, ty: Type) -> str:
        """Convert datamodel type to Java type"""
        self._visit(ty)
        if isinstance(ty, Primitive):
            return self.JAVA_TYPES[ty.kind]
        if isinstance(ty, EnumType):
            return f"Types.{class_case(ty.name)}"
        if isinstance(ty, SetType):
            return f"Set<{self.java_type(ty.item)}>"
        if isinstance(ty, MapType):
            return f"Map<{self.java_type(ty.key)}, {self.java_type(ty.value)}>"
        if isinstance(ty, Ref):
            # References are hidden behind the class wrapper
            return class_case(ty.cls)
        if isinstance(ty, Record):
            return f"{class_case(ty.cls)}.Record"
        if isinstance(ty, Option):
            return self.java_type(ty.inner)
        raise TypeError(f"Unknown type: {ty!r}")

    def java_type_or_void(self, result: Optional[tuple[Type, str]]) -> str:
        if result is None:
            return "void"
        return self.java_type(result[0])

    def _marshal_suffix(self, ty: Type) -> str:
        self._visit(ty)
        if isinstance(ty, Primitive):
            return self.JAVA_TYPES[ty.kind]
        if isinstance(ty, EnumType):
            return class_case(ty.name)
        if isinstance(ty, SetType):
            return f"SetOf{self._marshal_suffix(ty.item)}"
        if isinstance(ty, MapType):
            return f"MapOf{self._marshal_suffix(ty.key)}{self._marshal_suffix(ty.value)}"
        if isinstance(ty, Ref):
            return class_case(ty.cls)
        if isinstance(ty, Record):
            return f"{class_case(ty.cls)}Record"
        if isinstance(ty, Option):
            return self._marshal_suffix(ty.inner)
        raise TypeError(f"Unknown type: {ty!r}")

    def marshal_function(self, ty: Type) -> str:
        """Name of the Types function decoding ty, e.g. toSetOfMapOfDoubleBoolean"""
        return "to" + self._marshal_suffix(ty)

    def default_value(self, ty: Type) -> str:
        """Java literal used when a record field holds no value"""
        self._visit(ty)
        if isinstance(ty, Primitive):
            return self.JAVA_DEFAULTS[ty.kind]
        if isinstance(ty, EnumType):
            member = self.enum_default_overrides.get(ty.name, "UNRECOGNIZED")
            return f"Types.{class_case(ty.name)}.{member}"
        if isinstance(ty, SetType):
            return f"new LinkedHashSet<{self.java_type(ty.item)}>()"
        if isinstance(ty, MapType):
            return f"new HashMap<{self.java_type(ty.key)}, {self.java_type(ty.value)}>()"
        if isinstance(ty, Ref):
            return f'new {class_case(ty.cls)}("{NULL_REF}")'
        if isinstance(ty, Record):
            raise RecordDefaultError(ty.cls)
        if isinstance(ty, Option):
            return self.default_value(ty.inner)
        raise TypeError(f"Unknown type: {ty!r}")

    @staticmethod
    def object_kind_enum(classes: list[ApiClass]) -> EnumType:
        """Enumeration over every class that has a Record, used to switch on snapshots"""
        return EnumType(
            OBJECT_KIND_ENUM,
            tuple((c.name, c.description) for c in classes if not c.is_empty),
        )
