"""
Java SDK Generator Package

Reads an API datamodel (classes, fields, messages, enums, errors) and generates:
  1. One Java reference-wrapper class per API class, with its Record and methods
  2. Types.java holding enums, exceptions and the wire-decoding functions
  3. APIVersion.java listing the API releases
"""

from .types import (
    ApiClass, ApiSchema, ErrorDef, Field, Lifecycle, Message, Namespace, Param, Release,
    Primitive, EnumType, SetType, MapType, Ref, Record, Option,
)
from .errors import (
    GenerationError, SchemaError, RegistryFrozenError, UnregisteredRecordError,
    MissingSnapshotCaseError, RecordDefaultError,
)
from .config import GeneratorConfig
from .context import GenerationContext, GenerationSnapshot
from .parser import SchemaParser, load_schema
from .type_mapper import TypeMapper
from .common_generator import CommonGenerator
from .record_generator import RecordGenerator
from .method_generator import MethodGenerator
from .class_generator import ClassGenerator
from .marshal_generator import MarshalGenerator
from .renderer import Renderer
from .pipeline import Pipeline, GenerationResult, generate

__all__ = [
    'ApiClass', 'ApiSchema', 'ErrorDef', 'Field', 'Lifecycle', 'Message', 'Namespace',
    'Param', 'Release',
    'Primitive', 'EnumType', 'SetType', 'MapType', 'Ref', 'Record', 'Option',
    'GenerationError', 'SchemaError', 'RegistryFrozenError', 'UnregisteredRecordError',
    'MissingSnapshotCaseError', 'RecordDefaultError',
    'GeneratorConfig', 'GenerationContext', 'GenerationSnapshot',
    'SchemaParser', 'load_schema', 'TypeMapper', 'CommonGenerator',
    'RecordGenerator', 'MethodGenerator', 'ClassGenerator', 'MarshalGenerator',
    'Renderer', 'Pipeline', 'GenerationResult', 'generate',
]
