# tests/conftest.py

from pathlib import Path

import pytest

from sdkgen.common_generator import CommonGenerator
from sdkgen.config import DEFAULT_ENUM_OVERRIDES, GeneratorConfig
from sdkgen.context import GenerationContext
from sdkgen.parser import load_schema
from sdkgen.type_mapper import TypeMapper
from sdkgen.types import (
    ApiClass, ErrorDef, Field, Lifecycle, Message, Namespace, Param, Release,
    Primitive, EnumType, MapType, Record, STRING, INT, BOOL,
)

ROOT = Path(__file__).parent.parent
SAMPLE_SCHEMA = ROOT / "samples" / "xenapi.yaml"

POWER_STATE = EnumType("power_state", (("running", "Running"), ("halted", "Halted")))

RELEASES = [
    Release("rio", "XenServer 4.0", "1.1"),
    Release("miami", "XenServer 4.1", "1.2"),
]


# ============== Registries ==============

@pytest.fixture
def context():
    return GenerationContext()


@pytest.fixture
def mapper(context):
    return TypeMapper(context, dict(DEFAULT_ENUM_OVERRIDES))


@pytest.fixture
def common():
    return CommonGenerator(RELEASES)


# ============== Datamodel ==============

@pytest.fixture
def vm_class():
    """The VM class: two fields and a getter"""
    return ApiClass(
        name="VM",
        description="A virtual machine",
        contents=[
            Field("name_label", Primitive(STRING), "a human-readable name"),
            Field("power_state", POWER_STATE, "Current power state"),
        ],
        messages=[
            Message(
                obj_name="VM",
                name="get_name_label",
                description="Get the name/label field of the given VM.",
                result=(Primitive(STRING), "value of the field"),
                min_role="read-only",
            ),
        ],
    )


@pytest.fixture
def nested_class():
    """A class whose field tree has namespaces and a deprecated leaf"""
    return ApiClass(
        name="VM",
        description="A virtual machine",
        contents=[
            Field("uuid", Primitive(STRING), "Unique identifier"),
            Namespace("memory", [
                Field("static_max", Primitive(INT), "Static maximum"),
                Namespace("dynamic", [
                    Field("min", Primitive(INT), "Dynamic minimum"),
                ]),
            ]),
            Field("other_config", MapType(Primitive(STRING), Primitive(STRING)), "additional configuration"),
            Field("PV_legacy_args", Primitive(STRING), "kernel arguments",
                  Lifecycle(state="deprecated", published="rio", deprecated="miami")),
        ],
    )


@pytest.fixture
def start_message():
    """Async instance message with one trailing optional parameter and a declared error"""
    return Message(
        obj_name="VM",
        name="start",
        description="Start the specified VM.",
        params=[
            Param("start_paused", Primitive(BOOL), "Instantiate VM in paused state"),
            Param("force", Primitive(BOOL), "Attempt to force the VM to start", optional=True),
        ],
        is_async=True,
        errors=[ErrorDef("VM_BAD_POWER_STATE", ["vm", "expected", "actual"], "bad power state")],
        min_role="vm-operator",
    )


@pytest.fixture
def set_config_message():
    """Instance message taking a record parameter"""
    return Message(
        obj_name="VM",
        name="set_config",
        description="Replace the configuration",
        params=[Param("config", Record("VM"), "the new configuration")],
    )


@pytest.fixture
def sample_schema():
    return load_schema(SAMPLE_SCHEMA)


@pytest.fixture
def config(tmp_path):
    return GeneratorConfig(output_dir=tmp_path / "out")
