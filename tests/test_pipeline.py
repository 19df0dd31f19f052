import logging
import runpy

import pytest

from sdkgen.errors import RegistryFrozenError, UnregisteredRecordError
from sdkgen.pipeline import Pipeline, generate
from sdkgen.types import ApiClass, ApiSchema, Field, Message, Primitive, Record, STRING

from conftest import ROOT, SAMPLE_SCHEMA

CLASS_FILES = ["Session.java", "Host.java", "VM.java", "VIF.java", "Event.java", "Debug.java"]


@pytest.fixture
def generated(sample_schema, config):
    return generate(sample_schema, config)


def read(config, name):
    return (config.class_dir / name).read_text(encoding="utf-8")


def test_writes_every_source(generated, config):
    assert config.class_dir == config.output_dir / "com" / "xensource" / "xenapi"
    names = [path.name for path in generated.written]
    assert names == CLASS_FILES + ["Types.java", "APIVersion.java"]
    for path in generated.written:
        assert path.exists()


def test_class_sources(generated, config):
    vm = read(config, "VM.java")
    assert vm.startswith("/*\n * Copyright (c) Cloud Software Group, Inc.")
    assert "public class VM extends XenAPIObject {" in vm
    assert "    public static Task createAsync(Connection c, VM.Record record) throws" in vm
    assert "    public static VM create(Connection c, VM.Record record) throws" in vm
    assert "        var record_map = record.toMap();" in vm
    assert "    public Types.VmPowerState getPowerStateLegacy(Connection c) throws" in vm

    vif = read(config, "VIF.java")
    assert "this.lockingMode == null ? Types.VifLockingMode.NETWORK_DEFAULT : this.lockingMode" in vif

    event = read(config, "Event.java")
    assert "public static EventBatch from(Connection c, Set<String> classes, String token, Double timeout) throws" in event
    assert event.count("public String clazz;") == 1

    debug = read(config, "Debug.java")
    assert "class Record" not in debug


def test_types_source(generated, config):
    types = read(config, "Types.java")
    assert "package com.xensource.xenapi;" in types
    assert "    public enum VmPowerState {" in types
    assert "    public enum XenAPIObjects {" in types
    assert '        @JsonProperty("Running")\n        RUNNING,' in types
    assert '            case "HANDLE_INVALID":\n                throw new HandleInvalid(parameters);' in types
    assert "            this.clazz = parameters.length > 0 ? parameters[0] : null;" in types
    assert "    public static VM.Record toVMRecord(Object object) {" in types
    assert "    public static Map<VM, VM.Record> toMapOfVMVMRecord(Object object) {" in types
    assert "    public static VM toVM(Task task, Connection connection) throws IOException {" in types
    assert "case SESSION: record.snapshot = toSessionRecord(a); break;" in types
    assert "case VIF: record.snapshot = toVIFRecord(a); break;" in types
    assert "DEBUG" not in types
    # Every decoder is emitted once
    assert types.count("public static String toString(Object object)") == 1
    assert types.count("public static Types.VmPowerState toVmPowerState(Object object)") == 1


def test_api_version_source(generated, config):
    version = read(config, "APIVersion.java")
    assert '    RIO("1.1", "XenServer 4.0"),' in version
    assert '    STOCKHOLM("2.16", "Citrix Hypervisor 8.2"),' in version
    assert "        return STOCKHOLM;" in version


def test_registries_are_frozen_after_run(sample_schema, config):
    pipeline = Pipeline(sample_schema, config)
    result = pipeline.run()
    assert pipeline.context.frozen
    assert set(result.snapshot.records) == {"session", "host", "VM", "VIF", "event"}
    with pytest.raises(RegistryFrozenError):
        pipeline.context.register_record("late", [])


def test_license_copied_when_configured(sample_schema, config, tmp_path):
    license_file = tmp_path / "LICENSE"
    license_file.write_text("BSD 2-Clause\n", encoding="utf-8")
    config.license_file = license_file
    result = generate(sample_schema, config)
    target = config.output_dir / "resources" / "LICENSE"
    assert result.written[-1] == target
    assert target.read_text(encoding="utf-8") == "BSD 2-Clause\n"


def test_failure_leaves_written_files(config, caplog):
    schema = ApiSchema(classes=[
        ApiClass("VM", "A virtual machine", [Field("uuid", Primitive(STRING))]),
        ApiClass("host", "A host", [Field("uuid", Primitive(STRING))], messages=[
            Message("host", "get_ghost", result=(Record("ghost"), "")),
        ]),
    ])
    with caplog.at_level(logging.DEBUG, logger="sdkgen"):
        with pytest.raises(UnregisteredRecordError):
            generate(schema, config)

    assert (config.class_dir / "VM.java").exists()
    assert (config.class_dir / "Host.java").exists()
    assert not (config.class_dir / "Types.java").exists()
    assert "2 files were already written" in caplog.text


@pytest.fixture
def cli_main():
    return runpy.run_path(str(ROOT / "bin" / "generate_sdk.py"))["main"]


def test_cli(cli_main, tmp_path, monkeypatch, capsys):
    out = tmp_path / "cli"
    monkeypatch.setattr("sys.argv", [
        "generate_sdk.py", str(SAMPLE_SCHEMA), "-o", str(out),
        "--java-package", "org.example.api", "--enum-default", "vm_power_state=HALTED",
    ])
    assert cli_main() == 0
    printed = capsys.readouterr().out
    assert "Generated: " in printed
    assert "Generation completed in" in printed

    vm = (out / "org" / "example" / "api" / "VM.java").read_text(encoding="utf-8")
    assert vm.count("package org.example.api;") == 1
    assert "this.powerState == null ? Types.VmPowerState.HALTED : this.powerState" in vm


def test_cli_reports_bad_schema(cli_main, tmp_path, monkeypatch):
    schema = tmp_path / "bad.yaml"
    schema.write_text("classes:\n  - name: VM\n    fields:\n      - {name: x, type: list<int>}\n",
                      encoding="utf-8")
    monkeypatch.setattr("sys.argv", ["generate_sdk.py", "--schema", str(schema), "-o", str(tmp_path)])
    assert cli_main() == 1


def test_cli_reports_malformed_document(cli_main, tmp_path, monkeypatch):
    schema = tmp_path / "empty.yaml"
    schema.write_text("classes:\n", encoding="utf-8")
    monkeypatch.setattr("sys.argv", ["generate_sdk.py", str(schema), "-o", str(tmp_path)])
    assert cli_main() == 1
