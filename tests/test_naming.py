import pytest

from sdkgen.naming import (
    camel_case, class_case, enum_of_wire, error_field_name, escape_reserved,
    exception_class_case, second_character_is_uppercase,
)


@pytest.mark.parametrize("name, expected", [
    ("VM", True),
    ("SRs", True),
    ("PIF", True),
    ("v6", True),       # digits count as already upper-case
    ("vm", False),
    ("host", False),
    ("a", False),
    ("", False),
])
def test_second_character_heuristic(name, expected):
    assert second_character_is_uppercase(name) is expected


@pytest.mark.parametrize("name, expected", [
    ("VM", "VM"),
    ("SR", "SR"),
    ("vm", "Vm"),
    ("host", "Host"),
    ("host_cpu", "HostCpu"),
    ("VM_guest_metrics", "VMGuestMetrics"),
    ("PIF_metrics", "PIFMetrics"),
    ("PVS_proxy", "PVSProxy"),
    ("pool_update", "PoolUpdate"),
    ("network_sriov", "NetworkSriov"),
    ("vif_locking_mode", "VifLockingMode"),
    ("class", "Clazz"),
])
def test_class_case(name, expected):
    assert class_case(name) == expected


@pytest.mark.parametrize("name, expected", [
    ("name_label", "nameLabel"),
    ("get_name_label", "getNameLabel"),
    ("login_with_password", "loginWithPassword"),
    ("memory_static_max", "memoryStaticMax"),
    ("resident_VMs", "residentVMs"),
    ("PV_legacy_args", "PVLegacyArgs"),
    ("VM", "VM"),
    ("x", "x"),
    ("from", "from"),
    ("class", "clazz"),
    ("clone", "createClone"),
    ("interface", "iface"),
    ("import", "import_"),
    ("public", "_public"),
])
def test_camel_case(name, expected):
    assert camel_case(name) == expected


def test_reserved_words_are_escaped_before_casing():
    assert escape_reserved("param-name") == "param_name"
    assert escape_reserved("name") == "name"


@pytest.mark.parametrize("wire, expected", [
    ("Running", "RUNNING"),
    ("running", "RUNNING"),
    ("hvm-boot", "HVM_BOOT"),
    ("network_default", "NETWORK_DEFAULT"),
])
def test_enum_of_wire(wire, expected):
    assert enum_of_wire(wire) == expected


def test_exception_class_case():
    assert exception_class_case("HANDLE_INVALID") == "HandleInvalid"
    assert exception_class_case("VM_BAD_POWER_STATE") == "VmBadPowerState"


def test_error_field_name():
    assert error_field_name("handle") == "handle"
    assert error_field_name("expected value") == "expectedValue"
    assert error_field_name("class") == "clazz"
