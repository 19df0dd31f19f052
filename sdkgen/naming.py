"""Translation of datamodel identifiers into Java identifiers"""

# Raw identifiers that cannot be used as-is, applied before case conversion
RESERVED_WORDS = {
    'class': 'clazz',
    'clone': 'createClone',
    'param-name': 'param_name',
    'interface': 'iface',
    'import': 'import_',
}

# Java keywords that camel-casing can still produce
KEYWORDS = {
    'public': '_public',
}


def escape_reserved(raw: str) -> str:
    return RESERVED_WORDS.get(raw, raw)


def second_character_is_uppercase(s: str) -> bool:
    """Heuristic for identifiers that are already acronyms or properly cased.

    'VM', 'PIF', 'SRs' are left alone by the case conversions below,
    'name', 'label', 'host' are not.
    """
    if len(s) < 2:
        return False
    return s[1] == s[1].upper()


def _uncapitalize(s: str) -> str:
    return s[:1].lower() + s[1:]


def _capitalize(s: str) -> str:
    return s[:1].upper() + s[1:]


def _transform(segment: str) -> str:
    if second_character_is_uppercase(segment):
        return segment
    return _capitalize(escape_reserved(_uncapitalize(segment)))


def class_case(name: str) -> str:
    """'VM_guest_metrics' -> 'VMGuestMetrics'"""
    return "".join(_transform(s) for s in name.split("_"))


def camel_case(name: str) -> str:
    """'name_label' -> 'nameLabel', 'VM_metrics' -> 'VMMetrics'"""
    segments = [_transform(s) for s in name.split("_")]
    head, tail = segments[0], segments[1:]
    if not second_character_is_uppercase(head):
        head = _uncapitalize(head)
    result = head + "".join(tail)
    return KEYWORDS.get(result, result)


def enum_of_wire(wire: str) -> str:
    """Java constant for an enum wire value: 'hvm-boot' -> 'HVM_BOOT'"""
    return wire.upper().replace("-", "_")


def exception_class_case(name: str) -> str:
    """'HANDLE_INVALID' -> 'HandleInvalid'"""
    return "".join(s.lower().capitalize() for s in name.split("_"))


def error_field_name(field: str) -> str:
    """Field name for an error parameter such as 'expected value'"""
    return camel_case("_".join(field.split(" ")))
