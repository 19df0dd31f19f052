"""Generation-time errors. All of them abort the run."""


class GenerationError(Exception):
    """Base class for errors raised while generating bindings"""


class SchemaError(GenerationError):
    """The schema document could not be turned into a datamodel"""


class RegistryFrozenError(GenerationError):
    """A registry was written after marshalling generation started"""


class UnregisteredRecordError(GenerationError):
    """A record type was marshalled but its class never registered its fields"""

    def __init__(self, cls: str):
        super().__init__(f"No record layout registered for class '{cls}'")
        self.cls = cls


class MissingSnapshotCaseError(GenerationError):
    """An object kind has no case in the event snapshot dispatch"""

    def __init__(self, kind: str):
        super().__init__(f"Object kind '{kind}' has no record to unmarshal an event snapshot into")
        self.kind = kind


class RecordDefaultError(GenerationError):
    """A default value was requested for a record type"""

    def __init__(self, cls: str):
        super().__init__(f"Record type '{cls}' has no default value")
        self.cls = cls
