"""Method Generator - generates the remote-call wrappers of an API class"""

import logging

from .common_generator import CommonGenerator
from .naming import camel_case, exception_class_case
from .type_mapper import TypeMapper
from .types import ApiClass, Message, Param, Record

logger = logging.getLogger(__name__)

# Thrown by every call regardless of the message's own errors
DEFAULT_ERRORS = [
    ("BadServerResponse",
     "Thrown if the response from the server contains an invalid status."),
    ("XenAPIException",
     "if the call failed."),
    ("IOException",
     "if an error occurs during a send or receive. This includes cases where "
     "a payload is invalid JSON."),
]

EVENT_BATCH = "EventBatch"


def param_groups(params: list[Param]) -> list[list[Param]]:
    """Parameter lists of every overload of a message, longest first.

    Each trailing optional parameter can be dropped on its own, so k trailing
    optional parameters give k + 1 overloads sharing the mandatory prefix.
    """
    mandatory = len(params)
    while mandatory > 0 and params[mandatory - 1].optional:
        mandatory -= 1
    return [params[:n] for n in range(len(params), mandatory - 1, -1)]


def map_variable(param: Param) -> str:
    """Local holding a record parameter converted by its toMap()"""
    return f"{camel_case(param.name)}_map"


class MethodGenerator:
    """Generates synchronous and asynchronous Java methods for messages"""

    def __init__(self, mapper: TypeMapper, common: CommonGenerator):
        self.mapper = mapper
        self.common = common

    def generate(self, cls: ApiClass, message: Message) -> list[str]:
        """Generate every overload of a message, each with its async counterpart"""
        lines = []
        for params in param_groups(message.params):
            if message.is_async:
                lines.extend(self.generate_method(cls, message, params, async_version=True))
            lines.extend(self.generate_method(cls, message, params, async_version=False))
        return lines

    def return_type(self, cls: ApiClass, message: Message) -> str:
        java_type = self.mapper.java_type_or_void(message.result)
        # Event.from returns a batch wrapper written by hand in the SDK
        if cls.name.lower() == "event" and message.name.lower() == "from":
            return EVENT_BATCH
        return java_type

    def signature_params(self, params: list[Param]) -> str:
        declared = [f"{self.mapper.java_type(p.ty)} {camel_case(p.name)}" for p in params]
        return ", ".join(["Connection c"] + declared)

    def wire_arguments(self, message: Message, params: list[Param]) -> list[str]:
        """Positional arguments of the remote call, in order"""
        args = []
        if message.session:
            args.append("sessionReference")
        if not message.is_static:
            args.append("this.ref")
        for p in params:
            if isinstance(p.ty, Record):
                args.append(map_variable(p))
            else:
                args.append(camel_case(p.name))
        return args

    def method_call(self, message: Message, async_version: bool) -> str:
        call = f"{message.obj_name}.{message.name}"
        return f"Async.{call}" if async_version else call

    def all_errors(self, message: Message) -> list[str]:
        return ([name for name, _ in DEFAULT_ERRORS]
                + [f"Types.{exception_class_case(e.name)}" for e in message.errors])

    def javadoc(self, cls: ApiClass, message: Message, params: list[Param],
                async_version: bool) -> list[str]:
        escape = self.common.escape_javadoc
        lines = [
            "    /**",
            f"     * {escape(message.description)}",
            f"     * Minimum allowed role: {message.min_role}",
        ]
        publish_info = self.common.published_info(message.lifecycle)
        if publish_info:
            lines.append(f"     * {publish_info}")
        deprecated = self.common.deprecated_release_name(message.lifecycle)
        if deprecated:
            lines.append(f"     * @deprecated since {deprecated}")
        lines.append("     *")
        lines.append("     * @param c The connection the call is made on")

        for p in params:
            doc = escape(p.description) if p.description else "No description"
            param_info = self.common.published_info(p.lifecycle)
            if param_info:
                doc = f"{doc} {param_info}"
            lines.append(f"     * @param {camel_case(p.name)} {doc}")

        if async_version:
            lines.append("     * @return Task")
        elif message.result is not None:
            _, description = message.result
            doc = escape(description) if description else self.return_type(cls, message)
            lines.append(f"     * @return {doc}")

        for name, description in DEFAULT_ERRORS:
            lines.append(f"     * @throws {name} {description}")
        for e in message.errors:
            lines.append(f"     * @throws Types.{exception_class_case(e.name)} {escape(e.description)}")
        lines.append("     */")
        return lines

    def generate_method(self, cls: ApiClass, message: Message, params: list[Param],
                        async_version: bool) -> list[str]:
        """Generate one Java method for one overload of a message"""
        return_type = self.return_type(cls, message)
        method_name = camel_case(message.name)
        static = "static " if message.is_static else ""
        signature = self.signature_params(params)

        lines = self.javadoc(cls, message, params, async_version)

        annotation = self.common.deprecated_annotation(message.lifecycle)
        if annotation:
            lines.append(f"    {annotation}")
        if async_version:
            lines.append(f"    public {static}Task {method_name}Async({signature}) throws")
        else:
            lines.append(f"    public {static}{return_type} {method_name}({signature}) throws")
        errors = self.all_errors(message)
        for i, error in enumerate(errors):
            tail = "," if i < len(errors) - 1 else " {"
            lines.append(f"       {error}{tail}")

        lines.append(f'        String methodCall = "{self.method_call(message, async_version)}";')
        if message.session:
            lines.append("        String sessionReference = c.getSessionReference();")

        # Records go over the wire as plain maps
        for p in params:
            if isinstance(p.ty, Record):
                lines.append(f"        var {map_variable(p)} = {camel_case(p.name)}.toMap();")

        args = ", ".join(self.wire_arguments(message, params))
        lines.append(f"        Object[] methodParameters = {{{args}}};")

        if message.result is not None or async_version:
            reference = "Task" if async_version else return_type
            lines.append(f"        var typeReference = new TypeReference<{reference}>(){{}};")

        if message.result is None and not async_version:
            lines.append("        c.dispatch(methodCall, methodParameters);")
        else:
            lines.append("        return c.dispatch(methodCall, methodParameters, typeReference);")

        lines.append("    }")
        lines.append("")
        logger.debug("Generated %s.%s%s(%d params)", cls.name, method_name,
                     "Async" if async_version else "", len(params))
        return lines
