#!/usr/bin/env python3
"""
Java SDK Generator

Reads an API datamodel in JSON or YAML and generates:
  1. One Java class per API class (reference wrapper, Record, methods)
  2. Types.java (enums, exceptions, marshalling functions)
  3. APIVersion.java

Usage:
    python generate_sdk.py api.json --output-dir autogen/src/main/java
    python generate_sdk.py api.yaml -o out --java-package com.example.api --license LICENSE
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add parent directory to path so sdkgen package can be found
sys.path.insert(0, str(Path(__file__).parent.parent))

from sdkgen import GenerationError, GeneratorConfig, generate, load_schema
from sdkgen.config import DEFAULT_JAVA_PACKAGE

logger = logging.getLogger("sdkgen")


def parse_override(text: str) -> tuple[str, str]:
    enum_name, sep, member = text.partition("=")
    if not sep or not enum_name or not member:
        raise argparse.ArgumentTypeError(f"expected ENUM=MEMBER, got '{text}'")
    return enum_name, member


def main() -> int:
    start_time = time.perf_counter()

    parser = argparse.ArgumentParser(description="Generate a Java SDK from an API datamodel")
    parser.add_argument("schema_file", nargs="?", help="Path to schema file (positional)")
    parser.add_argument("--schema", help="Path to schema file (alternative)")
    parser.add_argument("--output-dir", "-o", default="generated", help="Output directory")
    parser.add_argument("--java-package", default=DEFAULT_JAVA_PACKAGE, help="Java package name")
    parser.add_argument("--templates", default="", help="Directory with Types/APIVersion templates")
    parser.add_argument("--license", default="", help="LICENSE file copied into the output resources")
    parser.add_argument("--enum-default", action="append", type=parse_override, default=[],
                        metavar="ENUM=MEMBER", help="Default member for an enum's record fields")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    # Support both positional and --schema argument
    schema_file = args.schema_file or args.schema
    if not schema_file:
        parser.error("Schema file is required (positional or --schema)")

    config = GeneratorConfig(output_dir=Path(args.output_dir), java_package=args.java_package)
    if args.templates:
        config.templates_dir = Path(args.templates)
    if args.license:
        config.license_file = Path(args.license)
    config.enum_default_overrides.update(dict(args.enum_default))

    try:
        schema = load_schema(Path(schema_file))
        result = generate(schema, config)
    except GenerationError as e:
        logger.error("%s", e)
        return 1

    for path in result.written:
        print(f"Generated: {path}")

    elapsed = time.perf_counter() - start_time
    print(f"Generation completed in {elapsed*1000:.2f} ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
