"""Generator configuration"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

TEMPLATES_DIR = Path(__file__).parent / "templates"

DEFAULT_JAVA_PACKAGE = "com.xensource.xenapi"

# Enum fields whose Java default is a real member rather than UNRECOGNIZED
DEFAULT_ENUM_OVERRIDES = {
    "vif_locking_mode": "NETWORK_DEFAULT",
}

BSD_TWO_CLAUSE = """\
/*
 * Copyright (c) Cloud Software Group, Inc.
 *
 * Redistribution and use in source and binary forms, with or without
 * modification, are permitted provided that the following conditions
 * are met:
 *
 *   1) Redistributions of source code must retain the above copyright
 *      notice, this list of conditions and the following disclaimer.
 *
 *   2) Redistributions in binary form must reproduce the above
 *      copyright notice, this list of conditions and the following
 *      disclaimer in the documentation and/or other materials
 *      provided with the distribution.
 *
 * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
 * "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
 * LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
 * FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE
 * COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT,
 * INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES
 * (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
 * SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION)
 * HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT,
 * STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
 * ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED
 * OF THE POSSIBILITY OF SUCH DAMAGE.
 */"""


@dataclass
class GeneratorConfig:
    """Settings for one generation run"""
    output_dir: Path = Path("generated")
    java_package: str = DEFAULT_JAVA_PACKAGE
    templates_dir: Path = TEMPLATES_DIR
    license_file: Optional[Path] = None
    licence_header: str = BSD_TWO_CLAUSE
    enum_default_overrides: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_ENUM_OVERRIDES))

    @property
    def class_dir(self) -> Path:
        """Directory receiving the .java sources"""
        return self.output_dir / Path(*self.java_package.split("."))

    @property
    def resources_dir(self) -> Path:
        return self.output_dir / "resources"
