"""JVM (Maven and Gradle) dependency file parsers.

Both ecosystems identify packages by Maven coordinates; the dependency name
is ``groupId:artifactId``.

Gradle files are scanned line by line inside ``dependencies { ... }`` blocks
and accept both DSLs:
  - implementation 'group:artifact:version'        (Groovy)
  - implementation("group:artifact:version")       (Kotlin)
  - implementation project(':sub')                  -> skipped (internal)
  - implementation files('libs/x.jar')              -> skipped (local)
"""

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterator, Optional

from .base import BaseParser, Dependency, DependencyType, PathLike
from .dotnet import child_text, local_name

GRADLE_CONFIGURATIONS = (
    "implementation",
    "api",
    "compileOnly",
    "runtimeOnly",
    "testImplementation",
    "testCompileOnly",
    "testRuntimeOnly",
    "androidTestImplementation",
    "debugImplementation",
    "releaseImplementation",
    "annotationProcessor",
    "kapt",
    "ksp",
    # Legacy configurations
    "compile",
    "runtime",
    "testCompile",
    "testRuntime",
)

_CONFIGS = "|".join(GRADLE_CONFIGURATIONS)

# implementation 'g:a:v' / implementation "g:a:v"
GROOVY_DEPENDENCY_RE = re.compile(
    rf"""^\s*(?:{_CONFIGS})\s+['"]([^'"]+)['"]""",
    re.IGNORECASE,
)

# implementation("g:a:v")
KOTLIN_DEPENDENCY_RE = re.compile(
    rf"""^\s*(?:{_CONFIGS})\s*\(\s*['"]([^'"]+)['"]""",
    re.IGNORECASE,
)

# group:artifact[:version][@classifier]
MAVEN_COORDINATE_RE = re.compile(r"^([^:]+):([^:]+)(?::([^:@]+))?(?:@\w+)?$")

VARIABLE_REFERENCE_RE = re.compile(r"\$\w+")

# Declarations that never refer to a repository artifact
LOCAL_REFERENCE_MARKERS = ("project(", "project (", "files(", "fileTree(")


class MavenPomParser(BaseParser):
    """Parser for Maven pom.xml files."""

    def __init__(self) -> None:
        """Initialize the pom.xml parser."""
        super().__init__()
        self.ecosystem = DependencyType.MAVEN
        self.file_patterns = ["pom.xml"]
        self.skip_dirs += ["target", ".mvn"]

    def can_parse(self, file_path: PathLike) -> bool:
        """Check if this parser can handle the file.

        Args:
            file_path: Path to the file

        Returns:
            True if file is a pom.xml file
        """
        return self._file_name(file_path) == "pom.xml"

    def _read_content(self, file_path: Path) -> Optional[bytes]:
        # Undecoded, so expat applies the BOM and the declared encoding
        return self._read_bytes(file_path)

    def _parse_content(self, content: bytes, file_path: Path) -> Iterator[Dependency]:
        try:
            root = ET.fromstring(content)
        except (ET.ParseError, LookupError, ValueError) as e:
            # Unknown codecs and multi-byte ones expat cannot use (UTF-32) land here too
            self.logger.debug(f"Invalid XML in {file_path}: {e}")
            return

        # <dependencies> and <dependencyManagement> alike, with or without namespace
        for element in root.iter():
            if not isinstance(element.tag, str) or local_name(element.tag) != "dependency":
                continue

            group_id = child_text(element, "groupId")
            artifact_id = child_text(element, "artifactId")
            version = child_text(element, "version")

            if not group_id or not artifact_id:
                continue

            # Unresolved properties such as ${project.groupId}
            if "${" in group_id or "${" in artifact_id:
                continue

            yield self._create_dependency(f"{group_id}:{artifact_id}", version, file_path)


class GradleBuildParser(BaseParser):
    """Parser for Gradle build files (build.gradle / build.gradle.kts)."""

    def __init__(self) -> None:
        """Initialize the Gradle parser."""
        super().__init__()
        self.ecosystem = DependencyType.GRADLE
        self.file_patterns = ["build.gradle", "build.gradle.kts"]
        self.skip_dirs += ["build", ".gradle", "gradle"]

    def can_parse(self, file_path: PathLike) -> bool:
        """Check if this parser can handle the file.

        Args:
            file_path: Path to the file

        Returns:
            True if file is build.gradle or build.gradle.kts
        """
        return self._file_name(file_path) in ("build.gradle", "build.gradle.kts")

    def _parse_content(self, content: str, file_path: Path) -> Iterator[Dependency]:
        in_dependencies_block = False
        brace_depth = 0

        for raw_line in content.splitlines():
            line = raw_line.strip()

            if line.startswith(("//", "/*", "*")):
                continue

            if not in_dependencies_block:
                if line.lower().startswith("dependencies") and "{" in line:
                    after_brace = line[line.index("{") + 1:]
                    in_dependencies_block = True
                    brace_depth = 1 + after_brace.count("{") - after_brace.count("}")

                    # dependencies { implementation 'g:a:v' }
                    if after_brace.strip():
                        dependency = self._parse_declaration(after_brace, file_path)
                        if dependency:
                            yield dependency

                    if brace_depth <= 0:
                        in_dependencies_block = False
                continue

            brace_depth += line.count("{") - line.count("}")
            if brace_depth <= 0:
                in_dependencies_block = False
                continue

            dependency = self._parse_declaration(line, file_path)
            if dependency:
                yield dependency

    def _parse_declaration(self, line: str, file_path: Path) -> Optional[Dependency]:
        """Parse a single dependency declaration.

        Args:
            line: Declaration text
            file_path: Source build file

        Returns:
            Dependency, or None for project, file and interpolated references
        """
        if any(marker in line for marker in LOCAL_REFERENCE_MARKERS):
            return None

        if "${" in line or VARIABLE_REFERENCE_RE.search(line):
            return None

        match = KOTLIN_DEPENDENCY_RE.match(line) or GROOVY_DEPENDENCY_RE.match(line)
        if not match:
            return None

        coordinate = MAVEN_COORDINATE_RE.match(match.group(1))
        if not coordinate:
            return None

        group_id, artifact_id, version = coordinate.groups()
        if "$" in group_id or "$" in artifact_id:
            return None

        return self._create_dependency(f"{group_id}:{artifact_id}", version, file_path)
