"""
Base language plugin interface.

All declaration sources (Swift, Java, future languages) must implement this
interface. A plugin turns source text into RecordDeclarations, renders the
members synthesized for them, and splices those members back into the text.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from recordgen.config.models import (
    GeneratedConstructor,
    GeneratedMember,
    GeneratedWither,
    RecordDeclaration,
    RecordGenConfig,
)
from recordgen.synthesis.assembler import assemble_members

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "    "


@dataclass
class ExpansionResult:
    """Outcome of expanding the marked declarations of one source text."""

    source: str
    expanded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    member_count: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.expanded or self.skipped)


def marker_removal_end(source: str, end: int) -> int:
    """Extend a marker's end over the whitespace that separates it from the declaration.

    When the marker sits on its own line, the line break (`\\n` or `\\r\\n`) and
    the next line's indentation are consumed too, so the declaration keeps
    the marker's column.
    """
    position = end
    while position < len(source) and source[position] in " \t":
        position += 1
    if source.startswith("\r\n", position) or source.startswith("\n", position):
        position += 2 if source[position] == "\r" else 1
        while position < len(source) and source[position] in " \t":
            position += 1
    return position


def detect_newline(source: str) -> str:
    """Line ending used by a source text."""
    return "\r\n" if "\r\n" in source else "\n"


def indent_block(text: str, prefix: str) -> str:
    """Prefix every non-empty line of `text`."""
    return "\n".join(prefix + line if line.strip() else line for line in text.split("\n"))


def line_indent(source: str, position: int) -> str:
    """Indentation of the line containing `position`."""
    line_start = source.rfind("\n", 0, position) + 1
    end = line_start
    while end < len(source) and source[end] in " \t":
        end += 1
    return source[line_start:end]


def char_offsets(source: str) -> Callable[[int], int]:
    """Map tree-sitter byte offsets of `source` to string offsets."""
    encoded = source.encode("utf-8")
    if len(encoded) == len(source):
        return lambda byte_index: byte_index
    return lambda byte_index: len(encoded[:byte_index].decode("utf-8", errors="replace"))


class LanguagePlugin(ABC):
    """
    Abstract base class for declaration sources.

    Each language plugin provides:
    - Declaration extraction from source text
    - Rendering of generated constructors and withers
    - Source expansion for marker-annotated declarations
    """

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the language name (e.g., 'swift', 'java')."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> list[str]:
        """Return file extensions for this language (e.g., ['.swift'])."""
        pass

    # =========================================================================
    # Declaration Extraction
    # =========================================================================

    def parse_file(self, file_path: Path, marker: str | None = None) -> list[RecordDeclaration]:
        """Read a source file and extract its declarations."""
        with open(file_path, "r", encoding="utf-8") as f:
            source = f.read()
        return self.extract_declarations(source, marker)

    def _traverse_tree(self, node: Any):
        """Traverse tree-sitter tree depth-first."""
        yield node
        for child in node.children:
            yield from self._traverse_tree(child)

    @abstractmethod
    def extract_declarations(
        self, source_code: str, marker: str | None = None
    ) -> list[RecordDeclaration]:
        """
        Extract every type declaration from source text, in source order.

        Args:
            source_code: Source code as string
            marker: Attribute/annotation name; when given, declarations carrying
                it get their marker span filled in

        Returns:
            List of RecordDeclaration objects (nested declarations included)
        """
        pass

    # =========================================================================
    # Rendering
    # =========================================================================

    @abstractmethod
    def render_constructor(
        self, constructor: GeneratedConstructor, declaration: RecordDeclaration, indent: str
    ) -> str:
        """Render a constructor as unindented source text."""
        pass

    @abstractmethod
    def render_wither(
        self, wither: GeneratedWither, declaration: RecordDeclaration, indent: str
    ) -> str:
        """Render a wither as unindented source text."""
        pass

    def render_members(
        self,
        members: list[GeneratedMember],
        declaration: RecordDeclaration,
        indent: str = DEFAULT_INDENT,
    ) -> list[str]:
        """Render generated members in order."""
        rendered = []
        for member in members:
            if isinstance(member, GeneratedConstructor):
                rendered.append(self.render_constructor(member, declaration, indent))
            else:
                rendered.append(self.render_wither(member, declaration, indent))
        return rendered

    # =========================================================================
    # Expansion
    # =========================================================================

    def expand_source(self, source_code: str, config: RecordGenConfig | None = None) -> ExpansionResult:
        """
        Expand every marker-annotated declaration of a source text.

        The marker is removed and the generated members are appended after the
        existing members, separated by blank lines. Existing members are never
        touched.

        Args:
            source_code: Source code as string
            config: recordgen configuration (defaults apply when omitted)

        Returns:
            ExpansionResult with the rewritten source
        """
        config = config or RecordGenConfig()
        declarations = self.extract_declarations(source_code, config.synthesis.marker)
        result = ExpansionResult(source=source_code)

        edits: list[tuple[int, int, str]] = []
        for declaration in declarations:
            span = declaration.span
            if span is None or span.marker_start is None:
                continue

            edits.append((span.marker_start, span.marker_end, ""))
            members = assemble_members(declaration, config.synthesis)
            if not members:
                logger.debug(f"Marker on {declaration.name} ignored: not a struct or class")
                result.skipped.append(declaration.name)
                continue

            indent = config.output.indent or self._indent_unit(declaration)
            rendered = self.render_members(members, declaration, indent)
            edits.append(self._insertion_edit(source_code, declaration, rendered))
            result.expanded.append(declaration.name)
            result.member_count += len(members)

        expanded = source_code
        for start, end, replacement in sorted(edits, key=lambda edit: edit[0], reverse=True):
            expanded = expanded[:start] + replacement + expanded[end:]
        result.source = expanded

        logger.info(
            f"Expanded {len(result.expanded)} declarations with {result.member_count} members"
        )
        return result

    def _indent_unit(self, declaration: RecordDeclaration) -> str:
        span = declaration.span
        if span is None:
            return DEFAULT_INDENT
        if span.member_indent.startswith(span.base_indent):
            unit = span.member_indent[len(span.base_indent):]
            if unit:
                return unit
        return DEFAULT_INDENT

    def _insertion_edit(
        self, source_code: str, declaration: RecordDeclaration, rendered: list[str]
    ) -> tuple[int, int, str]:
        """Edit replacing the body's closing brace with the members plus the brace."""
        span = declaration.span
        head = source_code[: span.body_close].rstrip()
        separator = "\n" if head.endswith("{") else "\n\n"
        block = "\n\n".join(indent_block(text, span.member_indent) for text in rendered)
        replacement = f"{separator}{block}\n{span.base_indent}}}"
        return (
            len(head),
            span.body_close + 1,
            replacement.replace("\n", detect_newline(source_code)),
        )
