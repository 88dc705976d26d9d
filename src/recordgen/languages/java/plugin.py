"""
Java language plugin.

Reads class declarations with tree-sitter and renders the generated
constructor and withers in Java syntax, e.g.

    public User(String name, int age) {
        this.name = name;
        this.age = age;
    }

    public User name(String value) {
        return new User(value, age);
    }
"""

import logging
from typing import Any

from recordgen.config.models import (
    AggregateKind,
    GeneratedConstructor,
    GeneratedWither,
    MemberDecl,
    MemberKind,
    RecordDeclaration,
    SourceSpan,
)
from recordgen.exceptions import DeclarationSourceError
from recordgen.languages.base.plugin import (
    DEFAULT_INDENT,
    LanguagePlugin,
    char_offsets,
    line_indent,
    marker_removal_end,
)

logger = logging.getLogger(__name__)

DECLARATION_KINDS = {
    "class_declaration": AggregateKind.REFERENCE,
    "record_declaration": AggregateKind.OTHER,
    "enum_declaration": AggregateKind.OTHER,
    "interface_declaration": AggregateKind.OTHER,
    "annotation_type_declaration": AggregateKind.OTHER,
}

ANNOTATION_TYPES = ("marker_annotation", "annotation")

COMMENT_TYPES = ("line_comment", "block_comment")


class JavaPlugin(LanguagePlugin):
    """Java declaration source using tree-sitter for parsing."""

    def __init__(self):
        self._parser = None

    # =========================================================================
    # Plugin Metadata
    # =========================================================================

    @property
    def language_name(self) -> str:
        return "java"

    @property
    def file_extensions(self) -> list[str]:
        return [".java"]

    # =========================================================================
    # AST Parsing (using tree-sitter)
    # =========================================================================

    def _get_parser(self):
        """Lazy initialization of tree-sitter parser."""
        if self._parser is None:
            try:
                import tree_sitter_java as tsjava
                from tree_sitter import Language, Parser

                JAVA_LANGUAGE = Language(tsjava.language())
                self._parser = Parser(JAVA_LANGUAGE)
            except ImportError:
                raise DeclarationSourceError(
                    "tree-sitter-java not installed. Run: pip install tree-sitter-java"
                )
        return self._parser

    def parse_source(self, source_code: str) -> Any:
        """Parse Java source code into a tree-sitter AST."""
        parser = self._get_parser()
        return parser.parse(bytes(source_code, "utf-8"))

    # =========================================================================
    # Declaration Extraction
    # =========================================================================

    def extract_declarations(
        self, source_code: str, marker: str | None = None
    ) -> list[RecordDeclaration]:
        """Extract class, record, enum and interface declarations."""
        tree = self.parse_source(source_code)
        offset = char_offsets(source_code)
        if tree.root_node.has_error:
            logger.warning("Java source has syntax errors; declarations may be incomplete")

        declarations = []
        for node in self._traverse_tree(tree.root_node):
            if node.type not in DECLARATION_KINDS:
                continue
            declaration = self._extract_declaration(node, source_code, offset, marker)
            if declaration is not None:
                declarations.append(declaration)

        logger.debug(f"Found {len(declarations)} Java declarations")
        return declarations

    def _text(self, node: Any) -> str:
        return node.text.decode("utf-8")

    def _modifiers(self, node: Any) -> tuple[list[str], list[Any]]:
        """Split a declaration's modifiers node into keywords and annotation nodes."""
        keywords: list[str] = []
        annotations: list[Any] = []
        for child in node.children:
            if child.type != "modifiers":
                continue
            for modifier in child.children:
                if modifier.type in ANNOTATION_TYPES:
                    annotations.append(modifier)
                elif modifier.type not in COMMENT_TYPES:
                    keywords.append(self._text(modifier))
        return keywords, annotations

    def _annotation_name(self, annotation: Any) -> str:
        name = annotation.child_by_field_name("name")
        text = self._text(name) if name is not None else ""
        return text.rsplit(".", 1)[-1]

    def _extract_declaration(
        self, node: Any, source_code: str, offset, marker: str | None
    ) -> RecordDeclaration | None:
        name_node = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        if name_node is None or body is None:
            return None

        modifiers, annotations = self._modifiers(node)

        marker_start = marker_end = None
        if marker:
            for annotation in annotations:
                if self._annotation_name(annotation) == marker:
                    marker_start = offset(annotation.start_byte)
                    marker_end = marker_removal_end(source_code, offset(annotation.end_byte))
                    break

        start = offset(node.start_byte)
        body_close = offset(body.end_byte) - 1
        base_indent = line_indent(source_code, start)

        members = []
        member_indent = None
        for child in body.named_children:
            if child.type in COMMENT_TYPES:
                continue
            if member_indent is None:
                member_indent = line_indent(source_code, offset(child.start_byte))
            members.append(self._extract_member(child))

        span = SourceSpan(
            start=start,
            end=body_close + 1,
            body_close=body_close,
            marker_start=marker_start,
            marker_end=marker_end,
            member_indent=member_indent if member_indent is not None else base_indent + DEFAULT_INDENT,
            base_indent=base_indent,
        )

        return RecordDeclaration(
            name=self._text(name_node),
            kind=DECLARATION_KINDS[node.type],
            modifiers=tuple(modifiers),
            is_final="final" in modifiers,
            type_parameters=self._type_parameters(node),
            members=tuple(members),
            span=span,
        )

    def _type_parameters(self, node: Any) -> tuple[str, ...]:
        clause = node.child_by_field_name("type_parameters")
        if clause is None:
            return ()
        names = []
        for parameter in clause.named_children:
            if parameter.type != "type_parameter":
                continue
            for child in parameter.named_children:
                if child.type in ("identifier", "type_identifier"):
                    names.append(self._text(child))
                    break
        return tuple(names)

    def _extract_member(self, node: Any) -> MemberDecl:
        """Describe one class body member."""
        if node.type != "field_declaration":
            name_node = node.child_by_field_name("name")
            return MemberDecl(
                kind=MemberKind.OTHER,
                name=self._text(name_node) if name_node is not None else None,
            )

        modifiers, _ = self._modifiers(node)
        type_node = node.child_by_field_name("type")
        declarator = node.child_by_field_name("declarator")

        name = None
        field_type = self._text(type_node) if type_node is not None else None
        has_initializer = False
        if declarator is not None:
            name_node = declarator.child_by_field_name("name")
            if name_node is not None:
                name = self._text(name_node)
            dimensions = declarator.child_by_field_name("dimensions")
            if dimensions is not None and field_type is not None:
                field_type += self._text(dimensions)
            has_initializer = declarator.child_by_field_name("value") is not None

        return MemberDecl(
            kind=MemberKind.VARIABLE,
            name=name,
            type=field_type,
            is_mutable="final" not in modifiers,
            modifiers=tuple(modifiers),
            has_initializer=has_initializer,
        )

    # =========================================================================
    # Rendering
    # =========================================================================

    def _self_type(self, declaration: RecordDeclaration) -> str:
        if declaration.type_parameters:
            return f"{declaration.name}<{', '.join(declaration.type_parameters)}>"
        return declaration.name

    def render_constructor(
        self, constructor: GeneratedConstructor, declaration: RecordDeclaration, indent: str
    ) -> str:
        # Java has no equivalent of a required initializer.
        head = f"{constructor.access_modifier} " if constructor.access_modifier == "public" else ""
        parameters = ", ".join(f"{p.type} {p.name}" for p in constructor.parameters)
        lines = [f"{head}{declaration.name}({parameters}) {{"]
        lines.extend(f"{indent}this.{name} = {name};" for name in constructor.assignments)
        lines.append("}")
        return "\n".join(lines)

    def render_wither(
        self, wither: GeneratedWither, declaration: RecordDeclaration, indent: str
    ) -> str:
        head = f"{wither.access_modifier} " if wither.access_modifier == "public" else ""
        diamond = "<>" if declaration.type_parameters else ""
        arguments = ", ".join(
            f"this.{arg.expression}" if arg.via_receiver else arg.expression
            for arg in wither.arguments
        )
        parameter = wither.parameter
        return "\n".join([
            f"{head}{self._self_type(declaration)} {wither.name}({parameter.type} {parameter.name}) {{",
            f"{indent}return new {declaration.name}{diamond}({arguments});",
            "}",
        ])
