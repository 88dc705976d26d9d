"""
Swift language plugin.

Reads struct and class declarations with tree-sitter and renders the
generated initializer and withers in Swift syntax, e.g.

    public init(name: String, age: Int) {
        self.name = name
        self.age = age
    }

    public func name(_ value: String) -> Self {
        Self.init(name: value, age: age)
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

# `declaration_kind` keyword of class_declaration / protocol_declaration nodes
DECLARATION_KINDS = {
    "struct": AggregateKind.VALUE,
    "class": AggregateKind.REFERENCE,
    "enum": AggregateKind.OTHER,
    "actor": AggregateKind.OTHER,
    "protocol": AggregateKind.OTHER,
    "extension": AggregateKind.OTHER,
}

DECLARATION_TYPES = ("class_declaration", "protocol_declaration")

COMMENT_TYPES = ("comment", "multiline_comment")


class SwiftPlugin(LanguagePlugin):
    """Swift declaration source using tree-sitter for parsing."""

    def __init__(self):
        self._parser = None

    # =========================================================================
    # Plugin Metadata
    # =========================================================================

    @property
    def language_name(self) -> str:
        return "swift"

    @property
    def file_extensions(self) -> list[str]:
        return [".swift"]

    # =========================================================================
    # AST Parsing (using tree-sitter)
    # =========================================================================

    def _get_parser(self):
        """Lazy initialization of tree-sitter parser."""
        if self._parser is None:
            try:
                import tree_sitter_swift as tsswift
                from tree_sitter import Language, Parser

                SWIFT_LANGUAGE = Language(tsswift.language())
                self._parser = Parser(SWIFT_LANGUAGE)
            except ImportError:
                raise DeclarationSourceError(
                    "tree-sitter-swift not installed. Run: pip install tree-sitter-swift"
                )
        return self._parser

    def parse_source(self, source_code: str) -> Any:
        """Parse Swift source code into a tree-sitter AST."""
        parser = self._get_parser()
        return parser.parse(bytes(source_code, "utf-8"))

    # =========================================================================
    # Declaration Extraction
    # =========================================================================

    def extract_declarations(
        self, source_code: str, marker: str | None = None
    ) -> list[RecordDeclaration]:
        """Extract struct, class, enum, actor, protocol and extension declarations."""
        tree = self.parse_source(source_code)
        offset = char_offsets(source_code)
        if tree.root_node.has_error:
            logger.warning("Swift source has syntax errors; declarations may be incomplete")

        declarations = []
        for node in self._traverse_tree(tree.root_node):
            if node.type not in DECLARATION_TYPES:
                continue
            declaration = self._extract_declaration(node, source_code, offset, marker)
            if declaration is not None:
                declarations.append(declaration)

        logger.debug(f"Found {len(declarations)} Swift declarations")
        return declarations

    def _text(self, node: Any) -> str:
        return node.text.decode("utf-8")

    def _modifiers(self, node: Any) -> tuple[list[str], list[Any]]:
        """Split a declaration's modifiers node into keywords and attribute nodes.

        Keywords keep their qualifier without spaces, e.g. `private(set)`.
        """
        keywords: list[str] = []
        attributes: list[Any] = []
        for child in node.children:
            if child.type != "modifiers":
                continue
            for modifier in child.children:
                if modifier.type == "attribute":
                    attributes.append(modifier)
                elif modifier.type not in COMMENT_TYPES:
                    keywords.append("".join(self._text(modifier).split()))
        return keywords, attributes

    def _attribute_name(self, attribute: Any) -> str:
        for child in attribute.named_children:
            if child.type == "user_type":
                return self._text(child).rsplit(".", 1)[-1]
        return ""

    def _extract_declaration(
        self, node: Any, source_code: str, offset, marker: str | None
    ) -> RecordDeclaration | None:
        kind_node = node.child_by_field_name("declaration_kind")
        name_node = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        if kind_node is None or name_node is None or body is None:
            return None
        keyword = kind_node.type
        if keyword not in DECLARATION_KINDS:
            return None

        modifiers, attributes = self._modifiers(node)

        marker_start = marker_end = None
        if marker:
            for attribute in attributes:
                if self._attribute_name(attribute) == marker:
                    marker_start = offset(attribute.start_byte)
                    marker_end = marker_removal_end(source_code, offset(attribute.end_byte))
                    break

        start = offset(node.start_byte)
        body_close = offset(body.end_byte) - 1
        base_indent = line_indent(source_code, start)

        members: list[MemberDecl] = []
        member_indent = None
        for child in body.named_children:
            if child.type in COMMENT_TYPES:
                continue
            if member_indent is None:
                member_indent = line_indent(source_code, offset(child.start_byte))
            members.extend(self._extract_members(child))

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
            kind=DECLARATION_KINDS[keyword],
            modifiers=tuple(modifiers),
            is_final="final" in modifiers,
            type_parameters=self._type_parameters(node),
            members=tuple(members),
            span=span,
        )

    def _type_parameters(self, node: Any) -> tuple[str, ...]:
        names = []
        for clause in node.named_children:
            if clause.type != "type_parameters":
                continue
            for parameter in clause.named_children:
                if parameter.type != "type_parameter":
                    continue
                for child in parameter.named_children:
                    if child.type == "type_identifier":
                        names.append(self._text(child))
                        break
        return tuple(names)

    def _extract_members(self, node: Any) -> list[MemberDecl]:
        """Describe one body member; a `var a, b: T` line yields one entry per binding."""
        if node.type != "property_declaration":
            name_node = node.child_by_field_name("name")
            return [
                MemberDecl(
                    kind=MemberKind.OTHER,
                    name=self._text(name_node) if name_node is not None else None,
                )
            ]

        modifiers, _ = self._modifiers(node)
        is_mutable = False
        bindings: list[list[Any]] = []
        for child in node.children:
            if child.type == "value_binding_pattern":
                mutability = child.child_by_field_name("mutability")
                keyword = mutability.type if mutability is not None else self._text(child)
                is_mutable = keyword == "var"
            elif child.type == "pattern":
                bindings.append([child])
            elif bindings and child.type != ",":
                bindings[-1].append(child)

        return [
            self._binding_member(binding, is_mutable, tuple(modifiers))
            for binding in bindings
        ]

    def _binding_member(
        self, binding: list[Any], is_mutable: bool, modifiers: tuple[str, ...]
    ) -> MemberDecl:
        """Describe one binding: its pattern followed by annotation, value and accessors."""
        pattern, *rest = binding
        identifiers = pattern.named_children
        name = None
        if len(identifiers) == 1 and identifiers[0].type == "simple_identifier":
            name = self._text(identifiers[0])

        field_type = None
        has_initializer = False
        has_accessor_block = False
        for child in rest:
            if child.type == "type_annotation":
                field_type = " ".join(self._text(child).lstrip(":").split()) or None
            elif child.type == "=":
                has_initializer = True
            elif child.type == "computed_property":
                has_accessor_block = True

        # willset_didset_block is left out: observed properties are stored.
        return MemberDecl(
            kind=MemberKind.VARIABLE,
            name=name,
            type=field_type,
            is_mutable=is_mutable,
            modifiers=modifiers,
            has_initializer=has_initializer,
            has_accessor_block=has_accessor_block,
        )

    # =========================================================================
    # Rendering
    # =========================================================================

    def render_constructor(
        self, constructor: GeneratedConstructor, declaration: RecordDeclaration, indent: str
    ) -> str:
        modifiers = []
        if constructor.required:
            modifiers.append("required")
        if constructor.access_modifier:
            modifiers.append(constructor.access_modifier)
        head = "".join(f"{modifier} " for modifier in modifiers)

        parameters = ", ".join(f"{p.name}: {p.type}" for p in constructor.parameters)
        lines = [f"{head}init({parameters}) {{"]
        lines.extend(f"{indent}self.{name} = {name}" for name in constructor.assignments)
        lines.append("}")
        return "\n".join(lines)

    def render_wither(
        self, wither: GeneratedWither, declaration: RecordDeclaration, indent: str
    ) -> str:
        head = f"{wither.access_modifier} " if wither.access_modifier else ""
        parameter = wither.parameter
        arguments = ", ".join(
            f"{arg.label}: {'self.' + arg.expression if arg.via_receiver else arg.expression}"
            for arg in wither.arguments
        )
        return "\n".join([
            f"{head}func {wither.name}(_ {parameter.name}: {parameter.type}) -> Self {{",
            f"{indent}Self.init({arguments})",
            "}",
        ])
