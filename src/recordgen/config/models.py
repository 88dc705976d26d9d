"""
Core models for recordgen.

Defines the structured declaration handed over by a declaration source, the
derived field descriptors, the generated members, and the configuration
structures. Everything uses Pydantic for validation.
"""

from enum import Enum
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class LanguageType(str, Enum):
    """Supported declaration source languages."""

    SWIFT = "swift"
    JAVA = "java"


class AggregateKind(str, Enum):
    """Kind of a type declaration."""

    VALUE = "value"  # struct
    REFERENCE = "reference"  # class
    OTHER = "other"  # enum, protocol, extension, actor, interface, ...


class MemberKind(str, Enum):
    """Kind of a member inside a declaration body."""

    VARIABLE = "variable"
    OTHER = "other"


# Modifiers that hide a field from the record's external surface.
PRIVATE_MODIFIERS = frozenset({"private", "fileprivate"})

# Modifiers that make a binding belong to the type rather than the instance.
TYPE_LEVEL_MODIFIERS = frozenset({"static", "class"})

# Record modifiers copied onto generated members.
COPIED_ACCESS_MODIFIERS = ("public", "internal")


# ============================================================================
# Declaration Input
# ============================================================================


class SourceSpan(BaseModel):
    """Character offsets of a declaration inside its source text."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(description="Offset of the first character of the declaration")
    end: int = Field(description="Offset just past the closing brace")
    body_close: int = Field(description="Offset of the closing brace of the body")
    marker_start: int | None = Field(default=None, description="Offset of the marker attribute")
    marker_end: int | None = Field(default=None, description="Offset just past the marker line")
    member_indent: str = Field(default="    ", description="Indentation used by body members")
    base_indent: str = Field(default="", description="Indentation of the declaration itself")


class MemberDecl(BaseModel):
    """One member of a declaration body, as supplied by a declaration source."""

    model_config = ConfigDict(frozen=True)

    kind: MemberKind = Field(default=MemberKind.VARIABLE)
    name: str | None = Field(default=None, description="First binding identifier")
    type: str | None = Field(default=None, description="Type annotation text of the first binding")
    is_mutable: bool = Field(default=False, description="Declared reassignable (var / non-final)")
    modifiers: tuple[str, ...] = Field(default=(), description="Modifier keywords in source order")
    has_initializer: bool = Field(default=False, description="First binding has an initial value")
    has_accessor_block: bool = Field(default=False, description="First binding defines accessors")


class RecordDeclaration(BaseModel):
    """A type declaration whose body lists fields."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: AggregateKind
    modifiers: tuple[str, ...] = Field(default=())
    is_final: bool = Field(default=False, description="Cannot be further specialized")
    type_parameters: tuple[str, ...] = Field(default=(), description="Generic parameter names")
    members: tuple[MemberDecl, ...] = Field(default=())
    span: SourceSpan | None = Field(default=None, description="Location in the parsed source")

    @property
    def access_modifier(self) -> str | None:
        """The record's public/internal modifier, if it declares one."""
        for modifier in self.modifiers:
            if modifier in COPIED_ACCESS_MODIFIERS:
                return modifier
        return None

    @property
    def is_record(self) -> bool:
        return self.kind in (AggregateKind.VALUE, AggregateKind.REFERENCE)


# ============================================================================
# Derived Descriptors
# ============================================================================


class FieldDescriptor(BaseModel):
    """Order-preserving summary of one stored field."""

    model_config = ConfigDict(frozen=True)

    name: str | None
    type: str | None
    is_mutable: bool = False
    is_private: bool = False
    has_default_value: bool = False

    @property
    def is_representable(self) -> bool:
        """Both an identifier and an explicit type are known."""
        return self.name is not None and self.type is not None


class Parameter(BaseModel):
    """A constructor or method parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str


class CallArgument(BaseModel):
    """One labeled argument of the constructor call inside a wither."""

    model_config = ConfigDict(frozen=True)

    label: str
    expression: str
    from_parameter: bool = Field(default=False, description="Argument is the wither's own parameter")
    via_receiver: bool = Field(
        default=False, description="Field must be read through an explicit receiver reference"
    )


class GeneratedConstructor(BaseModel):
    """Full-field constructor synthesized for a record."""

    model_config = ConfigDict(frozen=True)

    parameters: tuple[Parameter, ...] = Field(default=())
    assignments: tuple[str, ...] = Field(default=(), description="Field names assigned in order")
    access_modifier: str | None = None
    required: bool = Field(default=False, description="Subclasses must provide a compatible constructor")


class GeneratedWither(BaseModel):
    """Method returning a copy of the record with one field replaced."""

    model_config = ConfigDict(frozen=True)

    name: str
    parameter: Parameter
    arguments: tuple[CallArgument, ...] = Field(default=())
    access_modifier: str | None = None


GeneratedMember = Union[GeneratedConstructor, GeneratedWither]


# ============================================================================
# Configuration
# ============================================================================


class SynthesisConfig(BaseModel):
    """Configuration for constructor and wither synthesis."""

    strict: bool = Field(
        default=False, description="Raise on fields lacking an identifier or a type annotation"
    )
    parameter_name: str = Field(default="value", description="Name of the wither parameter")
    marker: str = Field(
        default="Buildable", description="Attribute/annotation selecting declarations to expand"
    )


class OutputConfig(BaseModel):
    """Configuration for rendering generated members."""

    indent: str | None = Field(
        default=None, description="Indent unit for generated members (detected from source if unset)"
    )
    output_path: Path | None = Field(default=None, description="Write expanded source here")


class RecordGenConfig(BaseModel):
    """Root configuration for recordgen."""

    language: LanguageType | None = Field(
        default=None, description="Force a declaration source language (detected from extension if unset)"
    )
    synthesis: SynthesisConfig = Field(default_factory=SynthesisConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
