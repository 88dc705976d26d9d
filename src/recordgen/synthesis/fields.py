"""
Field extraction.

Turns the ordered member list of a declaration into field descriptors. The
resulting order is the canonical field order used by every generated member.
"""

from typing import Iterable

from recordgen.config.models import (
    PRIVATE_MODIFIERS,
    TYPE_LEVEL_MODIFIERS,
    FieldDescriptor,
    MemberDecl,
    MemberKind,
)

STORED = "stored"
COMPUTED = "computed"
TYPE_LEVEL = "static"
NOT_A_FIELD = "other"


def classify_member(member: MemberDecl) -> str:
    """Classify a member as stored, computed, static or not a field at all."""
    if member.kind != MemberKind.VARIABLE:
        return NOT_A_FIELD
    if member.has_accessor_block:
        return COMPUTED
    if TYPE_LEVEL_MODIFIERS.intersection(member.modifiers):
        return TYPE_LEVEL
    return STORED


def is_private(member: MemberDecl) -> bool:
    return bool(PRIVATE_MODIFIERS.intersection(member.modifiers))


def describe_member(member: MemberDecl) -> FieldDescriptor:
    """Build the descriptor of a stored member."""
    return FieldDescriptor(
        name=member.name,
        type=member.type,
        is_mutable=member.is_mutable,
        is_private=is_private(member),
        has_default_value=member.has_initializer,
    )


def extract_fields(members: Iterable[MemberDecl]) -> list[FieldDescriptor]:
    """Return descriptors for the stored instance fields, in declaration order.

    Types, functions, initializers, computed properties and type-level bindings
    are skipped without error.
    """
    return [describe_member(member) for member in members if classify_member(member) == STORED]
