"""
Declaration assembly.

Entry point of the synthesis pipeline: given one declaration, returns the
ordered list of members to append to it (constructor first, then one wither per
eligible field in declaration order).
"""

import logging
from dataclasses import dataclass

from recordgen.config.models import (
    AggregateKind,
    FieldDescriptor,
    GeneratedMember,
    RecordDeclaration,
    SynthesisConfig,
)
from recordgen.exceptions import DuplicateFieldError, UnrepresentableFieldError
from recordgen.synthesis.constructor import synthesize_constructor
from recordgen.synthesis.fields import (
    STORED,
    classify_member,
    describe_member,
    extract_fields,
)
from recordgen.synthesis.parameters import unrepresentable_reason
from recordgen.synthesis.wither import synthesize_withers

logger = logging.getLogger(__name__)


@dataclass
class MemberReport:
    """How a single member of a declaration is treated by synthesis."""

    name: str | None
    type: str | None
    classification: str
    representable: bool = False
    private: bool = False
    mutable: bool = False
    has_default: bool = False
    wither: bool = False


def validate_fields(
    declaration: RecordDeclaration,
    fields: list[FieldDescriptor],
    strict: bool = False,
) -> None:
    """Reject duplicate field names, and unrepresentable fields in strict mode."""
    seen: set[str] = set()
    for field in fields:
        reason = unrepresentable_reason(field)
        if reason is not None:
            if strict:
                raise UnrepresentableFieldError(declaration.name, field.name, reason)
            logger.debug(f"Skipping field {field.name!r} of {declaration.name}: {reason}")
            continue
        if field.name in seen:
            raise DuplicateFieldError(declaration.name, field.name)
        seen.add(field.name)


def requires_compatible_subclass_init(declaration: RecordDeclaration) -> bool:
    """Reference aggregates open to subclassing need a required constructor."""
    return declaration.kind == AggregateKind.REFERENCE and not declaration.is_final


def assemble_members(
    declaration: RecordDeclaration,
    config: SynthesisConfig | None = None,
) -> list[GeneratedMember]:
    """
    Synthesize the members to append to a declaration.

    Args:
        declaration: The declaration to expand
        config: Synthesis options (defaults apply when omitted)

    Returns:
        [constructor, withers...] for a struct or class, [] for any other kind

    Raises:
        DuplicateFieldError: Two representable fields share a name
        UnrepresentableFieldError: In strict mode, a field lacks a name or type
    """
    config = config or SynthesisConfig()

    if not declaration.is_record:
        logger.debug(f"{declaration.name} is not a struct or class, nothing to generate")
        return []

    fields = extract_fields(declaration.members)
    validate_fields(declaration, fields, strict=config.strict)

    access_modifier = declaration.access_modifier
    constructor = synthesize_constructor(
        fields,
        access_modifier=access_modifier,
        required=requires_compatible_subclass_init(declaration),
    )
    withers = synthesize_withers(fields, access_modifier, config.parameter_name)

    logger.info(
        f"Synthesized {declaration.name}: {len(constructor.parameters)} constructor "
        f"parameters, {len(withers)} withers"
    )
    return [constructor, *withers]


def describe_fields(declaration: RecordDeclaration) -> list[MemberReport]:
    """Report how every variable member of a declaration is treated."""
    reports = []
    for member in declaration.members:
        classification = classify_member(member)
        if classification != STORED:
            if member.name is not None:
                reports.append(MemberReport(member.name, member.type, classification))
            continue

        field = describe_member(member)
        reports.append(
            MemberReport(
                name=field.name,
                type=field.type,
                classification=classification,
                representable=field.is_representable,
                private=field.is_private,
                mutable=field.is_mutable,
                has_default=field.has_default_value,
                wither=declaration.is_record and field.is_representable and not field.is_private,
            )
        )
    return reports
