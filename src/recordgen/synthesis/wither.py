"""
Wither synthesis.

A wither returns a new record equal to the receiver except for one field. The
replacement happens at construction time, so withers are generated the same
way for mutable and immutable fields.
"""

from typing import Sequence

from recordgen.config.models import (
    CallArgument,
    FieldDescriptor,
    GeneratedWither,
    Parameter,
)


def build_call_arguments(
    fields: Sequence[FieldDescriptor],
    target: str,
    parameter_name: str = "value",
) -> list[CallArgument]:
    """Arguments of the constructor call made by the wither for `target`.

    One argument per representable field, in declaration order. The target
    receives the wither parameter; every other field passes the receiver's
    current value.
    """
    arguments = []
    for field in fields:
        if not field.is_representable:
            continue
        if field.name == target:
            arguments.append(
                CallArgument(label=field.name, expression=parameter_name, from_parameter=True)
            )
        else:
            arguments.append(
                CallArgument(
                    label=field.name,
                    expression=field.name,
                    via_receiver=field.name == parameter_name,
                )
            )
    return arguments


def synthesize_wither(
    fields: Sequence[FieldDescriptor],
    index: int,
    access_modifier: str | None = None,
    parameter_name: str = "value",
) -> GeneratedWither | None:
    """
    Synthesize the wither for the field at `index`.

    Args:
        fields: Field descriptors in declaration order
        index: Position of the target field in `fields`
        access_modifier: The record's public/internal modifier, if any
        parameter_name: Name of the single method parameter

    Returns:
        The generated method, or None for a private or unrepresentable field
    """
    field = fields[index]
    if field.is_private or not field.is_representable:
        return None

    return GeneratedWither(
        name=field.name,
        parameter=Parameter(name=parameter_name, type=field.type),
        arguments=tuple(build_call_arguments(fields, field.name, parameter_name)),
        access_modifier=access_modifier,
    )


def synthesize_withers(
    fields: Sequence[FieldDescriptor],
    access_modifier: str | None = None,
    parameter_name: str = "value",
) -> list[GeneratedWither]:
    """Withers for every eligible field, in declaration order."""
    withers = []
    for index in range(len(fields)):
        wither = synthesize_wither(fields, index, access_modifier, parameter_name)
        if wither is not None:
            withers.append(wither)
    return withers
