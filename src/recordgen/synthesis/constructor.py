"""
Constructor synthesis.

Builds the full-field constructor of a record: one parameter per representable
field in declaration order, and a body assigning each parameter into the field
of the same name.
"""

from typing import Sequence

from recordgen.config.models import FieldDescriptor, GeneratedConstructor
from recordgen.synthesis.parameters import build_parameters


def synthesize_constructor(
    fields: Sequence[FieldDescriptor],
    access_modifier: str | None = None,
    required: bool = False,
) -> GeneratedConstructor:
    """
    Synthesize the constructor for a record.

    Parameters and assignments come from the same representable-field list, so
    every parameter is assigned exactly once and nothing else is assigned.

    Args:
        fields: Field descriptors in declaration order
        access_modifier: The record's public/internal modifier, if any
        required: Mark the constructor as required by subclasses

    Returns:
        The generated constructor (zero parameters and an empty body when no
        field is representable)
    """
    parameters = build_parameters(fields)
    return GeneratedConstructor(
        parameters=tuple(parameters),
        assignments=tuple(parameter.name for parameter in parameters),
        access_modifier=access_modifier,
        required=required,
    )
