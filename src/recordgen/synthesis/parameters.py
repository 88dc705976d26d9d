"""
Constructor parameter building.
"""

from typing import Iterable

from recordgen.config.models import FieldDescriptor, Parameter


def unrepresentable_reason(field: FieldDescriptor) -> str | None:
    """Explain why a field cannot appear in generated code, or None if it can."""
    if field.name is None:
        return "binding pattern is not a plain identifier"
    if field.type is None:
        return "missing explicit type annotation"
    return None


def build_parameter(field: FieldDescriptor) -> Parameter | None:
    """Turn a field into a constructor parameter, or None when not representable."""
    if not field.is_representable:
        return None
    return Parameter(name=field.name, type=field.type)


def build_parameters(fields: Iterable[FieldDescriptor]) -> list[Parameter]:
    """Parameters for every representable field, keeping relative order."""
    parameters = []
    for field in fields:
        parameter = build_parameter(field)
        if parameter is not None:
            parameters.append(parameter)
    return parameters
