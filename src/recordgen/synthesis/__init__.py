"""
Constructor and wither synthesis for record declarations.

Extracts the stored fields of a struct or class, synthesizes a full-field
constructor, and one wither per non-private field that returns a copy of the
record with that field replaced.
"""

from recordgen.synthesis.assembler import (
    MemberReport,
    assemble_members,
    describe_fields,
)
from recordgen.synthesis.constructor import synthesize_constructor
from recordgen.synthesis.fields import extract_fields
from recordgen.synthesis.parameters import build_parameter
from recordgen.synthesis.wither import synthesize_wither

__all__ = [
    "MemberReport",
    "assemble_members",
    "build_parameter",
    "describe_fields",
    "extract_fields",
    "synthesize_constructor",
    "synthesize_wither",
]
