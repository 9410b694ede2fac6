"""Context assembly and profile constraint parsing."""

from plan_engine.context.assembler import assemble_context, validate_context
from plan_engine.context.profile import StoredProfile, default_constraints, parse_profile_constraints

__all__ = [
    "StoredProfile",
    "assemble_context",
    "default_constraints",
    "parse_profile_constraints",
    "validate_context",
]
