"""Personal name handling: particle parsing and creator conversion."""

from zotcsl.names.creators import (
    creator_to_csl_name,
    csl_name_to_creator,
    csl_name_to_creator_name,
    join_particles,
)
from zotcsl.names.particles import parse_particles, split_particles, strip_name_quotes

__all__ = [
    "creator_to_csl_name",
    "csl_name_to_creator",
    "csl_name_to_creator_name",
    "join_particles",
    "parse_particles",
    "split_particles",
    "strip_name_quotes",
]
