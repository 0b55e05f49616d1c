from . import scoring
from .scoring import (
    InvalidInputError,
    aggregate,
    classify,
    project_current_state,
    resolve_meaning,
    score,
)

__all__ = [
    "scoring",
    "InvalidInputError",
    "aggregate",
    "classify",
    "project_current_state",
    "resolve_meaning",
    "score",
]
