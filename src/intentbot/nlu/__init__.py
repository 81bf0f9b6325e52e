"""Natural language understanding: pattern compilation, extraction and ranking."""

from intentbot.nlu.extractor import extract_parameters, extract_slots
from intentbot.nlu.patterns import (
    CompiledPattern,
    PatternCompilationError,
    compile_pattern,
)
from intentbot.nlu.ranker import MatchCandidate, best_match, find_matching_intents
from intentbot.nlu.slots import SlotSpec, SlotType, slot_spec_from_dict
from intentbot.nlu.validator import coerce_value, validate_parameters

__all__ = [
    "CompiledPattern",
    "MatchCandidate",
    "PatternCompilationError",
    "SlotSpec",
    "SlotType",
    "best_match",
    "coerce_value",
    "compile_pattern",
    "extract_parameters",
    "extract_slots",
    "find_matching_intents",
    "slot_spec_from_dict",
    "validate_parameters",
]
