"""Profanity filter: weighted term lists, obfuscation patterns and risk scoring."""

from .detector import ProfanityFilter, FilterConfig, classify, detect
from .scoring import score
from .service import FilterService, InvalidRequest
from .sinks import MemorySink, NullSink, FilteringLog, HiddenState
from .sink_sqlite import SqliteSink
from .config import create_service, load_config, load_from_yaml
from .types import (
    Action, Assessment, Category, Level, Match, ObfuscationPattern, Technique, TermList,
)

__all__ = [
    "ProfanityFilter", "FilterConfig",
    "classify", "detect", "score",
    "FilterService", "InvalidRequest",
    "MemorySink", "NullSink", "SqliteSink", "FilteringLog", "HiddenState",
    "create_service", "load_config", "load_from_yaml",
    "Action", "Assessment", "Category", "Level", "Match",
    "ObfuscationPattern", "Technique", "TermList",
]
__version__ = "0.1.0"
