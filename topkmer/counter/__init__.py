from .engine import KmerCounter, count_kmers  # re-export convenience
from .models import EngineState, EvictionReport, IngestSummary, Mode, SequenceTooShort
from .ranking import rank, top

__all__ = [
    "KmerCounter",
    "count_kmers",
    "EngineState",
    "EvictionReport",
    "IngestSummary",
    "Mode",
    "SequenceTooShort",
    "rank",
    "top",
]
