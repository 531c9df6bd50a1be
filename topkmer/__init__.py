from .config import CounterConfig, EngineConfig, load_config_typed
from .counter import KmerCounter, SequenceTooShort, count_kmers

__all__ = [
    "CounterConfig",
    "EngineConfig",
    "load_config_typed",
    "KmerCounter",
    "SequenceTooShort",
    "count_kmers",
]
