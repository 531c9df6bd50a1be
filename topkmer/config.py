from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Any

import yaml


HARSH_MODE_CAPACITY = 15000
CAPACITY_INCREMENT = 1000

DEFAULTS = {
    'engine': {
        'k_mer_size': 30,
        'top_n': 25,
        'fairness_const': 1.25,
        'initial_capacity_limit': 1000,
        'harsh_mode_threshold_capacity': HARSH_MODE_CAPACITY,
        'capacity_increment': CAPACITY_INCREMENT,
        'short_sequence_policy': 'abort',
    },
    'input_format': 'fastq',
    'output': {'path': 'output.txt', 'separator': ' | '},
    'progress_every': 100000,
    'telemetry': {'enabled': False, 'base_dir': 'telemetry'},
}

SHORT_SEQUENCE_POLICIES = ('abort', 'skip')
INPUT_FORMATS = ('fastq', 'fasta', 'lines')


def load_yaml(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}
    with open(path, 'r') as f:
        return yaml.safe_load(f) or {}


def merge_dict(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = merge_dict(out[k], v)
        else:
            out[k] = v
    return out


def load_config(config_path: str = 'configs/topkmer.yaml', staged_path: str | None = None) -> Dict[str, Any]:
    cfg = dict(DEFAULTS)
    if staged_path and os.path.exists(staged_path):
        cfg = merge_dict(cfg, load_yaml(staged_path))
    cfg = merge_dict(cfg, load_yaml(config_path))
    return cfg


@dataclass
class EngineConfig:
    k_mer_size: int = 30
    top_n: int = 25
    # recommended range 1.0 - 2.0; larger keeps more low-count entries
    fairness_const: float = 1.25
    initial_capacity_limit: int = 1000
    harsh_mode_threshold_capacity: int = HARSH_MODE_CAPACITY
    capacity_increment: int = CAPACITY_INCREMENT
    short_sequence_policy: str = 'abort'

    def validate(self):
        if self.k_mer_size < 1:
            raise ValueError(f"k_mer_size must be >= 1, got {self.k_mer_size}")
        if self.top_n < 0:
            raise ValueError(f"top_n must be >= 0, got {self.top_n}")
        if self.initial_capacity_limit < 1:
            raise ValueError("initial_capacity_limit must be >= 1")
        if self.capacity_increment < 1:
            raise ValueError("capacity_increment must be >= 1")
        if self.short_sequence_policy not in SHORT_SEQUENCE_POLICIES:
            raise ValueError(f"short_sequence_policy must be one of {SHORT_SEQUENCE_POLICIES}")


@dataclass
class OutputConfig:
    path: str = 'output.txt'
    separator: str = ' | '


@dataclass
class TelemetryConfig:
    enabled: bool = False
    base_dir: str = 'telemetry'


@dataclass
class CounterConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    input_format: str = 'fastq'
    output: OutputConfig = field(default_factory=OutputConfig)
    progress_every: int = 100000
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)

    def validate(self):
        self.engine.validate()
        if self.input_format not in INPUT_FORMATS:
            raise ValueError(f"input_format must be one of {INPUT_FORMATS}")


def _get(d: Dict[str, Any], key: str, default):
    return d.get(key, default)


def load_config_typed(config_path: str = 'configs/topkmer.yaml', staged_path: str | None = None) -> CounterConfig:
    raw = load_config(config_path=config_path, staged_path=staged_path)
    eng = _get(raw, 'engine', {})
    engine = EngineConfig(
        k_mer_size=int(_get(eng, 'k_mer_size', 30)),
        top_n=int(_get(eng, 'top_n', 25)),
        fairness_const=float(_get(eng, 'fairness_const', 1.25)),
        initial_capacity_limit=int(_get(eng, 'initial_capacity_limit', 1000)),
        harsh_mode_threshold_capacity=int(_get(eng, 'harsh_mode_threshold_capacity', HARSH_MODE_CAPACITY)),
        capacity_increment=int(_get(eng, 'capacity_increment', CAPACITY_INCREMENT)),
        short_sequence_policy=str(_get(eng, 'short_sequence_policy', 'abort')),
    )
    output = OutputConfig(
        path=str(_get(_get(raw, 'output', {}), 'path', 'output.txt')),
        separator=str(_get(_get(raw, 'output', {}), 'separator', ' | ')),
    )
    telemetry = TelemetryConfig(
        enabled=bool(_get(_get(raw, 'telemetry', {}), 'enabled', False)),
        base_dir=str(_get(_get(raw, 'telemetry', {}), 'base_dir', 'telemetry')),
    )
    return CounterConfig(
        engine=engine,
        input_format=str(_get(raw, 'input_format', 'fastq')),
        output=output,
        progress_every=int(_get(raw, 'progress_every', 100000)),
        telemetry=telemetry,
    )
