from __future__ import annotations

import pytest
import yaml

from topkmer.config import DEFAULTS, EngineConfig, load_config, load_config_typed, merge_dict


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(config_path=str(tmp_path / "absent.yaml"))
    assert cfg == DEFAULTS
    typed = load_config_typed(config_path=str(tmp_path / "absent.yaml"))
    assert typed.engine == EngineConfig()
    assert typed.input_format == "fastq"
    assert typed.output.separator == " | "
    assert typed.telemetry.enabled is False


def test_yaml_overrides_nested_keys(tmp_path):
    path = tmp_path / "topkmer.yaml"
    path.write_text(yaml.safe_dump({"engine": {"k_mer_size": 21, "fairness_const": 1.5}, "input_format": "lines"}))
    typed = load_config_typed(config_path=str(path))
    assert typed.engine.k_mer_size == 21
    assert typed.engine.fairness_const == 1.5
    assert typed.engine.top_n == 25
    assert typed.engine.initial_capacity_limit == 1000
    assert typed.input_format == "lines"


def test_staged_then_runtime_precedence(tmp_path):
    staged = tmp_path / "staged.yaml"
    runtime = tmp_path / "runtime.yaml"
    staged.write_text(yaml.safe_dump({"engine": {"top_n": 5, "k_mer_size": 11}}))
    runtime.write_text(yaml.safe_dump({"engine": {"top_n": 7}}))
    typed = load_config_typed(config_path=str(runtime), staged_path=str(staged))
    assert typed.engine.top_n == 7
    assert typed.engine.k_mer_size == 11


def test_merge_dict_does_not_mutate():
    a = {"x": {"y": 1, "z": 2}}
    out = merge_dict(a, {"x": {"y": 3}})
    assert out == {"x": {"y": 3, "z": 2}}
    assert a == {"x": {"y": 1, "z": 2}}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"k_mer_size": 0},
        {"top_n": -1},
        {"initial_capacity_limit": 0},
        {"capacity_increment": 0},
        {"short_sequence_policy": "ignore"},
    ],
)
def test_engine_config_validation(kwargs):
    with pytest.raises(ValueError):
        EngineConfig(**kwargs).validate()


def test_fairness_outside_recommended_range_is_allowed():
    EngineConfig(fairness_const=3.0).validate()
