import os

import pytest
import yaml

from pgmath.utils import DEFAULT_CONFIG, load_config

EXAMPLE_CONFIG = os.path.join(
    os.path.dirname(__file__), os.pardir, "examples", "config", "default.yaml"
)


def test_load_defaults():
    config = load_config()
    assert config.sampling.seed == 12345
    assert config.accuracy.erfc.spacing == "linear"
    assert config.toDict() == DEFAULT_CONFIG


def test_defaults_are_not_shared():
    config = load_config()
    config.sampling.seed = 1
    assert DEFAULT_CONFIG["sampling"]["seed"] == 12345
    assert load_config().sampling.seed == 12345


def test_example_config_matches_defaults():
    assert load_config(EXAMPLE_CONFIG).toDict() == DEFAULT_CONFIG


def test_partial_override(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({"sampling": {"seed": 7, "shape": 0.5}}))

    config = load_config(path)
    assert config.sampling.seed == 7
    assert config.sampling.shape == 0.5
    assert config.sampling.draws == 100000
    assert config.tolerance.erfc == DEFAULT_CONFIG["tolerance"]["erfc"]


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path).toDict() == DEFAULT_CONFIG


def test_unknown_section(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({"plotting": {"dpi": 300}}))
    with pytest.raises(ValueError, match="Unknown config sections"):
        load_config(path)


def test_not_a_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config(path)
