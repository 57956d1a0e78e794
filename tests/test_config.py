"""Tests for river configuration."""
import pytest
import yaml

from rivermesh.config import RiverBankContour, RiverConfig
from tests.conftest import make_contours


class TestRiverConfig:
    def test_defaults_are_valid(self):
        config = RiverConfig()
        config.validate()
        assert config.num_bank_contours == 8
        assert config.river_index == 3

    def test_yaml_roundtrip(self, tmp_path):
        config = RiverConfig(river_index=1, banks=make_contours(4), track_height=1.5)
        path = tmp_path / "river.yaml"

        config.to_yaml(path)
        loaded = RiverConfig.from_yaml(path)

        assert loaded == config
        assert isinstance(loaded.banks[0], RiverBankContour)

    def test_partial_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "river.yaml"
        path.write_text(
            yaml.dump(
                {
                    "texture_tile_size": 20,
                    "river_index": 0,
                    "banks": [
                        {"x_min": -3, "x_max": -2, "z_min": 0, "z_max": 0},
                        {"x_min": 2, "x_max": 3, "z_min": 0, "z_max": 0},
                        {"x_min": 5, "x_max": 6, "z_min": 1, "z_max": 2},
                    ],
                }
            )
        )

        config = RiverConfig.from_yaml(path)

        assert config.texture_tile_size == 20
        assert config.spline_stepsize == RiverConfig().spline_stepsize
        assert config.banks[2] == RiverBankContour(5, 6, 1, 2)
        config.validate()

    def test_empty_yaml_is_default(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert RiverConfig.from_yaml(path) == RiverConfig()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"banks": make_contours(1), "river_index": 0},
            {"banks": make_contours(4), "river_index": 3},
            {"banks": make_contours(4), "river_index": -1},
            {"spline_stepsize": 0.0},
        ],
    )
    def test_validate_rejects(self, kwargs):
        with pytest.raises(ValueError):
            RiverConfig(**kwargs).validate()
