"""Tests for the design and render settings models."""

import pytest
from pydantic import ValidationError

from kolamgen.models.design import KolamDesign
from kolamgen.models.render import AnimationSettings, RenderSettings


class TestRenderSettings:
    def test_defaults(self):
        settings = RenderSettings()
        assert settings.background_color == "#7B3306"
        assert settings.stroke_color is None
        assert settings.scale == 1.0
        assert settings.samples_per_segment == 16
        assert not settings.animation.enabled
        assert settings.animation.speed == 5

    @pytest.mark.parametrize("speed", [0, 11])
    def test_speed_range(self, speed):
        with pytest.raises(ValidationError):
            AnimationSettings(speed=speed)

    @pytest.mark.parametrize("scale", [0, -1, 9])
    def test_scale_range(self, scale):
        with pytest.raises(ValidationError):
            RenderSettings(scale=scale)

    def test_nested_animation_from_dict(self):
        settings = RenderSettings(**{"animation": {"enabled": True, "speed": 8, "loop": True}})
        assert settings.animation.enabled
        assert settings.animation.speed == 8
        assert settings.animation.loop


class TestKolamDesign:
    def test_from_pattern(self, sample_pattern, small_matrix):
        design = KolamDesign.from_pattern(sample_pattern, name="Ring", seed=4)
        assert design.name == "Ring"
        assert design.size == 3
        assert design.seed == 4
        assert design.cell_spacing == 60.0
        assert design.matrix == small_matrix.tolist()

    def test_default_name(self, sample_pattern):
        assert KolamDesign.from_pattern(sample_pattern).name == "Kolam 3x3"

    def test_to_pattern_recompiles(self, sample_pattern):
        design = KolamDesign.from_pattern(sample_pattern)
        assert design.to_pattern() == sample_pattern

    def test_rejects_non_square(self):
        with pytest.raises(ValidationError, match="square"):
            KolamDesign(name="bad", size=2, matrix=[[1, 1], [1]])

    def test_rejects_unknown_tile(self):
        with pytest.raises(ValidationError, match="unknown tile id"):
            KolamDesign(name="bad", size=2, matrix=[[1, 1], [1, 20]])

    def test_rejects_size_mismatch(self):
        with pytest.raises(ValidationError, match="size is 3"):
            KolamDesign(name="bad", size=3, matrix=[[1, 1], [1, 1]])

    def test_rejects_small_size(self):
        with pytest.raises(ValidationError):
            KolamDesign(name="bad", size=1, matrix=[[1]])
