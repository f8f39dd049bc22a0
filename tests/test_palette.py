# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""End-to-end tests for Palette and PaletteBuilder."""

import json

import numpy as np
import pytest
from PIL import Image

from chromacut import (
    DEFAULT_TARGETS,
    LIGHT_VIBRANT,
    MUTED,
    VIBRANT,
    Palette,
    PaletteBuilder,
    PaletteConfig,
    Swatch,
    Target,
    TargetBuilder,
)


def _solid(color, width=10, height=10):
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, :] = color
    return img


def _halves(left, right, width=10, height=10):
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, : width // 2] = left
    img[:, width // 2:] = right
    return img


class TestFromImage:

    def test_uniform_gray(self):
        palette = Palette.from_image(_solid((128, 128, 128))).generate()
        assert palette.swatches == (Swatch((128, 128, 128), 100),)
        assert palette.dominant_swatch == Swatch((128, 128, 128), 100)
        assert palette.muted_swatch == Swatch((128, 128, 128), 100)
        assert palette.vibrant_swatch is None
        assert palette.light_vibrant_swatch is None
        assert palette.dark_vibrant_swatch is None

    def test_red_and_blue_halves(self):
        palette = Palette.from_image(_halves((255, 0, 0), (0, 0, 255))).generate()
        red, blue = Swatch((248, 0, 0), 50), Swatch((0, 0, 248), 50)
        assert set(palette.swatches) == {red, blue}
        # Equal scores and populations: the swatch listed first wins
        first = palette.swatches[0]
        assert palette.vibrant_swatch == first
        assert palette.dominant_swatch == first
        for swatch in (
            palette.light_vibrant_swatch,
            palette.dark_vibrant_swatch,
            palette.light_muted_swatch,
            palette.muted_swatch,
            palette.dark_muted_swatch,
        ):
            assert swatch is None

    def test_black_and_white_filtered(self):
        palette = Palette.from_image(_halves((0, 0, 0), (255, 255, 255))).generate()
        assert palette.swatches == ()
        assert palette.dominant_swatch is None
        assert all(s is None for s in palette.selected_swatches.values())

    def test_pil_image_and_path(self, tmp_path):
        arr = _solid((30, 144, 255))
        path = tmp_path / "blue.png"
        Image.fromarray(arr).save(path)

        from_array = Palette.from_image(arr).generate()
        from_pil = Palette.from_image(Image.fromarray(arr)).generate()
        from_path = Palette.from_image(path).generate()
        assert from_array.swatches == from_pil.swatches == from_path.swatches

    def test_swatch_count_bounded(self):
        rng = np.random.RandomState(0)
        img = rng.randint(0, 256, size=(60, 60, 3)).astype(np.uint8)
        palette = Palette.from_image(img).maximum_color_count(4).generate()
        assert 0 < len(palette.swatches) <= 4

    def test_config(self):
        rng = np.random.RandomState(1)
        img = rng.randint(0, 256, size=(60, 60, 3)).astype(np.uint8)
        palette = Palette.from_image(img, PaletteConfig(max_colors=3)).generate()
        assert len(palette.swatches) <= 3


class TestBuilder:

    def test_requires_exactly_one_source(self):
        with pytest.raises(ValueError):
            PaletteBuilder()
        with pytest.raises(ValueError):
            PaletteBuilder(_solid((1, 2, 3)), swatches=[Swatch((1, 2, 3), 1)])

    def test_empty_swatches_rejected(self):
        with pytest.raises(ValueError):
            PaletteBuilder.from_swatches([])

    def test_invalid_max_colors(self):
        with pytest.raises(ValueError):
            Palette.from_image(_solid((1, 2, 3))).maximum_color_count(0)

    def test_region(self):
        img = _halves((255, 0, 0), (0, 0, 255), width=20)
        palette = Palette.from_image(img).set_region(10, 0, 20, 10).generate()
        assert palette.swatches == (Swatch((0, 0, 248), 100),)

    def test_region_clipped_to_image(self):
        img = _halves((255, 0, 0), (0, 0, 255), width=20)
        palette = Palette.from_image(img).set_region(10, -5, 40, 40).generate()
        assert palette.swatches == (Swatch((0, 0, 248), 100),)

    def test_region_outside_image(self):
        with pytest.raises(ValueError):
            Palette.from_image(_solid((1, 2, 3))).set_region(50, 50, 60, 60)

    def test_clear_region(self):
        img = _halves((255, 0, 0), (0, 0, 255), width=20)
        palette = (
            Palette.from_image(img).set_region(10, 0, 20, 10).clear_region().generate()
        )
        assert len(palette.swatches) == 2

    def test_region_survives_resize(self):
        img = _halves((255, 0, 0), (0, 0, 255), width=400, height=200)
        palette = Palette.from_image(img).set_region(200, 0, 400, 200).generate()
        assert palette.dominant_swatch.rgb == (0, 0, 248)
        # Scaled to roughly the default area
        assert sum(s.population for s in palette.swatches) < 200 * 200

    def test_resize_area(self):
        img = _solid((30, 144, 255), width=200, height=200)
        palette = Palette.from_image(img).resize_image_area(100).generate()
        # Dimensions round up
        assert 100 <= palette.dominant_swatch.population <= 121

    def test_resize_disabled(self):
        img = _solid((30, 144, 255), width=200, height=200)
        palette = Palette.from_image(img).resize_image_area(0).generate()
        assert palette.dominant_swatch.population == 200 * 200

    def test_resize_max_dimension(self):
        img = _solid((30, 144, 255), width=200, height=100)
        palette = Palette.from_image(img).resize_max_dimension(50).generate()
        assert palette.dominant_swatch.population == 50 * 25

    def test_clear_filters(self):
        img = _halves((0, 0, 0), (255, 255, 255))
        palette = Palette.from_image(img).clear_filters().generate()
        assert len(palette.swatches) == 2

    def test_add_filter(self):
        class RejectBlue:
            def is_allowed(self, rgb, hsl):
                return not rgb[2] > max(rgb[0], rgb[1])

        img = _halves((255, 0, 0), (0, 0, 255))
        palette = Palette.from_image(img).add_filter(RejectBlue()).generate()
        assert palette.swatches == (Swatch((248, 0, 0), 50),)

    def test_custom_targets(self):
        accent = TargetBuilder(VIBRANT).set_name("accent").build()
        builder = Palette.from_image(_solid((255, 0, 0))).clear_targets()
        builder.add_target(accent).add_target(accent)
        palette = builder.generate()
        assert palette.targets == (accent,)
        assert palette.get_swatch_for_target(accent).rgb == (248, 0, 0)
        assert palette.vibrant_swatch is None

    def test_add_targets_appends_to_defaults(self):
        extra = Target()
        palette = PaletteBuilder.from_swatches([Swatch((128, 128, 128), 1)]).add_targets(
            [extra]
        ).generate()
        assert palette.targets == DEFAULT_TARGETS + (extra,)


class TestFromSwatches:

    def test_uses_default_targets(self):
        swatches = [Swatch((255, 0, 0), 100), Swatch((128, 128, 128), 50)]
        palette = Palette.from_swatches(swatches)
        assert palette.targets == DEFAULT_TARGETS
        assert palette.vibrant_swatch is swatches[0]
        assert palette.muted_swatch is swatches[1]
        assert palette.dominant_swatch is swatches[0]

    def test_dominant_first_wins_ties(self):
        swatches = [Swatch((10, 200, 10), 9), Swatch((200, 10, 10), 9), Swatch((1, 1, 1), 5)]
        assert Palette.from_swatches(swatches).dominant_swatch is swatches[0]

    def test_generate_is_repeatable(self):
        palette = Palette.from_swatches([Swatch((255, 51, 51), 40), Swatch((255, 0, 0), 100)])
        before = palette.selected_swatches
        palette.generate()
        assert palette.selected_swatches == before

    def test_exclusive_light_vibrant_takes_swatch_first(self):
        light_red = Swatch((255, 51, 51), 40)
        palette = Palette.from_swatches([light_red])
        assert palette.light_vibrant_swatch is light_red
        assert palette.vibrant_swatch is None


class TestAccessors:

    @pytest.fixture
    def palette(self):
        return Palette.from_swatches([Swatch((255, 0, 0), 100), Swatch((128, 128, 128), 50)])

    def test_colors(self, palette):
        assert palette.vibrant_color() == (255, 0, 0)
        assert palette.muted_color() == (128, 128, 128)
        assert palette.get_dominant_color() == (255, 0, 0)

    def test_default_when_missing(self, palette):
        assert palette.light_vibrant_color() is None
        assert palette.light_vibrant_color((1, 2, 3)) == (1, 2, 3)
        assert palette.dark_muted_color((4, 5, 6)) == (4, 5, 6)

    def test_unknown_target(self, palette):
        other = Target()
        assert palette.get_swatch_for_target(other) is None
        assert palette.get_color_for_target(other, (7, 8, 9)) == (7, 8, 9)

    def test_selected_swatches_is_a_copy(self, palette):
        palette.selected_swatches[VIBRANT] = None
        assert palette.vibrant_swatch is not None

    def test_empty_palette(self):
        palette = Palette([], DEFAULT_TARGETS)
        palette.generate()
        assert palette.dominant_swatch is None
        assert palette.get_dominant_color((0, 0, 0)) == (0, 0, 0)
        assert palette.vibrant_swatch is None


class TestSerialization:

    def test_to_json(self):
        palette = Palette.from_swatches([Swatch((255, 0, 0), 100)])
        data = json.loads(palette.to_json())
        assert data["dominant"]["hex"] == "#FF0000"
        assert data["targets"]["vibrant"]["hex"] == "#FF0000"
        assert data["targets"]["light_vibrant"] is None
        assert [s["hex"] for s in data["swatches"]] == ["#FF0000"]

    def test_unnamed_targets_get_index_labels(self):
        custom = Target()
        palette = PaletteBuilder.from_swatches([Swatch((128, 128, 128), 1)]).clear_targets()
        palette = palette.add_targets([MUTED, custom]).generate()
        assert list(palette.to_dict()["targets"]) == ["muted", "target_1"]

    def test_duplicate_names_keep_both_results(self):
        swatch = Swatch((200, 40, 40), 10)
        first = TargetBuilder().set_name("x").build()
        second = TargetBuilder().set_name("x").build()
        palette = (
            PaletteBuilder.from_swatches([swatch])
            .clear_targets()
            .add_targets([first, second])
            .generate()
        )
        assert palette.get_swatch_for_target(first) is swatch
        assert palette.get_swatch_for_target(second) is None

        targets = palette.to_dict()["targets"]
        assert list(targets) == ["x", "x_1"]
        assert targets["x"]["hex"] == "#C82828"
        assert targets["x_1"] is None

    def test_custom_target_named_like_preset(self):
        custom = TargetBuilder(VIBRANT).set_name("vibrant").build()
        palette = PaletteBuilder.from_swatches([Swatch((255, 0, 0), 1)]).add_target(
            custom
        ).generate()
        names = palette.target_names()
        assert names[VIBRANT] == "vibrant"
        assert names[custom] == "vibrant_6"
        assert len(set(names.values())) == len(palette.targets)

    def test_repr(self):
        palette = Palette.from_swatches([Swatch((255, 0, 0), 100)])
        assert repr(palette).startswith("Palette(swatches=1, targets=6")

    def test_light_vibrant_constant_is_exported(self):
        assert LIGHT_VIBRANT in Palette.from_swatches([Swatch((1, 2, 3), 1)]).targets
