import pytest

from combofinder.models.color_identity import (
    COLOR_ORDER,
    ColorIdentity,
    InvalidColorError,
    color_order_rank,
)


class TestCanonicalForm:
    def test_sorted_in_wubrg_order(self) -> None:
        assert ColorIdentity("gw").colors == "wg"
        assert ColorIdentity("BRU").colors == "ubr"

    def test_deduplicates(self) -> None:
        assert ColorIdentity("ggw").colors == "wg"

    def test_colorless_marker(self) -> None:
        assert ColorIdentity("c").colors == ""
        assert ColorIdentity("").is_colorless

    def test_equality_by_canonical_form(self) -> None:
        assert ColorIdentity("bw") == ColorIdentity("WB")
        assert ColorIdentity("w") != ColorIdentity("wb")

    def test_from_iterable(self) -> None:
        assert ColorIdentity.from_colors(["G", "R"]) == ColorIdentity("rg")
        assert ColorIdentity.from_colors(None) == ColorIdentity()

    def test_rejects_unknown_letters(self) -> None:
        with pytest.raises(InvalidColorError):
            ColorIdentity("wx")

    def test_str_of_colorless(self) -> None:
        assert str(ColorIdentity()) == "c"
        assert str(ColorIdentity("ub")) == "ub"


class TestSubsetPredicates:
    def test_subset(self) -> None:
        assert ColorIdentity("g").is_subset_of(ColorIdentity("bg"))
        assert not ColorIdentity("wb").is_subset_of(ColorIdentity("g"))

    def test_equal_is_subset(self) -> None:
        assert ColorIdentity("ub").is_subset_of(ColorIdentity("bu"))

    def test_colorless_subset_of_everything(self) -> None:
        assert ColorIdentity().is_subset_of(ColorIdentity())
        assert ColorIdentity().is_subset_of(ColorIdentity("r"))

    def test_superset(self) -> None:
        assert ColorIdentity("wubrg").is_superset_of(ColorIdentity("rg"))
        assert not ColorIdentity("r").is_superset_of(ColorIdentity("rg"))

    def test_union_and_difference(self) -> None:
        assert ColorIdentity("w").union(ColorIdentity("g")) == ColorIdentity("wg")
        assert ColorIdentity.all_colors().difference(ColorIdentity("ub")) == ColorIdentity("wrg")

    def test_contains(self) -> None:
        assert "U" in ColorIdentity("ub")
        assert "g" not in ColorIdentity("ub")


class TestColorOrderRank:
    def test_table_covers_every_identity_once(self) -> None:
        """All 32 color sets appear exactly once, already canonical."""
        assert len(COLOR_ORDER) == 32
        assert len(set(COLOR_ORDER)) == 32
        for colors in COLOR_ORDER:
            assert ColorIdentity(colors).colors == colors

    def test_colorless_first(self) -> None:
        assert color_order_rank(ColorIdentity()) == 0

    def test_mono_before_guild_before_three_color(self) -> None:
        mono = color_order_rank(ColorIdentity("g"))
        guild = color_order_rank(ColorIdentity("wb"))
        shard = color_order_rank(ColorIdentity("wub"))
        assert mono < guild < shard

    def test_five_color_last_in_table(self) -> None:
        assert color_order_rank(ColorIdentity("wubrg")) == len(COLOR_ORDER) - 1
