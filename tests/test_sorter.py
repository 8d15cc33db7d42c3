from collections.abc import Callable

import pytest

from combofinder.analysis.sorter import (
    COMPARATOR_CHAINS,
    SortDirection,
    SortKey,
    compare_cards,
    compare_colors,
    compare_combos,
    compare_price,
    sort_combos,
)
from combofinder.models.card import CardRequirement
from combofinder.models.combo import ComboRecord
from combofinder.models.match import PotentialMatch

MakeCombo = Callable[..., ComboRecord]


def ids(records: list[ComboRecord]) -> list[int]:
    return [r.id for r in records]


def card_names(count: int) -> list[str]:
    return [f"Card {i}" for i in range(count)]


class TestSortKeys:
    def test_every_key_has_a_comparator_chain(self) -> None:
        assert set(COMPARATOR_CHAINS) == set(SortKey)
        for key in SortKey:
            assert key.comparators

    def test_cascades(self) -> None:
        assert SortKey.COLORS.comparators == (compare_colors, compare_cards)
        assert SortKey.PRICE.comparators == (compare_price, compare_colors, compare_cards)

    def test_unknown_key_rejected(self, make_combo: MakeCombo) -> None:
        with pytest.raises(ValueError):
            sort_combos([make_combo(1, ["A"])], "popularity")

    def test_unknown_direction_rejected(self, make_combo: MakeCombo) -> None:
        with pytest.raises(ValueError):
            sort_combos([make_combo(1, ["A"])], SortKey.ID, "sideways")


class TestSortById:
    def test_ascending(self, make_combo: MakeCombo) -> None:
        combos = [make_combo(3, ["A"]), make_combo(1, ["A"]), make_combo(2, ["A"])]

        assert ids(sort_combos(combos, SortKey.ID)) == [1, 2, 3]

    def test_descending(self, make_combo: MakeCombo) -> None:
        combos = [make_combo(3, ["A"]), make_combo(1, ["A"]), make_combo(2, ["A"])]

        assert ids(sort_combos(combos, "id", "descending")) == [3, 2, 1]

    def test_input_not_mutated(self, make_combo: MakeCombo) -> None:
        combos = [make_combo(3, ["A"]), make_combo(1, ["A"])]

        sort_combos(combos, SortKey.ID)

        assert ids(combos) == [3, 1]


class TestSortByCounts:
    def test_cards_ascending_and_descending(self, make_combo: MakeCombo) -> None:
        """Card counts 2, 0, 1 sort to 0, 1, 2 and reverse to 2, 1, 0."""
        combos = [
            make_combo(1, card_names(2)),
            make_combo(2, card_names(0), templates=[]),
            make_combo(3, card_names(1)),
        ]

        ascending = sort_combos(combos, SortKey.CARDS)
        descending = sort_combos(combos, SortKey.CARDS, SortDirection.DESCENDING)

        assert [len(c.cards) for c in ascending] == [0, 1, 2]
        assert [len(c.cards) for c in descending] == [2, 1, 0]

    @pytest.mark.parametrize(
        ("key", "field"),
        [
            (SortKey.PREREQUISITES, "prerequisites"),
            (SortKey.STEPS, "steps"),
            (SortKey.RESULTS, "results"),
        ],
    )
    def test_list_lengths(self, make_combo: MakeCombo, key: SortKey, field: str) -> None:
        combos = [
            make_combo(1, ["A"], **{field: 3}),
            make_combo(2, ["A"], **{field: 1}),
            make_combo(3, ["A"], **{field: 2}),
        ]

        assert ids(sort_combos(combos, key)) == [2, 3, 1]

    def test_ties_keep_prior_order(self, make_combo: MakeCombo) -> None:
        combos = [
            make_combo(5, card_names(2)),
            make_combo(2, card_names(1)),
            make_combo(9, card_names(2)),
            make_combo(1, card_names(1)),
        ]

        assert ids(sort_combos(combos, SortKey.CARDS)) == [2, 1, 5, 9]

    def test_descending_reverses_whole_sequence(self, make_combo: MakeCombo) -> None:
        """Tied combos swap places too: reverse-after-sort, not a negated comparator."""
        combos = [
            make_combo(5, card_names(2)),
            make_combo(2, card_names(1)),
            make_combo(9, card_names(2)),
            make_combo(1, card_names(1)),
        ]

        assert ids(sort_combos(combos, SortKey.CARDS, SortDirection.DESCENDING)) == [9, 5, 1, 2]

    def test_already_sorted_without_ties_is_unchanged(self, make_combo: MakeCombo) -> None:
        combos = [make_combo(i, card_names(i)) for i in range(1, 5)]

        assert sort_combos(combos, SortKey.CARDS) == combos


class TestSortByColors:
    def test_mono_before_two_color(self, make_combo: MakeCombo) -> None:
        green = make_combo(1, ["A"], "g")
        orzhov = make_combo(2, ["A"], "wb")

        assert sort_combos([orzhov, green], SortKey.COLORS) == [green, orzhov]
        assert sort_combos([orzhov, green], SortKey.COLORS, SortDirection.DESCENDING) == [
            orzhov,
            green,
        ]

    def test_canonical_order(self, make_combo: MakeCombo) -> None:
        combos = [
            make_combo(1, ["A"], "wubrg"),
            make_combo(2, ["A"], "ub"),
            make_combo(3, ["A"], ""),
            make_combo(4, ["A"], "wub"),
            make_combo(5, ["A"], "w"),
        ]

        assert ids(sort_combos(combos, SortKey.COLORS)) == [3, 5, 2, 4, 1]

    def test_equal_rank_falls_through_to_cards(self, make_combo: MakeCombo) -> None:
        combos = [
            make_combo(1, card_names(3), "g"),
            make_combo(2, card_names(2), "g"),
            make_combo(3, card_names(2), "u"),
        ]

        assert ids(sort_combos(combos, SortKey.COLORS)) == [3, 2, 1]


class TestSortByPrice:
    def test_cheapest_first(self, make_combo: MakeCombo) -> None:
        combos = [
            make_combo(1, ["A"], prices={"cardkingdom": 20.0}),
            make_combo(2, ["A"], prices={"cardkingdom": 5.0}),
            make_combo(3, ["A"], prices={"cardkingdom": 12.5}),
        ]

        assert ids(sort_combos(combos, SortKey.PRICE)) == [2, 3, 1]

    def test_vendor_selection(self, make_combo: MakeCombo) -> None:
        combos = [
            make_combo(1, ["A"], prices={"cardkingdom": 1.0, "tcgplayer": 9.0}),
            make_combo(2, ["A"], prices={"cardkingdom": 9.0, "tcgplayer": 1.0}),
        ]

        assert ids(sort_combos(combos, SortKey.PRICE, vendor="tcgplayer")) == [2, 1]

    def test_price_tie_falls_through_to_colors_then_cards(self, make_combo: MakeCombo) -> None:
        combos = [
            make_combo(1, card_names(2), "wb", prices={"cardkingdom": 10.0}),
            make_combo(2, card_names(3), "g", prices={"cardkingdom": 10.0}),
            make_combo(3, card_names(2), "g", prices={"cardkingdom": 10.0}),
            make_combo(4, card_names(5), "wubrg", prices={"cardkingdom": 1.0}),
        ]

        assert ids(sort_combos(combos, SortKey.PRICE)) == [4, 3, 2, 1]

    def test_missing_price_counts_as_zero(self, make_combo: MakeCombo) -> None:
        combos = [make_combo(1, ["A"], prices={"cardkingdom": 3.0}), make_combo(2, ["A"])]

        assert ids(sort_combos(combos, SortKey.PRICE)) == [2, 1]


class TestCompareCombos:
    def test_returns_zero_when_chain_exhausted(self, make_combo: MakeCombo) -> None:
        first = make_combo(1, ["A", "B"], "g", prices={"cardkingdom": 2.0})
        second = make_combo(2, ["C", "D"], "g", prices={"cardkingdom": 2.0})

        assert compare_combos(first, second, SortKey.PRICE) == 0

    def test_sign(self, make_combo: MakeCombo) -> None:
        first = make_combo(1, ["A"])
        second = make_combo(2, ["A"])

        assert compare_combos(first, second, SortKey.ID) < 0
        assert compare_combos(second, first, SortKey.ID) > 0


class TestSortPotentialMatches:
    def test_sorted_by_their_combo(self, make_combo: MakeCombo) -> None:
        matches = [
            PotentialMatch(make_combo(2, ["A", "B"], "wb"), (CardRequirement("B"),)),
            PotentialMatch(make_combo(1, ["A", "B"], "g"), (CardRequirement("B"),)),
        ]

        result = sort_combos(matches, SortKey.COLORS)

        assert [m.combo.id for m in result] == [1, 2]
