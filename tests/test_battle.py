import itertools
from collections.abc import Callable

import pytest

from app.core.enums import Attribute
from app.engine.battle import ADVANTAGE_BONUS, final_powers, resolve
from app.schemas.card import Card

CardFactory = Callable[..., Card]


def test_higher_power_wins(make_card: CardFactory) -> None:
    strong, weak = make_card(9), make_card(5)

    result = resolve(strong, weak)

    assert not result.is_draw
    assert result.winner == strong
    assert result.loser == weak
    assert (result.winner_power, result.loser_power) == (9, 5)


def test_elemental_advantage_adds_bonus(make_card: CardFactory) -> None:
    water = make_card(5, Attribute.WATER)
    fire = make_card(8, Attribute.FIRE)

    result = resolve(water, fire)

    assert result.winner == water
    assert result.winner_power == 5 + ADVANTAGE_BONUS
    assert result.loser_power == 8


def test_advantage_can_produce_a_draw(make_card: CardFactory) -> None:
    grass = make_card(4, Attribute.GRASS)
    water = make_card(8, Attribute.WATER)

    result = resolve(grass, water)

    assert result.is_draw
    assert result.winner is None
    assert result.loser is None
    assert (result.winner_power, result.loser_power) == (8, 8)


def test_same_attribute_gets_no_bonus(make_card: CardFactory) -> None:
    assert final_powers(make_card(3, Attribute.FIRE), make_card(6, Attribute.FIRE)) == (3, 6)


def test_draw_reports_powers_in_argument_order(make_card: CardFactory) -> None:
    fire = make_card(6, Attribute.FIRE)
    grass = make_card(10, Attribute.GRASS)
    result = resolve(fire, grass)
    assert result.is_draw
    assert (result.winner_power, result.loser_power) == (10, 10)


@pytest.mark.parametrize(
    ("attr_a", "attr_b", "power_a", "power_b"),
    [
        (a, b, pa, pb)
        for a, b in itertools.product(Attribute, repeat=2)
        for pa, pb in [(3, 10), (5, 5), (9, 6), (4, 8)]
    ],
)
def test_resolution_is_symmetric(
    make_card: CardFactory, attr_a: Attribute, attr_b: Attribute, power_a: int, power_b: int
) -> None:
    card_a = make_card(power_a, attr_a, name="A")
    card_b = make_card(power_b, attr_b, name="B")

    forward = resolve(card_a, card_b)
    backward = resolve(card_b, card_a)

    assert forward.winner == backward.winner
    assert forward.loser == backward.loser
    if forward.is_draw:
        assert backward.is_draw
        assert forward.winner_power == forward.loser_power
        assert (forward.winner_power, forward.loser_power) == (
            backward.loser_power,
            backward.winner_power,
        )
    else:
        assert forward.winner_power > forward.loser_power
        assert (forward.winner_power, forward.loser_power) == (
            backward.winner_power,
            backward.loser_power,
        )
