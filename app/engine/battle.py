from app.schemas.card import Card
from app.schemas.match import BattleResult

ADVANTAGE_BONUS = 4


def final_powers(card_a: Card, card_b: Card) -> tuple[int, int]:
    """Base powers with the elemental advantage bonus applied to the dominant side."""
    power_a, power_b = card_a.base_power, card_b.base_power
    if card_a.attribute.beats(card_b.attribute):
        power_a += ADVANTAGE_BONUS
    elif card_b.attribute.beats(card_a.attribute):
        power_b += ADVANTAGE_BONUS
    return power_a, power_b


def resolve(card_a: Card, card_b: Card) -> BattleResult:
    power_a, power_b = final_powers(card_a, card_b)
    if power_a > power_b:
        return BattleResult(winner=card_a, loser=card_b, winner_power=power_a, loser_power=power_b)
    if power_b > power_a:
        return BattleResult(winner=card_b, loser=card_a, winner_power=power_b, loser_power=power_a)
    return BattleResult(winner_power=power_a, loser_power=power_b)
