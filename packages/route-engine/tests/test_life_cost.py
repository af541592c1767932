import pytest

from route_engine.life_cost import calculate_life_cost, describe_life_cost_formula, score_life_cost


def test_life_cost_uses_traffic_multiplier() -> None:
    result = score_life_cost(15, 0.7, 0.25, 8.5)
    assert result.score == pytest.approx(21.625)
    assert result.is_high_risk is True


def test_life_cost_threshold_is_strict() -> None:
    assert score_life_cost(0, 0.5, 0.5, 15).is_high_risk is False
    assert score_life_cost(1, 0.1, 0.0, 15).is_high_risk is True


def test_life_cost_without_time_is_severity() -> None:
    assert calculate_life_cost(0, 0.9, 0.9, 6.5) == 6.5


@pytest.mark.parametrize("index", [0, 1, 2, 3])
def test_life_cost_is_monotonic_in_each_input(index: int) -> None:
    base = [12.0, 0.4, 0.3, 6.0]
    previous = None
    for step in range(6):
        args = list(base)
        args[index] = base[index] + step * 0.5
        score = calculate_life_cost(*args)
        if previous is not None:
            assert score >= previous
        previous = score


def test_life_cost_is_idempotent() -> None:
    assert score_life_cost(8, 0.8, 0.25, 10) == score_life_cost(8, 0.8, 0.25, 10)


def test_describe_life_cost_formula_substitutes_values() -> None:
    text = describe_life_cost_formula(15, 0.7, 0.25, 8.5)
    assert text == "LC = (15 × 0.7 × (1 + 0.25)) + 8.5"
