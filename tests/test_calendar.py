import pytest

from recruitment.calendar import display, is_annual_refresh, season_of, turn_in_year, year_of


@pytest.mark.parametrize(
    "turn, season, year",
    [
        (1, "SPRING", 1),
        (2, "SUMMER", 1),
        (4, "WINTER", 1),
        (5, "SPRING", 2),
        (14, "SUMMER", 4),
    ],
)
def test_season_and_year(turn, season, year):
    assert season_of(turn) == season
    assert year_of(turn) == year


def test_turn_in_year_cycles():
    assert [turn_in_year(t) for t in range(1, 10)] == [1, 2, 3, 4, 1, 2, 3, 4, 1]


def test_annual_refresh_on_each_new_spring():
    assert not is_annual_refresh(1)
    assert is_annual_refresh(5)
    assert is_annual_refresh(13)
    assert not is_annual_refresh(6)


def test_display():
    assert display(6) == "Summer, Year 2"


def test_turns_start_at_one():
    with pytest.raises(ValueError):
        season_of(0)
