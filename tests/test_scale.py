import pytest

from heatlayer.scale import map_range, shade_index


def test_map_range_endpoints_exact():
    for lo, hi, tlo, thi in [(0, 7, 8, 255), (1, 10, 0, 31), (-5, 5, 100, -100), (0.5, 2.5, 0, 1)]:
        assert map_range(lo, lo, hi, tlo, thi) == tlo
        assert map_range(hi, lo, hi, tlo, thi) == thi


def test_map_range_is_linear_and_unrounded():
    assert map_range(5, 0, 10, 0, 1) == 0.5
    assert map_range(1, 0, 3, 0, 1) == pytest.approx(1 / 3)


def test_map_range_empty_source_range():
    with pytest.raises(ValueError):
        map_range(3, 2, 2, 0, 10)


@pytest.mark.parametrize("shades", [8, 16, 25, 32])
def test_shade_index_always_in_range(shades):
    for max_weight in (1, 2, 3, 10, 97):
        for w in range(1, max_weight + 1):
            idx = shade_index(w, max_weight, shades)
            assert 0 <= idx <= shades - 1
        assert shade_index(max_weight, max_weight, shades) == shades - 1
        if max_weight > 1:
            assert shade_index(1, max_weight, shades) == 0


def test_shade_index_single_weight_uses_top_shade():
    assert shade_index(1, 1, 8) == 7
