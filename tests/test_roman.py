import pytest

from numerus.roman import InvalidNumeral, OutOfRange, from_roman, looks_like_roman, to_roman


def test_round_trip_whole_range():
    for n in range(1, 4000):
        assert from_roman(to_roman(n)) == n


@pytest.mark.parametrize("n, numeral", [
    (1, 'I'),
    (4, 'IV'),
    (9, 'IX'),
    (14, 'XIV'),
    (42, 'XLII'),
    (1994, 'MCMXCIV'),
    (2024, 'MMXXIV'),
    (3999, 'MMMCMXCIX'),
])
def test_to_roman(n, numeral):
    assert to_roman(n) == numeral


@pytest.mark.parametrize("n", [0, -1, 4000])
def test_to_roman_out_of_range(n):
    with pytest.raises(OutOfRange) as excinfo:
        to_roman(n)
    assert excinfo.value.value == n


@pytest.mark.parametrize("numeral", ['IIII', 'VV', 'LL', 'DD', 'IIX', 'VX', 'IL', 'XM', 'IXI', 'MMMM', '', 'ABC'])
def test_from_roman_rejects_malformed(numeral):
    with pytest.raises(InvalidNumeral):
        from_roman(numeral)


def test_from_roman_is_case_insensitive():
    assert from_roman('xlii') == 42


def test_looks_like_roman():
    assert looks_like_roman('MCM')
    assert looks_like_roman('IIII')
    assert not looks_like_roman('MAX')
    assert not looks_like_roman('')
