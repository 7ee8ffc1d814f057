# -*- coding: utf-8 -*-
import pytest

from qrengine.tables import (
    MAX_VERSION, MIN_VERSION, VERSIONS, Level, alignment_positions, blocks,
    check_bytes, check_version, data_bytes, normalize_level, size, size_class,
)

ALL_VERSIONS = range(MIN_VERSION, MAX_VERSION + 1)


@pytest.mark.parametrize('version', ALL_VERSIONS)
@pytest.mark.parametrize('level', list(Level))
def test_data_bytes_is_total_minus_check(version, level):
    nblock, ne = VERSIONS[version].level[level]
    assert data_bytes(version, level) == VERSIONS[version].words - nblock * ne
    assert blocks(version, level) == nblock
    assert check_bytes(version, level) == nblock * ne
    assert data_bytes(version, level) >= nblock


@pytest.mark.parametrize('version, level, expected', [
    (1, Level.L, 19), (1, Level.M, 16), (1, Level.Q, 13), (1, Level.H, 9),
    (5, Level.Q, 62), (10, Level.M, 216), (40, Level.L, 2956), (40, Level.H, 1276),
])
def test_known_capacities(version, level, expected):
    assert data_bytes(version, level) == expected


def test_more_redundancy_means_less_data():
    for version in ALL_VERSIONS:
        caps = [data_bytes(version, level) for level in Level]
        assert caps == sorted(caps, reverse=True)


def test_size():
    assert size(1) == 21
    assert size(7) == 45
    assert size(40) == 177


@pytest.mark.parametrize('version, expected', [(1, 0), (9, 0), (10, 1), (26, 1), (27, 2), (40, 2)])
def test_size_class(version, expected):
    assert size_class(version) == expected


@pytest.mark.parametrize('version', [0, -1, 41, 100])
def test_check_version_rejects_out_of_range(version):
    with pytest.raises(ValueError):
        check_version(version)
    with pytest.raises(ValueError):
        data_bytes(version, Level.L)


def test_version_patterns_only_from_7():
    assert all(VERSIONS[v].pattern == 0 for v in range(1, 7))
    assert all(VERSIONS[v].pattern >> 12 == v for v in range(7, 41))


def test_alignment_positions():
    assert alignment_positions(1) == (4,)
    assert alignment_positions(2) == (4, 16)
    assert alignment_positions(7) == (4, 20, 36)
    # centres of the last row of boxes sit 7 modules from the far edge
    for version in range(2, 41):
        assert alignment_positions(version)[-1] + 2 == size(version) - 7


@pytest.mark.parametrize('value, expected', [
    ('L', Level.L), ('m', Level.M), (' q ', Level.Q), (3, Level.H), (Level.M, Level.M),
])
def test_normalize_level(value, expected):
    assert normalize_level(value) is expected


@pytest.mark.parametrize('value', ['X', '', 4, -1, True, None])
def test_normalize_level_rejects(value):
    with pytest.raises(ValueError):
        normalize_level(value)


def test_level_str():
    assert str(Level.H) == 'H'
    assert [str(lv) for lv in Level] == ['L', 'M', 'Q', 'H']
