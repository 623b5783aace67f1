import pytest

from blueprints_api.blueprints.filters.identity import IdentityFilter
from blueprints_api.blueprints.filters.redundancy import RedundancyFilter
from blueprints_api.blueprints.filters.registry import FILTERS, build_filter
from blueprints_api.blueprints.filters.undersampling import UndersamplingFilter, undersample
from blueprints_api.blueprints.models import Blueprint

from .conftest import pts

ALL_FILTERS = [IdentityFilter(), RedundancyFilter(), UndersamplingFilter(2), UndersamplingFilter(3)]


def bp_with(*coords):
    return Blueprint(author="ana", name="house", points=pts(*coords))


@pytest.mark.parametrize("f", ALL_FILTERS, ids=repr)
def test_empty_blueprint_is_returned_unchanged(f):
    bp = bp_with()
    out = f.apply(bp)
    assert out.key == bp.key
    assert out.points == []


@pytest.mark.parametrize("f", ALL_FILTERS, ids=repr)
def test_filters_keep_identity_and_order(f):
    bp = bp_with((0, 0), (1, 1), (1, 1), (2, 2), (3, 3), (4, 4), (4, 4))
    out = f.apply(bp)
    assert out.key == bp.key
    # surviving points appear in their original relative order
    positions = []
    start = 0
    for p in out.points:
        idx = bp.points.index(p, start)
        positions.append(idx)
        start = idx + 1
    assert positions == sorted(positions)


@pytest.mark.parametrize("f", ALL_FILTERS, ids=repr)
def test_filters_do_not_mutate_input(f):
    bp = bp_with((0, 0), (0, 0), (1, 1), (2, 2))
    f.apply(bp)
    assert bp.points == pts((0, 0), (0, 0), (1, 1), (2, 2))


def test_identity_returns_input():
    bp = bp_with((0, 0), (0, 0))
    assert IdentityFilter().apply(bp) is bp


def test_redundancy_collapses_consecutive_duplicates_only():
    out = RedundancyFilter().apply(bp_with((0, 0), (0, 0), (1, 1), (0, 0), (2, 2), (2, 2), (2, 2)))
    assert out.points == pts((0, 0), (1, 1), (0, 0), (2, 2))


def test_redundancy_is_idempotent():
    f = RedundancyFilter()
    once = f.apply(bp_with((0, 0), (0, 0), (10, 0), (10, 10), (10, 10)))
    assert f.apply(once).points == once.points


@pytest.mark.parametrize("n,step,expected", [
    (7, 2, [0, 2, 4, 6]),
    (6, 2, [0, 2, 4, 5]),
    (10, 3, [0, 3, 6, 9]),
    (5, 4, [0, 4]),
    (5, 10, [0, 4]),
    (2, 2, [0, 1]),
    (1, 3, [0]),
    (4, 1, [0, 1, 2, 3]),
])
def test_undersample_keeps_first_and_last(n, step, expected):
    points = pts(*[(i, i) for i in range(n)])
    assert undersample(points, step) == [points[i] for i in expected]


def test_undersampling_rejects_bad_step():
    with pytest.raises(ValueError):
        UndersamplingFilter(0)


def test_build_filter_by_name():
    assert isinstance(build_filter("identity"), IdentityFilter)
    assert isinstance(build_filter("Redundancy"), RedundancyFilter)
    f = build_filter("undersampling", undersampling_step=4)
    assert isinstance(f, UndersamplingFilter)
    assert f.step == 4


def test_build_filter_unknown_name():
    with pytest.raises(ValueError, match="Unknown blueprint filter"):
        build_filter("smoothing")


def test_registry_is_keyed_by_filter_name():
    assert FILTERS == {
        "identity": IdentityFilter,
        "redundancy": RedundancyFilter,
        "undersampling": UndersamplingFilter,
    }
    for key in FILTERS:
        assert build_filter(key).name == key
