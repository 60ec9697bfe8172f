from typing import Optional

import pytest

from sided_ioc.analysis import discover_constructors
from sided_ioc.matching import ConstructorMatcher, try_create_parameter_map


class Repo:
    pass


class SqlRepo(Repo):
    pass


class Cache:
    pass


class Target:
    def __init__(self, a: int, b: str, repo: Repo, note: Optional[str] = None):
        self.a, self.b, self.repo, self.note = a, b, repo, note


def _matcher(cls=Target):
    return ConstructorMatcher(discover_constructors(cls)[0])


class TestConstructorMatcher:
    def test_no_values_scores_zero(self):
        m = _matcher()
        assert m.match(()) == 0
        assert m.is_set == [False, False, False, False]

    def test_in_order_values_score_their_count(self):
        m = _matcher()
        assert m.match((1, "x")) == 2
        assert m.values[:2] == [1, "x"]
        assert m.is_set == [True, True, False, False]

    def test_subclass_values_bind(self):
        repo = SqlRepo()
        m = _matcher()
        assert m.match((1, "x", repo)) == 3
        assert m.values[2] is repo

    def test_out_of_order_values_bind_but_score_lower(self):
        m = _matcher()
        assert m.match(("x", 1)) == 0
        assert m.values[:2] == [1, "x"]
        assert m.is_set[:2] == [True, True]

    def test_prefix_stops_at_first_gap(self):
        repo = Repo()
        m = _matcher()
        assert m.match((1, repo)) == 1
        assert m.is_set == [True, False, True, False]

    def test_value_without_a_free_slot_disqualifies(self):
        assert _matcher().match((1, 2)) == -1
        assert _matcher().match((Cache(),)) == -1

    def test_second_string_goes_to_optional_slot(self):
        m = _matcher()
        assert m.match((1, "x", "y")) == 2
        assert m.values[3] == "y"

    def test_none_only_fits_optional(self):
        m = _matcher()
        assert m.match((None,)) == 0
        assert m.is_set == [False, False, False, True]


class TestParameterMap:
    def test_maps_each_type_to_first_free_compatible_parameter(self):
        params = discover_constructors(Target)[0].parameters
        assert try_create_parameter_map(params, (str, int)) == (1, 0, None, None)

    def test_repeated_types_take_successive_slots(self):
        params = discover_constructors(Target)[0].parameters
        assert try_create_parameter_map(params, (str, str)) == (None, 0, None, 1)

    def test_subclass_types_are_accepted(self):
        params = discover_constructors(Target)[0].parameters
        assert try_create_parameter_map(params, (SqlRepo,)) == (None, None, 0, None)

    def test_no_argument_types_leaves_everything_unbound(self):
        params = discover_constructors(Target)[0].parameters
        assert try_create_parameter_map(params, ()) == (None, None, None, None)

    @pytest.mark.parametrize("types", [(Cache,), (int, int), (str, str, str)])
    def test_unplaceable_type_fails_outright(self, types):
        params = discover_constructors(Target)[0].parameters
        assert try_create_parameter_map(params, types) is None
