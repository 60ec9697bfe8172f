import pytest

from sided_ioc import (
    AmbiguousConstructorError,
    AmbiguousPreferredConstructorError,
    NoApplicableConstructorError,
    PreferredConstructorArgumentMismatchError,
    Side,
    constructor,
    sided,
)
from sided_ioc.selection import find_constructor_for_types, find_constructor_for_values


class Repo:
    pass


class Foo:
    def __init__(self, id: int):
        self.id = id
        self.name = None

    @constructor(side=Side.SERVER)
    def named(cls, id: int, name: str):
        foo = cls(id)
        foo.name = name
        return foo


class Widget:
    def __init__(self, label: str, size: int):
        self.label, self.size = label, size

    @constructor(side=Side.CLIENT)
    def for_client(cls, size: int, label: str):
        return cls(label, size)


class PreferredFirst:
    @constructor(side=Side.CLIENT)
    def short(cls, b: str, a: int):
        return cls()

    @constructor
    def long(cls, a: int, b: str):
        return cls()


class TwoClient:
    @constructor(side=Side.CLIENT)
    def one(cls, a: int):
        return cls()

    @constructor(side=Side.CLIENT)
    def two(cls, a: int):
        return cls()


class OnlyServer:
    @sided(Side.SERVER)
    def __init__(self, a: int):
        self.a = a


class Universal:
    @sided(Side.UNIVERSAL)
    def __init__(self, a: int):
        self.a = a

    @constructor
    def both(cls, a: int, b: str):
        return cls(a)


class Scored:
    def __init__(self, a: int):
        pass

    @constructor
    def pair(cls, a: int, b: str):
        return cls(a)

    @constructor
    def pair_again(cls, a: int, b: str):
        return cls(a)


class TwoUntyped:
    def __init__(self, repo: Repo):
        pass

    @constructor
    def other(cls, repo: Repo, extra: int = 0):
        return cls(repo)


class TestValueSelection:
    def test_unique_constructor_is_used(self):
        m = find_constructor_for_values(Side.CLIENT, Repo, ())
        assert m.candidate.name == "__init__"

    def test_preferred_constructor_for_current_side(self):
        m = find_constructor_for_values(Side.SERVER, Foo, (7, "alpha"))
        assert m.candidate.name == "named"

    def test_constructor_reserved_for_other_side_is_not_considered(self):
        with pytest.raises(NoApplicableConstructorError):
            find_constructor_for_values(Side.CLIENT, Foo, (7, "alpha"))

    def test_untagged_constructor_still_used_on_other_side(self):
        m = find_constructor_for_values(Side.CLIENT, Foo, (7,))
        assert m.candidate.name == "__init__"

    def test_preferred_beats_higher_scoring_untagged(self):
        m = find_constructor_for_values(Side.CLIENT, Widget, ("a", 3))
        assert m.candidate.name == "for_client"

    def test_preferred_is_not_displaced_by_later_candidates(self):
        m = find_constructor_for_values(Side.CLIENT, PreferredFirst, (1, "x"))
        assert m.candidate.name == "short"
        assert m.values == ["x", 1]

    def test_ambiguous_preferred_regardless_of_arguments(self):
        for values in [(), (1,), ("nope",)]:
            with pytest.raises(AmbiguousPreferredConstructorError):
                find_constructor_for_values(Side.CLIENT, TwoClient, values)

    def test_preferred_mismatch(self):
        with pytest.raises(PreferredConstructorArgumentMismatchError) as exc:
            find_constructor_for_values(Side.SERVER, Foo, ("alpha", "beta"))
        assert exc.value.arguments == ("alpha", "beta")
        assert exc.value.target is Foo

    def test_sole_constructor_reserved_for_other_side_is_still_used(self):
        m = find_constructor_for_values(Side.CLIENT, OnlyServer, (1,))
        assert m.candidate.name == "__init__"

    def test_universal_is_never_preferred(self):
        m = find_constructor_for_values(Side.CLIENT, Universal, (1, "b"))
        assert m.candidate.name == "both"

    def test_ties_keep_the_earlier_candidate(self):
        m = find_constructor_for_values(Side.SERVER, Scored, (1, "b"))
        assert m.candidate.name == "pair"

    def test_no_values_picks_first_declared(self):
        m = find_constructor_for_values(Side.SERVER, TwoUntyped, ())
        assert m.candidate.name == "__init__"

    def test_abstract_or_unknown_target_fails(self):
        with pytest.raises(NoApplicableConstructorError):
            find_constructor_for_values(Side.SERVER, 42, ())

    def test_selection_is_logged(self, caplog):
        caplog.set_level("DEBUG", logger="sided_ioc")
        find_constructor_for_values(Side.SERVER, Foo, (7, "alpha"))
        assert "Foo.named" in caplog.text


class TestTypeSelection:
    def test_preferred_constructor_and_map(self):
        cand, mapping = find_constructor_for_types(Side.SERVER, Foo, (str, int))
        assert cand.name == "named"
        assert mapping == (1, 0)

    def test_single_matching_constructor(self):
        cand, mapping = find_constructor_for_types(Side.CLIENT, Foo, (int,))
        assert cand.name == "__init__"
        assert mapping == (0,)

    def test_preferred_mismatch(self):
        with pytest.raises(PreferredConstructorArgumentMismatchError):
            find_constructor_for_types(Side.SERVER, Foo, (Repo,))

    def test_ambiguous_preferred(self):
        with pytest.raises(AmbiguousPreferredConstructorError):
            find_constructor_for_types(Side.CLIENT, TwoClient, (int,))

    def test_ambiguous_non_preferred(self):
        with pytest.raises(AmbiguousConstructorError) as exc:
            find_constructor_for_types(Side.SERVER, TwoUntyped, (Repo,))
        assert exc.value.candidates == ("TwoUntyped.__init__", "TwoUntyped.other")

    def test_no_applicable(self):
        with pytest.raises(NoApplicableConstructorError):
            find_constructor_for_types(Side.CLIENT, Foo, (int, str))

    def test_other_side_constructors_excluded_from_ambiguity(self):
        cand, _ = find_constructor_for_types(Side.SERVER, Widget, (str, int))
        assert cand.name == "__init__"
