import pytest

from sided_ioc import Side, client_constructor, constructor, server_constructor, sided, universal_constructor
from sided_ioc.constants import CONSTRUCTOR_FLAG, SIDED_META
from sided_ioc.decorators import get_side, is_constructor


class Sample:
    @sided(Side.CLIENT)
    def __init__(self):
        pass

    @constructor
    def untagged(cls):
        return cls()

    @constructor(side="server")
    @classmethod
    def stacked(cls):
        return cls()

    @client_constructor
    def c(cls):
        return cls()

    @server_constructor
    def s(cls):
        return cls()

    @universal_constructor
    def u(cls):
        return cls()


def test_sided_stamps_init():
    assert getattr(Sample.__init__, SIDED_META) is Side.CLIENT
    assert get_side(Sample.__init__) is Side.CLIENT


def test_constructor_turns_functions_into_classmethods():
    assert isinstance(vars(Sample)["untagged"], classmethod)
    assert isinstance(Sample.untagged(), Sample)
    assert getattr(vars(Sample)["untagged"].__func__, CONSTRUCTOR_FLAG) is True


def test_constructor_over_existing_classmethod():
    member = vars(Sample)["stacked"]
    assert is_constructor(member)
    assert get_side(member) is Side.SERVER


@pytest.mark.parametrize("name, side", [("untagged", None), ("c", Side.CLIENT), ("s", Side.SERVER), ("u", Side.UNIVERSAL)])
def test_shorthands(name, side):
    member = vars(Sample)[name]
    assert is_constructor(member)
    assert get_side(member) is side


def test_constructor_on_init_only_tags_it():
    class Other:
        @constructor(side=Side.SERVER)
        def __init__(self):
            pass

    assert get_side(Other.__init__) is Side.SERVER
    assert not isinstance(vars(Other)["__init__"], classmethod)


def test_staticmethod_rejected():
    with pytest.raises(TypeError):
        constructor(staticmethod(lambda: None))


def test_plain_classmethod_is_not_a_constructor():
    class Other:
        @classmethod
        def build(cls):
            return cls()

    assert not is_constructor(vars(Other)["build"])
