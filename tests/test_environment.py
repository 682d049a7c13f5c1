from monkey.environment import Environment
from monkey.types import Integer


def test_get_missing_returns_none():
    assert Environment().get('x') is None


def test_declare_and_get():
    env = Environment()
    assert env.declare('x', Integer(1)) == Integer(1)
    assert env.get('x') == Integer(1)
    assert env.is_declared('x')


def test_lookup_walks_outer_scopes():
    outer = Environment()
    outer.declare('x', Integer(1))
    inner = Environment.enclosed(Environment.enclosed(outer))
    assert inner.get('x') == Integer(1)
    assert not inner.is_declared('x')


def test_inner_binding_shadows_outer():
    outer = Environment()
    outer.declare('x', Integer(1))
    inner = Environment.enclosed(outer)
    inner.declare('x', Integer(2))
    assert inner.get('x') == Integer(2)
    assert outer.get('x') == Integer(1)


def test_outer_changes_are_visible_from_inner():
    outer = Environment()
    inner = Environment.enclosed(outer)
    outer.declare('late', Integer(3))
    assert inner.get('late') == Integer(3)
