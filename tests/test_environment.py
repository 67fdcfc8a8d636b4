import pytest

from froggle.environment import Environment


def test_declare_and_lookup_in_global_frame():
    env = Environment()
    env.declare(Environment.GLOBAL, 'x', 1)
    assert env.lookup(Environment.GLOBAL, 'x') == 1
    assert env.lookup(Environment.GLOBAL, 'y') is None
    assert env.globals == {'x': 1}


def test_child_frames_see_parent_bindings():
    env = Environment()
    env.declare(0, 'x', 1)
    child = env.push(0)
    grandchild = env.push(child)
    assert env.lookup(grandchild, 'x') == 1
    assert env.resolve(grandchild, 'x') == 0


def test_shadowing_does_not_touch_outer_binding():
    env = Environment()
    env.declare(0, 'x', 1)
    child = env.push(0)
    env.declare(child, 'x', 2)
    assert env.lookup(child, 'x') == 2
    env.pop(child)
    assert env.lookup(0, 'x') == 1


def test_assign_mutates_nearest_owner():
    env = Environment()
    env.declare(0, 'x', 1)
    child = env.push(0)
    assert env.assign(child, 'x', 5)
    assert env.globals['x'] == 5
    assert not env.assign(child, 'missing', 1)


def test_frame_parent_need_not_be_previous_frame():
    env = Environment()
    env.declare(0, 'g', 'global')
    block = env.push(0)
    env.declare(block, 'local', 1)
    call = env.push(0)
    assert env.lookup(call, 'g') == 'global'
    assert env.lookup(call, 'local') is None


def test_pop_discards_later_frames_too():
    env = Environment()
    first = env.push(0)
    env.push(first)
    env.pop(first)
    assert len(env.frames) == 1


def test_global_frame_cannot_be_popped():
    env = Environment()
    with pytest.raises(ValueError):
        env.pop(Environment.GLOBAL)


def test_reset_keeps_only_globals():
    env = Environment()
    env.declare(0, 'keep', True)
    env.push(env.push(0))
    env.reset()
    assert len(env.frames) == 1
    assert env.globals == {'keep': True}


def test_local_only_reads_one_frame():
    env = Environment()
    env.declare(0, 'x', 1)
    child = env.push(0)
    assert env.local(child, 'x') is None
    assert env.local(0, 'x') == 1
