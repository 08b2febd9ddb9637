import math

from rigsim.vector import Vector2


def test_basic_arithmetic():
    a = Vector2(3.0, 4.0)
    b = Vector2(1.0, -2.0)

    assert a.add(b) == Vector2(4.0, 2.0)
    assert a.sub(b) == Vector2(2.0, 6.0)
    assert a.scale(2.0) == Vector2(6.0, 8.0)
    assert a.dot(b) == 3.0 - 8.0
    assert a.length() == 5.0

    # operator aliases
    assert a + b == a.add(b)
    assert a - b == a.sub(b)
    assert 2.0 * a == a * 2.0 == a.scale(2.0)
    assert -a == Vector2(-3.0, -4.0)


def test_operations_return_new_vectors():
    a = Vector2(1.0, 2.0)
    a.add(Vector2(5.0, 5.0))
    a.normalize()
    assert a == Vector2(1.0, 2.0)


def test_normalize_unit_length():
    u = Vector2(-30.0, 40.0).normalize()
    assert math.isclose(u.length(), 1.0)
    assert math.isclose(u.x, -0.6)
    assert math.isclose(u.y, 0.8)


def test_normalize_zero_vector_is_zero():
    """Coincident nodes must not produce NaN directions."""
    u = Vector2(0.0, 0.0).normalize()
    assert u == Vector2.zero()
    assert not math.isnan(u.x) and not math.isnan(u.y)

    tiny = Vector2(1e-14, -1e-14).normalize()
    assert tiny == Vector2.zero()
