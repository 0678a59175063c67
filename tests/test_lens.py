"""
Tests for the lens primitive and composition

Tests cover:
1. get/set/modify on a hand-written lens
2. Lens laws on hand-written lenses
3. Composition definition and evaluation order
4. Associativity of composition
5. Identity lens
"""

import unittest
import sys
import os
from collections import namedtuple
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bound_lens.lens import Lens, compose, identity_lens


Point = namedtuple("Point", ["x", "y"])
Segment = namedtuple("Segment", ["start", "end"])
Shape = namedtuple("Shape", ["label", "segment"])

x_lens = Lens(get=lambda p: p.x, set=lambda x, p: p._replace(x=x), name="x")
start_lens = Lens(get=lambda s: s.start, set=lambda st, s: s._replace(start=st), name="start")
segment_lens = Lens(get=lambda sh: sh.segment,
                    set=lambda seg, sh: sh._replace(segment=seg), name="segment")

SHAPE = Shape("edge", Segment(Point(1, 2), Point(3, 4)))


class TestLensPrimitive(unittest.TestCase):
    """Test the (get, set) pair"""

    def test_get(self):
        self.assertEqual(x_lens.get(Point(1, 2)), 1)

    def test_set_returns_new_whole(self):
        """set must rebuild the whole, not mutate it"""
        point = Point(1, 2)
        updated = x_lens.set(9, point)
        self.assertEqual(updated, Point(9, 2))
        self.assertEqual(point, Point(1, 2))

    def test_modify(self):
        self.assertEqual(x_lens.modify(lambda x: x * 10, Point(2, 5)), Point(20, 5))

    def test_set_get_law(self):
        self.assertEqual(x_lens.get(x_lens.set(7, Point(1, 2))), 7)

    def test_get_set_law(self):
        point = Point(1, 2)
        self.assertEqual(x_lens.set(x_lens.get(point), point), point)

    def test_set_set_law(self):
        point = Point(1, 2)
        self.assertEqual(
            x_lens.set(5, x_lens.set(4, point)),
            x_lens.set(5, point)
        )

    def test_lens_is_immutable(self):
        from dataclasses import FrozenInstanceError
        with self.assertRaises(FrozenInstanceError):
            x_lens.get = lambda p: p.y

    def test_repr_uses_name(self):
        self.assertEqual(repr(x_lens), "Lens(x)")
        anonymous = Lens(get=lambda w: w, set=lambda p, w: p)
        self.assertEqual(repr(anonymous), "Lens(<anonymous>)")


class TestComposition(unittest.TestCase):
    """Test Lens[W, P] ∘ Lens[P, S] → Lens[W, S]"""

    def test_composed_get(self):
        """(A ∘ B).get(w) = B.get(A.get(w))"""
        composed = segment_lens.compose(start_lens)
        self.assertEqual(composed.get(SHAPE), Point(1, 2))

    def test_composed_set(self):
        """(A ∘ B).set(s, w) = A.set(B.set(s, A.get(w)), w)"""
        composed = segment_lens.compose(start_lens)
        updated = composed.set(Point(0, 0), SHAPE)
        self.assertEqual(
            updated,
            Shape("edge", Segment(Point(0, 0), Point(3, 4)))
        )
        self.assertEqual(
            updated,
            segment_lens.set(start_lens.set(Point(0, 0), segment_lens.get(SHAPE)), SHAPE)
        )

    def test_three_level_chain(self):
        deep = compose(segment_lens, start_lens, x_lens)
        self.assertEqual(deep.get(SHAPE), 1)
        self.assertEqual(deep.set(8, SHAPE).segment.start, Point(8, 2))
        self.assertEqual(deep.set(8, SHAPE).segment.end, Point(3, 4))

    def test_rshift_operator(self):
        deep = segment_lens >> start_lens >> x_lens
        self.assertEqual(deep.get(SHAPE), 1)

    def test_compose_single_lens(self):
        self.assertIs(compose(x_lens), x_lens)

    def test_composed_name(self):
        self.assertEqual(compose(segment_lens, start_lens, x_lens).name,
                         "segment.start.x")

    def test_associativity(self):
        """(A ∘ B) ∘ C ≡ A ∘ (B ∘ C)"""
        left = segment_lens.compose(start_lens).compose(x_lens)
        right = segment_lens.compose(start_lens.compose(x_lens))
        self.assertEqual(left.get(SHAPE), right.get(SHAPE))
        for value in (-1, 0, 42):
            self.assertEqual(left.set(value, SHAPE), right.set(value, SHAPE))

    def test_composition_is_lazy(self):
        """Composing evaluates nothing until get/set is called"""
        calls = []
        outer = Lens(get=lambda w: calls.append("outer.get") or w,
                     set=lambda p, w: calls.append("outer.set") or p)
        inner = Lens(get=lambda p: calls.append("inner.get") or p,
                     set=lambda s, p: calls.append("inner.set") or s)
        composed = outer.compose(inner)
        self.assertEqual(calls, [])
        composed.get("w")
        self.assertEqual(calls, ["outer.get", "inner.get"])

    def test_set_evaluation_order(self):
        """set reads the outer part, updates it through the inner lens, writes it back"""
        calls = []
        outer = Lens(get=lambda w: calls.append("outer.get") or w,
                     set=lambda p, w: calls.append("outer.set") or p)
        inner = Lens(get=lambda p: calls.append("inner.get") or p,
                     set=lambda s, p: calls.append("inner.set") or s)
        outer.compose(inner).set("s", "w")
        self.assertEqual(calls, ["outer.get", "inner.set", "outer.set"])

    def test_errors_from_callables_propagate(self):
        failing = Lens(get=lambda w: w["missing"], set=lambda p, w: w)
        composed = failing.compose(x_lens)
        with self.assertRaises(KeyError):
            composed.get({})


class TestIdentityLens(unittest.TestCase):
    """Test id: T ⇆ T"""

    def test_get_is_identity(self):
        point = Point(1, 2)
        self.assertIs(identity_lens().get(point), point)

    def test_set_replaces_whole(self):
        self.assertEqual(identity_lens().set(Point(5, 5), Point(1, 2)), Point(5, 5))

    def test_identity_is_neutral(self):
        """id ∘ L ≡ L ≡ L ∘ id"""
        point = Point(1, 2)
        left = identity_lens().compose(x_lens)
        right = x_lens.compose(identity_lens())
        self.assertEqual(left.get(point), x_lens.get(point))
        self.assertEqual(right.get(point), x_lens.get(point))
        self.assertEqual(left.set(3, point), x_lens.set(3, point))
        self.assertEqual(right.set(3, point), x_lens.set(3, point))
        self.assertEqual(left.name, "x")


if __name__ == "__main__":
    unittest.main()
