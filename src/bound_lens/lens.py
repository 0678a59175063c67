"""
LENS PRIMITIVE: Pure get/set pairs over immutable values

This module implements the lens L = (get, set): Whole ⇆ Part with:
- get: Whole → Part (read a field)
- set: Part × Whole → Whole (rebuild the whole with the field replaced)
- Sequential composition L₁ ∘ L₂ spanning a deeper path
- The identity lens id: T ⇆ T used to root navigation chains

Laws (not checked at construction, see laws.py):
- SetGet: get(set(p, w)) = p
- GetSet: set(get(w), w) = w
- SetSet: set(p₂, set(p₁, w)) = set(p₂, w)
"""

from typing import Callable, TypeVar, Generic, Optional
from dataclasses import dataclass
from functools import reduce

# ============================================================================
# TYPE VARIABLES
# ============================================================================

W = TypeVar('W')  # Whole type
P = TypeVar('P')  # Part type
S = TypeVar('S')  # Subpart type
T = TypeVar('T')


# ============================================================================
# LENS
# ============================================================================

@dataclass(frozen=True)
class Lens(Generic[W, P]):
    """
    Lens L = (get, set): W ⇆ P

    Both functions must be total and pure. `set` takes the new part first
    and the whole second, and returns a new whole.
    """
    get: Callable[[W], P]
    set: Callable[[P, W], W]
    name: Optional[str] = None

    def modify(self, func: Callable[[P], P], whole: W) -> W:
        """Apply func to the focused part: set(func(get(w)), w)"""
        return self.set(func(self.get(whole)), whole)

    def compose(self, other: 'Lens[P, S]') -> 'Lens[W, S]':
        """
        Sequential composition: W ⇆ P ⇆ S

        get reads the part, then the subpart. set reads the current part,
        updates it through `other`, then writes it back through `self`.
        Nothing is evaluated until the composed lens is applied.
        """
        outer = self
        inner = other

        def composed_get(whole: W) -> S:
            part = outer.get(whole)
            return inner.get(part)

        def composed_set(new_subpart: S, whole: W) -> W:
            part = outer.get(whole)
            new_part = inner.set(new_subpart, part)
            return outer.set(new_part, whole)

        return Lens(get=composed_get, set=composed_set,
                    name=_join_names(outer.name, inner.name))

    def __rshift__(self, other: 'Lens[P, S]') -> 'Lens[W, S]':
        return self.compose(other)

    def __repr__(self) -> str:
        return f"Lens({self.name or '<anonymous>'})"


def _join_names(first: Optional[str], second: Optional[str]) -> Optional[str]:
    if first is None:
        return second
    if second is None:
        return first
    return f"{first}.{second}"


# ============================================================================
# CONSTRUCTORS
# ============================================================================

def compose(first: Lens, *rest: Lens) -> Lens:
    """
    Compose lenses left to right: compose(a, b, c) = (a ∘ b) ∘ c

    Composition is associative, so the fold direction is unobservable.
    """
    return reduce(lambda acc, lens: acc.compose(lens), rest, first)


def identity_lens() -> 'Lens[T, T]':
    """Identity lens: get is id, set ignores the old whole"""
    return Lens(get=lambda whole: whole, set=lambda new, old: new)


if __name__ == "__main__":
    from collections import namedtuple

    Point = namedtuple("Point", ["x", "y"])
    x_lens = Lens(get=lambda p: p.x, set=lambda x, p: p._replace(x=x), name="x")

    print("Lens Primitive Module")
    print("=" * 60)
    origin = Point(0, 0)
    print(f"get: {x_lens.get(origin)}")
    print(f"set: {x_lens.set(5, origin)}")
    print(f"modify: {x_lens.modify(lambda x: x - 1, origin)}")
    print(f"identity: {(identity_lens() >> x_lens).get(Point(3, 4))}")
    print("\n✓ Lens module validated")
