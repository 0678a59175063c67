"""
BOUND LENSES: Lenses attached to a concrete root instance

A bound lens pairs the root value of a navigation chain with the lens that
locates the current part inside it. Each navigation step composes one more
lens onto the accumulated one and carries the same root forward, so

    person.through_lens.address.street.set("Baker Street")

is, underneath, (id ∘ Person.address ∘ Address.street).set(..., person).
"""

from typing import Callable, TypeVar, Generic, FrozenSet
from dataclasses import dataclass

from .lens import Lens

W = TypeVar('W')  # Whole (root) type
P = TypeVar('P')  # Part type
S = TypeVar('S')  # Subpart type


# ============================================================================
# STORAGE
# ============================================================================

@dataclass(frozen=True)
class BoundLensStorage(Generic[W, P]):
    """Root instance plus the lens W ⇆ P locating the current part"""
    instance: W
    lens: Lens[W, P]


# ============================================================================
# BOUND LENS CAPABILITY
# ============================================================================

class BoundLensType(Generic[W, P]):
    """
    Base for every bound accessor.

    Subclasses only add navigation properties; reading and writing always
    go through the stored lens applied to the stored root.
    """
    __slots__ = ('_storage',)

    def __init__(self, storage: BoundLensStorage[W, P]):
        self._storage = storage

    @property
    def storage(self) -> BoundLensStorage[W, P]:
        return self._storage

    @classmethod
    def from_instance(cls, instance: W, lens: Lens[W, P]) -> 'BoundLensType[W, P]':
        """Root construction: start a new chain at `instance`"""
        return cls(BoundLensStorage(instance=instance, lens=lens))

    @classmethod
    def from_parent(cls, parent: 'BoundLensType[W, S]',
                    sublens: Lens[S, P]) -> 'BoundLensType[W, P]':
        """
        Step construction: extend the parent's chain by one lens.

        The parent's root instance is reused unchanged; only the lens grows.
        """
        storage = parent.storage
        return cls.from_instance(storage.instance, storage.lens.compose(sublens))

    def get(self) -> P:
        """Read the focused part of the root"""
        return self._storage.lens.get(self._storage.instance)

    def set(self, new_part: P) -> W:
        """
        Return a new root with the focused part replaced.

        The chain is not updated in place; navigate again from the returned
        root to keep working on the new value.
        """
        return self._storage.lens.set(new_part, self._storage.instance)

    def modify(self, func: Callable[[P], P]) -> W:
        """Return a new root with func applied to the focused part"""
        return self._storage.lens.modify(func, self._storage.instance)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({self._storage.lens!r} "
                f"@ {self._storage.instance!r})")


class BoundLens(BoundLensType[W, P]):
    """Bound accessor for a part with no navigable fields of its own"""
    __slots__ = ()


# Names a derived accessor cannot use for field properties
RESERVED_NAMES: FrozenSet[str] = frozenset(
    name for name in dir(BoundLensType) if not name.startswith('__')
) | {'_storage'}
