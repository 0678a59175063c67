"""
LENS LAWS: Checking lenses against their algebraic contract

Lenses are not verified at construction. These helpers evaluate the laws
over sample values and report every violation found:
- SetGet: get(set(p, w)) = p
- GetSet: set(get(w), w) = w
- SetSet: set(p₂, set(p₁, w)) = set(p₂, w)
- Composition: (A ∘ B).get = B.get ∘ A.get, (A ∘ B).set(s, w) = A.set(B.set(s, A.get(w)), w)
- Associativity: (A ∘ B) ∘ C ≡ A ∘ (B ∘ C)

All checks return (ok, violations) in the same shape as other validators.
"""

from typing import Any, Iterable, List, Sequence, Tuple
from dataclasses import dataclass
from enum import Enum
import itertools

from .lens import Lens


class LawType(Enum):
    """Laws a lens or a composition must satisfy"""
    SET_GET = "set_get"
    GET_SET = "get_set"
    SET_SET = "set_set"
    COMPOSE_GET = "compose_get"
    COMPOSE_SET = "compose_set"
    ASSOCIATIVITY = "associativity"


@dataclass(frozen=True)
class LawViolation:
    """One failed law instance with the values that witnessed it"""
    law: LawType
    lens: str
    expected: Any
    actual: Any

    def describe(self) -> str:
        return (f"{self.law.value} violated by {self.lens}: "
                f"expected {self.expected!r}, got {self.actual!r}")


def _label(lens: Lens) -> str:
    return lens.name or '<anonymous>'


# ============================================================================
# SINGLE LENS
# ============================================================================

def check_set_get(lens: Lens, whole: Any, part: Any) -> List[LawViolation]:
    """SetGet: get(set(p, w)) = p"""
    actual = lens.get(lens.set(part, whole))
    if actual == part:
        return []
    return [LawViolation(LawType.SET_GET, _label(lens), part, actual)]


def check_get_set(lens: Lens, whole: Any) -> List[LawViolation]:
    """GetSet: set(get(w), w) = w"""
    actual = lens.set(lens.get(whole), whole)
    if actual == whole:
        return []
    return [LawViolation(LawType.GET_SET, _label(lens), whole, actual)]


def check_set_set(lens: Lens, whole: Any, first: Any, second: Any) -> List[LawViolation]:
    """SetSet: set(p₂, set(p₁, w)) = set(p₂, w)"""
    actual = lens.set(second, lens.set(first, whole))
    expected = lens.set(second, whole)
    if actual == expected:
        return []
    return [LawViolation(LawType.SET_SET, _label(lens), expected, actual)]


def check_lens_laws(
    lens: Lens,
    wholes: Iterable[Any],
    parts: Sequence[Any],
) -> Tuple[bool, List[LawViolation]]:
    """
    Check all three lens laws for every sampled whole and part.
    SetSet is checked for every ordered pair of parts.
    """
    violations: List[LawViolation] = []
    for whole in wholes:
        violations.extend(check_get_set(lens, whole))
        for part in parts:
            violations.extend(check_set_get(lens, whole, part))
        for first, second in itertools.product(parts, repeat=2):
            violations.extend(check_set_set(lens, whole, first, second))
    return len(violations) == 0, violations


# ============================================================================
# COMPOSITION
# ============================================================================

def check_composition(
    first: Lens,
    second: Lens,
    wholes: Iterable[Any],
    subparts: Sequence[Any],
) -> Tuple[bool, List[LawViolation]]:
    """Check first.compose(second) against its definition in terms of first and second"""
    composed = first.compose(second)
    label = _label(composed)
    violations: List[LawViolation] = []

    for whole in wholes:
        expected_get = second.get(first.get(whole))
        actual_get = composed.get(whole)
        if actual_get != expected_get:
            violations.append(
                LawViolation(LawType.COMPOSE_GET, label, expected_get, actual_get)
            )
        for subpart in subparts:
            expected_set = first.set(second.set(subpart, first.get(whole)), whole)
            actual_set = composed.set(subpart, whole)
            if actual_set != expected_set:
                violations.append(
                    LawViolation(LawType.COMPOSE_SET, label, expected_set, actual_set)
                )

    return len(violations) == 0, violations


def check_associativity(
    a: Lens,
    b: Lens,
    c: Lens,
    wholes: Iterable[Any],
    subparts: Sequence[Any],
) -> Tuple[bool, List[LawViolation]]:
    """(a ∘ b) ∘ c and a ∘ (b ∘ c) must agree on get and set"""
    left = a.compose(b).compose(c)
    right = a.compose(b.compose(c))
    label = _label(left)
    violations: List[LawViolation] = []

    for whole in wholes:
        if left.get(whole) != right.get(whole):
            violations.append(
                LawViolation(LawType.ASSOCIATIVITY, label,
                             right.get(whole), left.get(whole))
            )
        for subpart in subparts:
            expected = right.set(subpart, whole)
            actual = left.set(subpart, whole)
            if actual != expected:
                violations.append(
                    LawViolation(LawType.ASSOCIATIVITY, label, expected, actual)
                )

    return len(violations) == 0, violations
