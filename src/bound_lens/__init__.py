"""
bound_lens: Composable lenses over immutable records

Pure get/set accessors, their composition, and bound accessors that let
call sites navigate nested records fluently:

    person.through_lens.address.street.set("Baker Street")
"""

__version__ = "1.0.0"

from .lens import (
    Lens,
    compose,
    identity_lens,
)

from .bound import (
    BoundLensStorage,
    BoundLensType,
    BoundLens,
)

from .derive import (
    FieldSpec,
    RecordSchema,
    LensDerivationError,
    record_schema,
    explicit_schema,
    field_lens,
    derive_lenses,
    derive_bound_accessor,
    install_lenses,
    lensed,
)

from .laws import (
    LawType,
    LawViolation,
    check_lens_laws,
    check_composition,
    check_associativity,
)

from .log import configure_logging, log_violations

__all__ = [
    # Core
    "Lens",
    "compose",
    "identity_lens",

    # Bound lenses
    "BoundLensStorage",
    "BoundLensType",
    "BoundLens",

    # Derivation
    "FieldSpec",
    "RecordSchema",
    "LensDerivationError",
    "record_schema",
    "explicit_schema",
    "field_lens",
    "derive_lenses",
    "derive_bound_accessor",
    "install_lenses",
    "lensed",

    # Laws
    "LawType",
    "LawViolation",
    "check_lens_laws",
    "check_composition",
    "check_associativity",

    # Logging
    "configure_logging",
    "log_violations",
]
