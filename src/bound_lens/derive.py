"""
DERIVED LENSES: Per-record lens tables and bound accessors

For a record type R with fields f₁..fₙ this module builds, from a small
schema description (field names, field types, reconstructor):
- R.Lenses.fᵢ : Lens[R, Fᵢ], one constant per field
- BoundLensTo<R>, a bound accessor with one navigation property per field
- R.through_lens, the identity-rooted entry point of every chain

Frozen dataclasses and NamedTuples are described automatically. Any other
immutable type can be lensed by naming its fields explicitly.
"""

from typing import (
    Any, Callable, Dict, ForwardRef, Iterable, Iterator, Optional, Sequence,
    Tuple, Type, Union
)
from dataclasses import dataclass, fields, is_dataclass, replace
import logging
import operator
import sys
import weakref

from .lens import Lens, identity_lens
from .bound import BoundLens, BoundLensType, RESERVED_NAMES

logger = logging.getLogger(__name__)

# Attribute under which a lensed class stores its bound accessor type
ACCESSOR_ATTR = '__bound_accessor__'

# (module, qualname) → lensed class, for annotations naming function-local records
_LENSED_TYPES: 'weakref.WeakValueDictionary[Tuple[str, str], type]' = \
    weakref.WeakValueDictionary()

# Attributes a lensed class gains; fields may not use these names
LENSED_CLASS_ATTRS = frozenset({'Lenses', 'through_lens'})


class LensDerivationError(TypeError):
    """Raised at class-definition time when lenses cannot be derived"""


# ============================================================================
# RECORD SCHEMA
# ============================================================================

@dataclass(frozen=True)
class FieldSpec:
    """
    One named field of a record.
    `type` may be a class, a forward-reference string, or None (unknown).
    """
    name: str
    type: Any = None


@dataclass(frozen=True)
class RecordSchema:
    """
    Description of a record type sufficient to derive its lenses.

    reconstruct(whole, **changes) must return a new record equal to `whole`
    except for the fields named in `changes`.
    """
    record_type: type
    fields: Tuple[FieldSpec, ...]
    reconstruct: Callable[..., Any]

    @property
    def name(self) -> str:
        return self.record_type.__name__

    def field_names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def validate(self) -> Tuple[bool, list]:
        """Check field names are unique and do not shadow the accessor API"""
        errors = []
        seen = set()
        for spec in self.fields:
            if spec.name in seen:
                errors.append(f"Field '{spec.name}' is declared more than once")
            seen.add(spec.name)
            if spec.name in RESERVED_NAMES:
                errors.append(
                    f"Field '{spec.name}' shadows a bound accessor method"
                )
            if spec.name in LENSED_CLASS_ATTRS:
                errors.append(
                    f"Field '{spec.name}' collides with a lensed class attribute"
                )
        return len(errors) == 0, errors


def _replace_namedtuple(whole: tuple, **changes: Any) -> tuple:
    return whole._replace(**changes)


def _is_namedtuple_type(cls: type) -> bool:
    return isinstance(cls, type) and issubclass(cls, tuple) and hasattr(cls, '_fields')


def record_schema(cls: type) -> RecordSchema:
    """
    Describe a frozen dataclass or a NamedTuple.

    Dataclass fields with init=False are skipped: they are computed, not
    supplied, so they cannot be replaced.
    """
    if is_dataclass(cls) and isinstance(cls, type):
        if not cls.__dataclass_params__.frozen:
            raise LensDerivationError(
                f"Dataclass {cls.__name__} must be frozen to derive lenses"
            )
        specs = tuple(FieldSpec(f.name, f.type) for f in fields(cls) if f.init)
        return RecordSchema(record_type=cls, fields=specs, reconstruct=replace)

    if _is_namedtuple_type(cls):
        annotations = getattr(cls, '__annotations__', {})
        specs = tuple(FieldSpec(name, annotations.get(name)) for name in cls._fields)
        return RecordSchema(record_type=cls, fields=specs,
                            reconstruct=_replace_namedtuple)

    raise LensDerivationError(
        f"{getattr(cls, '__name__', cls)!r} is not a dataclass or NamedTuple; "
        f"pass its fields explicitly"
    )


def explicit_schema(
    cls: type,
    field_specs: Iterable[Union[str, FieldSpec]],
    reconstruct: Optional[Callable[..., Any]] = None,
) -> RecordSchema:
    """
    Describe an arbitrary immutable type by its field names.

    Without a reconstructor, the record is rebuilt as cls(**all_fields), each
    field read back from the old instance, so no field can be dropped.
    """
    specs = tuple(
        spec if isinstance(spec, FieldSpec) else FieldSpec(spec)
        for spec in field_specs
    )
    if reconstruct is None:
        names = tuple(spec.name for spec in specs)

        def reconstruct(whole: Any, **changes: Any) -> Any:
            values = {name: getattr(whole, name) for name in names}
            values.update(changes)
            return cls(**values)

    return RecordSchema(record_type=cls, fields=specs, reconstruct=reconstruct)


# ============================================================================
# LENS TABLES
# ============================================================================

def field_lens(schema: RecordSchema, field_name: str) -> Lens:
    """Lens R ⇆ R.field_name; set rebuilds R with only that field replaced"""
    reconstruct = schema.reconstruct

    def set_field(part: Any, whole: Any) -> Any:
        return reconstruct(whole, **{field_name: part})

    return Lens(get=operator.attrgetter(field_name), set=set_field, name=field_name)


def derive_lenses(schema: RecordSchema) -> type:
    """Build the `Lenses` namespace: one constant lens per field"""
    _check(schema)
    table: Dict[str, Any] = {
        spec.name: field_lens(schema, spec.name) for spec in schema.fields
    }
    table['__slots__'] = ()
    table['__qualname__'] = f"{schema.record_type.__qualname__}.Lenses"
    table['__module__'] = schema.record_type.__module__
    table['__doc__'] = f"Field lenses of {schema.name}"
    lenses = type('Lenses', (), table)
    logger.debug("Derived lens table for %s: %s", schema.name,
                 ", ".join(schema.field_names()))
    return lenses


def _check(schema: RecordSchema) -> None:
    valid, errors = schema.validate()
    if not valid:
        raise LensDerivationError(
            f"Cannot derive lenses for {schema.name}: {'; '.join(errors)}"
        )


# ============================================================================
# BOUND ACCESSORS
# ============================================================================

def accessor_type_for(part_type: Any) -> Type[BoundLensType]:
    """Bound accessor for a part type: its derived wrapper if lensed, else BoundLens"""
    if isinstance(part_type, type):
        accessor = part_type.__dict__.get(ACCESSOR_ATTR)
        if accessor is not None:
            return accessor
    return BoundLens


def _annotation_source(annotation: Any) -> Optional[str]:
    """Source text of a postponed annotation: a string or a ForwardRef"""
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, ForwardRef):
        return annotation.__forward_arg__
    return None


def _enclosing_scopes(qualname: str) -> Iterator[str]:
    """'f.<locals>.Person' → 'f.<locals>.', 'f.' (module level excluded)"""
    scope = qualname.rpartition('.')[0]
    while scope:
        yield scope + '.'
        scope = scope.rpartition('.')[0]


def _lookup_lensed(record_type: type, source: str) -> Optional[type]:
    """Lensed class named `source` visible from record_type's scope, if any"""
    for scope in _enclosing_scopes(record_type.__qualname__):
        found = _LENSED_TYPES.get((record_type.__module__, scope + source))
        if found is not None:
            return found
    return None


def resolve_field_type(schema: RecordSchema, spec: FieldSpec) -> Tuple[Any, bool]:
    """
    Resolve one field's annotation. Returns (type, resolved).

    Postponed annotations (strings, ForwardRef) name either a lensed class
    declared in an enclosing function scope of the record, or something
    visible from the record's module and class namespace. A failure affects
    only this field.
    """
    annotation = spec.type
    if annotation is None:
        annotation = getattr(schema.record_type, '__annotations__', {}).get(spec.name)

    source = _annotation_source(annotation)
    if source is None:
        return annotation, True

    record_type = schema.record_type
    found = _lookup_lensed(record_type, source)
    if found is not None:
        return found, True

    module = sys.modules.get(record_type.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    try:
        return eval(source, globalns, dict(vars(record_type))), True
    except (NameError, AttributeError) as e:
        logger.debug("Unresolved annotation %r on %s.%s (%s)",
                     source, schema.name, spec.name, e)
        return annotation, False


def _navigation_property(field_name: str, sublens: Lens,
                         accessor_for: Callable[[str], Type[BoundLensType]]) -> property:
    def navigate(self: BoundLensType) -> BoundLensType:
        return accessor_for(field_name).from_parent(self, sublens)

    navigate.__name__ = field_name
    navigate.__doc__ = f"Bound accessor to the '{field_name}' field"
    return property(navigate)


def derive_bound_accessor(schema: RecordSchema,
                          lenses: Optional[type] = None) -> Type[BoundLensType]:
    """
    Build BoundLensTo<R>: a bound accessor with one property per field.

    Each property performs step construction with the field's lens. The
    accessor type of a field is chosen on first access, so lensed field
    types may be declared after R or referenced by string annotation.
    """
    _check(schema)
    if lenses is None:
        lenses = derive_lenses(schema)

    specs = {spec.name: spec for spec in schema.fields}
    # Only successful resolutions are kept; unresolved fields retry on next access
    resolved: Dict[str, Type[BoundLensType]] = {}

    def accessor_for(field_name: str) -> Type[BoundLensType]:
        if field_name in resolved:
            return resolved[field_name]
        part_type, ok = resolve_field_type(schema, specs[field_name])
        accessor = accessor_type_for(part_type)
        if ok:
            resolved[field_name] = accessor
        return accessor

    namespace: Dict[str, Any] = {
        spec.name: _navigation_property(spec.name, getattr(lenses, spec.name),
                                        accessor_for)
        for spec in schema.fields
    }
    namespace['__slots__'] = ()
    namespace['__module__'] = schema.record_type.__module__
    namespace['__doc__'] = f"Bound accessor to a {schema.name} within some root"
    accessor = type(f"BoundLensTo{schema.name}", (BoundLensType,), namespace)
    logger.debug("Derived bound accessor %s", accessor.__name__)
    return accessor


# ============================================================================
# CLASS DECORATOR
# ============================================================================

def install_lenses(cls: type, schema: RecordSchema) -> type:
    """Attach Lenses, the bound accessor type and through_lens to cls"""
    lenses = derive_lenses(schema)
    accessor = derive_bound_accessor(schema, lenses)

    def through_lens(self: Any) -> BoundLensType:
        """Bound accessor rooted at this instance"""
        return accessor.from_instance(self, identity_lens())

    cls.Lenses = lenses
    setattr(cls, ACCESSOR_ATTR, accessor)
    cls.through_lens = property(through_lens)
    _LENSED_TYPES[(cls.__module__, cls.__qualname__)] = cls
    return cls


def lensed(
    cls: Optional[type] = None,
    *,
    fields: Optional[Sequence[Union[str, FieldSpec]]] = None,
    reconstruct: Optional[Callable[..., Any]] = None,
) -> Any:
    """
    Class decorator deriving lenses for a record type.

        @lensed
        @dataclass(frozen=True)
        class Address:
            street: str

        Address.Lenses.street.set("Baker Street", addr)
        addr.through_lens.street.get()

    For types that are not dataclasses or NamedTuples, name the fields:

        @lensed(fields=("lat", "lon"))
        class Coordinate: ...
    """
    def decorate(target: type) -> type:
        if fields is None and reconstruct is None:
            schema = record_schema(target)
        elif fields is None:
            schema = replace(record_schema(target), reconstruct=reconstruct)
        else:
            schema = explicit_schema(target, fields, reconstruct)
        return install_lenses(target, schema)

    if cls is None:
        return decorate
    return decorate(cls)
