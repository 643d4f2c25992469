"""
Bag: a path-addressable attribute container with a guarded mode.

A Bag owns a nested mapping and exposes path-based access to it:

    >>> bag = Bag({"a": {"b": 1}})
    >>> bag.set("a.c", 2).get("a")
    {'b': 1, 'c': 2}

Guarded mode deep-freezes the plain-mapping skeleton of the tree. Writes
through set/put/forget/reset then raise ImmutabilityViolation, while
mutate() remains available as the one-write escape hatch:

    >>> bag.guard().set("a.b", 99)  # ImmutabilityViolation
    >>> bag.mutate("a.b", 99).get("a.b")
    99
    >>> bag.is_guarded()
    True

Value wrapping: when an attribute model is configured, every value written
through set() or reset() is stored as ``attribute_model(value)``. put() and
defaults() store values raw.

Thread safety: NOT thread-safe for concurrent writes. Concurrent reads of
a guarded bag are safe.
"""

from __future__ import annotations

import collections.abc as _abc
import inspect as _inspect
import logging as _logging
import types as _types
import typing as _typing

import attrbag.config as config
import attrbag.errors as errors
import attrbag.serialization as serialization
import attrbag.support as support

_logger = _logging.getLogger(__name__)

# Single-argument factory applied to values written through set()/reset()
AttributeModel: _typing.TypeAlias = _abc.Callable[[_typing.Any], _typing.Any]


def _as_mapping(attributes: _typing.Any) -> _abc.Mapping[str, _typing.Any]:
    """Accept a Bag, a mapping, or None where a mapping of attributes is expected."""
    if attributes is None:
        return {}
    if isinstance(attributes, Bag):
        # Thawed so a guarded source never leaks frozen nodes
        return attributes.to_dict()
    if not isinstance(attributes, _abc.Mapping):
        raise TypeError(f"Expected a mapping of attributes, got {type(attributes).__name__}")
    return attributes


def _entries(collection: _typing.Any) -> _abc.Iterable[tuple[_typing.Any, _typing.Any]]:
    """(key, value) pairs of a mapping, (index, item) pairs of a sequence, else nothing."""
    if isinstance(collection, _abc.Mapping):
        return list(collection.items())
    if isinstance(collection, _abc.Sequence) and not isinstance(
        collection, (str, bytes, bytearray)
    ):
        return list(enumerate(collection))
    return []


def _cast_args(args: _typing.Any) -> tuple[_typing.Any, ...]:
    """Turn call() arguments into a tuple: lists/tuples are spread, None is empty."""
    if args is None:
        return ()
    if isinstance(args, (list, tuple)):
        return tuple(args)
    return (args,)


class Bag:
    """
    Path-addressable attribute container.

    Args:
        attributes: Initial attributes. Each top-level entry goes through
            set(), so keys may be paths and values are wrapped.
        guarded: Guard the bag right after loading ``attributes``.
        attribute_model: Optional single-argument factory applied to every
            value written through set()/reset(). Defaults to the class-level
            ``attribute_model``.
        settings: Path separator and binding options. Defaults to
            ``config.default_settings()``.

    Subclasses may declare a wrapper for all their instances:

        class Users(Bag):
            attribute_model = User
    """

    attribute_model: _typing.ClassVar[AttributeModel | None] = None

    def __init__(
        self,
        attributes: _abc.Mapping[str, _typing.Any] | Bag | None = None,
        guarded: bool = False,
        attribute_model: AttributeModel | None = None,
        *,
        settings: config.BagSettings | None = None,
    ) -> None:
        self._attributes: dict[str, _typing.Any] | support.FrozenMapping = {}
        self._guarded = False
        self._settings = settings if settings is not None else config.default_settings()
        self._attribute_model: AttributeModel | None = (
            attribute_model if attribute_model is not None else type(self).attribute_model
        )
        self.reset(attributes, guarded)

    @classmethod
    def from_yaml(
        cls,
        text: str,
        guarded: bool = False,
        attribute_model: AttributeModel | None = None,
        *,
        settings: config.BagSettings | None = None,
    ) -> Bag:
        """
        Build a bag from YAML text.

        Raises:
            SerializationError: If the text is not a YAML mapping.
        """
        return cls(
            serialization.load(text),
            guarded,
            attribute_model,
            settings=settings,
        )

    @property
    def attributes(self) -> _abc.Mapping[str, _typing.Any]:
        """The live attribute tree (a FrozenMapping while guarded)."""
        return self._attributes

    @property
    def settings(self) -> config.BagSettings:
        """Settings used by this bag."""
        return self._settings

    def _path(self, key: support.KeyPath) -> support.Path:
        return support.to_path(self._attributes, key, self._settings.path_separator)

    # =========================================================================
    # Guard state
    # =========================================================================

    def reset(
        self,
        attributes: _abc.Mapping[str, _typing.Any] | Bag | None,
        guarded: bool = False,
    ) -> Bag:
        """
        Replace all attributes.

        Each top-level entry of ``attributes`` is written with set(), in
        insertion order.

        Raises:
            ImmutabilityViolation: If the bag is guarded.
        """
        support.ensure_mutable(self._attributes)
        entries = _as_mapping(attributes)

        self._attributes = {}
        for key, value in entries.items():
            self.set(key, value)

        _logger.debug("Bag reset with %d top-level keys", len(self._attributes))

        if guarded:
            self.guard()
        return self

    def guard(self) -> Bag:
        """Deep-freeze the attributes. Writes raise until unguard() or inside mutate()."""
        self._attributes = support.freeze(self._attributes)
        self._guarded = True
        _logger.debug("Bag guarded")
        return self

    def unguard(self) -> Bag:
        """Replace the attributes with a fully mutable copy."""
        self._attributes = support.unfreeze(self._attributes)
        self._guarded = False
        _logger.debug("Bag unguarded")
        return self

    def is_guarded(self) -> bool:
        return self._guarded

    def mutate(self, key: support.KeyPath, value: _typing.Any) -> Bag:
        """
        Set ``key`` to ``value`` even if the bag is guarded.

        A guarded bag is unguarded for the write and guarded again
        afterwards, also when the write raises.
        """
        guarded = self._guarded
        if guarded:
            _logger.debug("Mutating %r on guarded bag", key)
            self.unguard()
        try:
            self.set(key, value)
        finally:
            if guarded:
                self.guard()
        return self

    # =========================================================================
    # Path access
    # =========================================================================

    def get(self, key: support.KeyPath = None, default: _typing.Any = None) -> _typing.Any:
        """
        Get the value at ``key``, or ``default`` if any segment is absent.

        An empty or None key returns the whole attribute tree.
        """
        return support.get_path(self._attributes, self._path(key), default)

    def set(self, key: support.KeyPath, value: _typing.Any) -> Bag:
        """
        Set ``key`` to ``convert_to_model(value)``.

        Missing intermediate segments are created: a list when the next
        segment is an index, a dict otherwise.

        Raises:
            ImmutabilityViolation: If the write reaches a frozen node. Use
                mutate() to write into a guarded bag.
            ValueError: If ``key`` is empty.
        """
        support.set_path(self._attributes, self._path(key), self.convert_to_model(value))
        return self

    def has(self, key: support.KeyPath) -> bool:
        """Check if ``key`` exists. A stored None counts as present."""
        return support.has_path(self._attributes, self._path(key))

    def forget(self, key: support.KeyPath) -> Bag:
        """
        Remove the value at ``key``. Absent keys are ignored.

        Raises:
            ImmutabilityViolation: If the removal reaches a frozen node.
        """
        support.unset_path(self._attributes, self._path(key))
        return self

    def call(self, path: support.KeyPath, args: _typing.Any = None) -> _typing.Any:
        """
        Call the function stored at ``path``.

        Plain functions receive the parent node as first argument (the bag
        itself for a top-level path), followed by ``args``. Other callables
        (bound methods, classes, builtins) receive ``args`` only.

        Args:
            path: Path to the callable.
            args: Argument list. A list or tuple is spread, any other value
                is passed as the single argument.

        Returns:
            Whatever the callable returns.

        Raises:
            NotInvocable: If the value at ``path`` is not callable.
        """
        segments = self._path(path)
        fn = support.get_path(self._attributes, segments)
        if not segments or not callable(fn):
            raise errors.NotInvocable(path, fn)

        arguments = _cast_args(args)
        if self._settings.bind_receiver and _inspect.isfunction(fn):
            parent = (
                support.get_path(self._attributes, segments[:-1])
                if len(segments) > 1
                else self
            )
            return fn(parent, *arguments)
        return fn(*arguments)

    # =========================================================================
    # Bulk operations
    # =========================================================================

    def all(self) -> dict[str, _typing.Any]:
        """Shallow copy of the top-level attributes. Nested values are shared."""
        return dict(self._attributes)

    def put(self, attributes: _abc.Mapping[str, _typing.Any] | Bag) -> Bag:
        """
        Merge top-level keys into the attributes.

        Unlike set(), values are stored raw: they do not go through
        convert_to_model(), and keys are never split into paths. Use it to
        load data that is already in its final form.

        Raises:
            ImmutabilityViolation: If the bag is guarded.
        """
        self._attributes.update(_as_mapping(attributes))
        return self

    def include(self, attributes: _abc.Mapping[str, _typing.Any]) -> Bag:
        """
        Set each entry as an attribute of the bag instance itself.

        Plain functions are bound as methods, so they receive the bag as
        first argument.

        Raises:
            ValueError: If a name starts with an underscore or names a
                Bag property such as ``attributes`` or ``settings``.
        """
        for name, value in _as_mapping(attributes).items():
            if not isinstance(name, str) or name.startswith("_"):
                raise ValueError(f"Cannot include private or non-string name {name!r}")
            if isinstance(getattr(type(self), name, None), property):
                raise ValueError(f"Cannot include {name!r}: it is a read-only Bag property")
            if self._settings.bind_included_functions and _inspect.isfunction(value):
                value = _types.MethodType(value, self)
            setattr(self, name, value)
        return self

    def defaults(self, default_attributes: _abc.Mapping[str, _typing.Any] | Bag) -> Bag:
        """
        Fill in top-level keys that are absent. Existing values, None
        included, are kept. Values are stored raw.
        """
        for key, value in _as_mapping(default_attributes).items():
            if key not in self._attributes:
                self._attributes[key] = value
        return self

    def convert_to_model(self, value: _typing.Any) -> _typing.Any:
        """Wrap ``value`` with the attribute model, if one is configured."""
        if self._attribute_model is None:
            return value
        return self._attribute_model(value)

    # =========================================================================
    # Iteration and queries
    # =========================================================================

    def map(self, iteratee: _typing.Any) -> list[_typing.Any]:
        """
        Map top-level attributes.

        ``iteratee`` is called with (value, key). Selector shorthands
        (path string, mapping, (path, value) pair) are accepted too.
        """
        return self._map(self.all(), iteratee)

    def map_at(self, key: support.KeyPath, iteratee: _typing.Any) -> list[_typing.Any]:
        """Map the collection at ``key``. Non-collections map to an empty list."""
        return self._map(self.get(key), iteratee)

    def each(self, iteratee: support.Iteratee) -> dict[str, _typing.Any]:
        """
        Call ``iteratee(value, key)`` for each top-level attribute.

        Iteration stops early when the iteratee returns False.

        Returns:
            The shallow copy that was iterated.
        """
        collection = self.all()
        self._each(collection, iteratee)
        return collection

    def each_at(self, key: support.KeyPath, iteratee: support.Iteratee) -> _typing.Any:
        """Call ``iteratee`` for each entry of the collection at ``key``."""
        collection = self.get(key)
        self._each(collection, iteratee)
        return collection

    def values(self) -> list[_typing.Any]:
        return list(self._attributes.values())

    def keys(self) -> list[str]:
        return list(self._attributes.keys())

    def pluck(self, selector: _typing.Any) -> list[_typing.Any]:
        """
        Extract something from every top-level value.

        Args:
            selector: Path string (value at that path), mapping (partial
                match verdict), (path, value) pair, or function called with
                (value, index).
        """
        return self._map(self.values(), selector)

    def filter(self, selector: _typing.Any) -> list[_typing.Any]:
        """
        Top-level values whose entry matches ``selector``.

        Args:
            selector: Function called with (value, key), mapping for a
                partial deep match, (path, value) pair, or path string whose
                value must be truthy.
        """
        resolved = support.as_selector(selector)
        return [
            value
            for key, value in self._attributes.items()
            if self._select(resolved, value, key)
        ]

    def _select(self, selector: support.Selector, value: _typing.Any, key: _typing.Any) -> _typing.Any:
        return support.apply_selector(selector, value, key, self._settings.path_separator)

    def _map(self, collection: _typing.Any, iteratee: _typing.Any) -> list[_typing.Any]:
        resolved = support.as_selector(iteratee)
        return [self._select(resolved, value, key) for key, value in _entries(collection)]

    @staticmethod
    def _each(collection: _typing.Any, iteratee: support.Iteratee) -> None:
        for key, value in _entries(collection):
            if iteratee(value, key) is False:
                break

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_dict(self) -> dict[str, _typing.Any]:
        """Deep mutable copy of the mapping skeleton. Other values are shared."""
        return support.unfreeze(self._attributes)

    def to_yaml(self) -> str:
        """Render the attributes as YAML text."""
        return serialization.dump(self)

    def copy(self) -> Bag:
        """
        Return an independent bag with the same settings, model and guard state.

        Values are carried over as stored; they are not wrapped again.
        """
        clone = type(self)(attribute_model=self._attribute_model, settings=self._settings)
        clone._attributes = support.unfreeze(self._attributes)
        if self._guarded:
            clone.guard()
        return clone

    # =========================================================================
    # Python protocols
    # =========================================================================

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]

    def __iter__(self) -> _typing.Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._attributes)

    def __eq__(self, other: object) -> bool:
        """Compare attribute trees with another Bag or any Mapping."""
        if isinstance(other, Bag):
            return bool(self._attributes == other._attributes)
        if isinstance(other, _abc.Mapping):
            return bool(self._attributes == other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._attributes)!r}, guarded={self._guarded})"


def _bag_representer(dumper: serialization.BagDumper, data: Bag) -> _typing.Any:
    """Represent a Bag by its top-level attributes."""
    return dumper.represent_dict(data.all())


serialization.BagDumper.add_multi_representer(Bag, _bag_representer)
