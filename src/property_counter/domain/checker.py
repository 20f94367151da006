from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from property_counter.domain.errors import InvalidArgumentError

T = TypeVar("T")

Predicate = Callable[[Any], bool]


class PropertyChecker(Generic[T]):
    """Reusable predicate answering "does element x have property P".

    Checkers are immutable values. Composition (``and_``, ``or_``, ``negate``)
    returns a new checker that holds its operands by reference, so composing
    never mutates either side. The ``&``, ``|`` and ``~`` operators are aliases.
    """

    __slots__ = ("_predicate", "_name")

    def __init__(self, predicate: Callable[[T], bool], name: str | None = None) -> None:
        if not callable(predicate):
            raise InvalidArgumentError("PropertyChecker predicate must be callable")
        self._predicate = predicate
        self._name = name or _predicate_name(predicate)

    @property
    def name(self) -> str:
        return self._name

    def has_property(self, element: T) -> bool:
        return bool(self._predicate(element))

    def __call__(self, element: T) -> bool:
        return self.has_property(element)

    def and_(self, other: PropertyChecker[T] | Callable[[T], bool] | None) -> PropertyChecker[T]:
        right = _coerce_operand(other)
        return PropertyChecker(
            lambda element: self.has_property(element) and right.has_property(element),
            name=f"({self._name} AND {right.name})",
        )

    def or_(self, other: PropertyChecker[T] | Callable[[T], bool] | None) -> PropertyChecker[T]:
        right = _coerce_operand(other)
        return PropertyChecker(
            lambda element: self.has_property(element) or right.has_property(element),
            name=f"({self._name} OR {right.name})",
        )

    def negate(self) -> PropertyChecker[T]:
        return PropertyChecker(lambda element: not self.has_property(element), name=f"NOT({self._name})")

    def __and__(self, other: PropertyChecker[T] | Callable[[T], bool]) -> PropertyChecker[T]:
        return self.and_(other)

    def __or__(self, other: PropertyChecker[T] | Callable[[T], bool]) -> PropertyChecker[T]:
        return self.or_(other)

    def __invert__(self) -> PropertyChecker[T]:
        return self.negate()

    def __repr__(self) -> str:
        return f"PropertyChecker({self._name})"

    # Base cases for composition.
    @staticmethod
    def always_true() -> PropertyChecker[Any]:
        return PropertyChecker(lambda element: True, name="always_true")

    @staticmethod
    def always_false() -> PropertyChecker[Any]:
        return PropertyChecker(lambda element: False, name="always_false")

    @staticmethod
    def is_null() -> PropertyChecker[Any]:
        return PropertyChecker(lambda element: element is None, name="is_null")

    @staticmethod
    def is_not_null() -> PropertyChecker[Any]:
        return PropertyChecker(lambda element: element is not None, name="is_not_null")


def as_checker(candidate: PropertyChecker[T] | Callable[[T], bool]) -> PropertyChecker[T]:
    # Plain callables are accepted wherever a checker is expected.
    if isinstance(candidate, PropertyChecker):
        return candidate
    return PropertyChecker(candidate)


def _predicate_name(predicate: Callable[..., object]) -> str:
    # Anonymous lambdas get a readable placeholder instead of "<lambda>".
    name = getattr(predicate, "__name__", None)
    if not name or name == "<lambda>":
        return "checker"
    return name


def _coerce_operand(other: PropertyChecker[T] | Callable[[T], bool] | None) -> PropertyChecker[T]:
    if other is None:
        raise InvalidArgumentError("Other PropertyChecker cannot be None")
    return as_checker(other)
