from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from property_counter.domain.checker import PropertyChecker
from property_counter.domain.errors import InvalidArgumentError
from property_counter.services.checkers import PropertyCheckers, all_of, any_of
from property_counter.usecases.config_models import CheckerDecl


# Errors are explicit for fast config feedback.
class UnknownCheckerError(KeyError):
    pass


CheckerFactory = Callable[[dict[str, Any]], PropertyChecker[Any]]


@dataclass
class CheckerRegistry:
    # Registry maps checker kinds to factories taking the declaration params.
    _factories: dict[str, CheckerFactory] = field(default_factory=dict)

    def register(self, kind: str, factory: CheckerFactory) -> None:
        # Registration is explicit; later registration overrides are allowed by default.
        self._factories[kind] = factory

    def get(self, kind: str) -> CheckerFactory:
        if kind not in self._factories:
            raise UnknownCheckerError(kind)
        return self._factories[kind]

    def kinds(self) -> list[str]:
        return sorted(self._factories)

    def build(self, decl: CheckerDecl) -> PropertyChecker[Any]:
        checker = self.get(decl.kind)(dict(decl.params))
        return checker.negate() if decl.negate else checker

    def build_combined(self, decls: list[CheckerDecl], *, combine: str = "all") -> PropertyChecker[Any]:
        checkers = [self.build(decl) for decl in decls]
        if combine == "any":
            return any_of(checkers)
        return all_of(checkers)


def default_registry(library: PropertyCheckers) -> CheckerRegistry:
    # Every library checker is reachable from configuration by kind name.
    registry = CheckerRegistry()
    registry.register("odd", lambda params: library.odd_numbers())
    registry.register("even", lambda params: library.even_numbers())
    registry.register("prime", lambda params: library.prime_numbers())
    registry.register("perfect", lambda params: library.perfect_numbers())
    registry.register("positive", lambda params: library.positive_numbers())
    registry.register("negative", lambda params: library.negative_numbers())
    registry.register(
        "in_range",
        lambda params: library.in_range(params.get("min"), params.get("max")),
    )
    registry.register("palindrome", lambda params: library.palindromes())
    registry.register(
        "contains",
        lambda params: library.contains_pattern(
            _required(params, "pattern"),
            bool(params.get("ignore_case", False)),
        ),
    )
    registry.register("length", lambda params: library.has_length(int(_required(params, "length"))))
    registry.register("email", lambda params: library.valid_emails())
    registry.register("empty", lambda params: library.empty_collections())
    registry.register("size", lambda params: library.has_size(int(_required(params, "size"))))
    registry.register("always_true", lambda params: PropertyChecker.always_true())
    registry.register("always_false", lambda params: PropertyChecker.always_false())
    registry.register("is_null", lambda params: PropertyChecker.is_null())
    registry.register("is_not_null", lambda params: PropertyChecker.is_not_null())
    return registry


def _required(params: dict[str, Any], name: str) -> Any:
    if params.get(name) is None:
        raise InvalidArgumentError(f"checker parameter '{name}' is required")
    return params[name]
