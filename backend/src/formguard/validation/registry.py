"""Method registry for formguard.

Maps rule names to validation methods. A registry is owned by one
controller and passed by reference into every validation call; the engine
only reads it.
"""

from collections.abc import Iterator

from formguard.validation.methods import DEFAULT_METHODS
from formguard.validation.types import Method, Predicate


class MethodRegistry:
    """Registry of validation methods keyed by rule name.

    Every change bumps ``version`` so owners of derived state (the error
    message table) can tell the registry moved on.

    Example:
        methods = MethodRegistry.with_defaults()
        methods.register("zip", lambda value, params: len(value) == 5, "Invalid ZIP")
    """

    def __init__(self, methods: dict[str, Method] | None = None):
        self._methods: dict[str, Method] = dict(methods or {})
        # emptiness is always decided by some `required` method
        self._methods.setdefault("required", DEFAULT_METHODS["required"])
        self.version = 0

    @classmethod
    def with_defaults(cls) -> "MethodRegistry":
        """Create a registry holding the built-in methods."""
        return cls(DEFAULT_METHODS)

    def register(self, name: str, predicate: Predicate, message: str) -> None:
        """Register a method by rule name, replacing any existing one.

        Args:
            name: Rule name referenced from rule sets (e.g., "zip")
            predicate: Pure function (value, params) -> truthy when valid.
                ``required`` is called with the value alone.
            message: Default error message
        """
        if not callable(predicate):
            raise TypeError(f"Method '{name}' predicate must be callable")
        self._methods[name] = Method(predicate, message)
        self.version += 1

    def unregister(self, name: str) -> None:
        """Remove a method. The ``required`` method cannot be removed."""
        if name == "required":
            raise ValueError("The 'required' method decides emptiness and cannot be removed")
        if self._methods.pop(name, None) is not None:
            self.version += 1

    def get(self, name: str) -> Method | None:
        return self._methods.get(name)

    def __getitem__(self, name: str) -> Method:
        return self._methods[name]

    def __contains__(self, name: object) -> bool:
        return name in self._methods

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)

    def names(self) -> list[str]:
        """List all registered rule names."""
        return sorted(self._methods)

    def copy(self) -> "MethodRegistry":
        return MethodRegistry(self._methods)
