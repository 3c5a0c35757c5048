"""Registry of population-level selection schemes.

Schemes are registered as factories: callables that take the scheme's
parameters as keyword arguments and return a configured ParentSelector. This
lets experiments pick a scheme by name from configuration:

    ```python
    from diaselect.registry import SelectionRegistry, list_selections

    selector = SelectionRegistry.get("epsilon_lexicase", epsilon=0.0)
    parents = selector(snapshot, rng)

    available = list_selections()  # ["cohort_lexicase", "down_sampled_lexicase", ...]
    ```

The built-in schemes are registered when ``diaselect.selection`` is imported.
"""

from collections.abc import Callable

from diaselect.protocols import ParentSelector


class SelectionRegistry:
    """Registry for parent selection scheme factories.

    Class Attributes:
        _registry: Dictionary mapping scheme names to factory functions.

    Example:
        ```python
        def best_only_factory():
            def selector(snapshot, rng):
                best = int(np.argmax(snapshot.aggregate))
                return np.full(len(snapshot), best, dtype=np.intp)
            return selector

        SelectionRegistry.register("best_only", best_only_factory)
        selector = SelectionRegistry.get("best_only")
        ```
    """

    _registry: dict[str, Callable[..., ParentSelector]] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[..., ParentSelector]) -> None:
        """Register a selection scheme factory.

        Args:
            name: Unique name for the scheme. Overwrites an existing entry.
            factory: Callable returning a ParentSelector. Receives the scheme
                parameters as keyword arguments.
        """
        cls._registry[name] = factory

    @classmethod
    def get(cls, name: str, **kwargs) -> ParentSelector:
        """Get a configured parent selector by name.

        Args:
            name: Name of the registered scheme.
            **kwargs: Parameters passed to the factory.

        Returns:
            A configured ParentSelector callable.

        Raises:
            KeyError: If the scheme name is not registered. The message lists
                the available schemes.
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"Selection scheme '{name}' not found. Available schemes: {available}")
        factory = cls._registry[name]
        return factory(**kwargs)

    @classmethod
    def list(cls) -> list[str]:
        """Return the sorted list of registered scheme names."""
        return sorted(cls._registry.keys())


def list_selections() -> list[str]:
    """List all registered parent selection schemes.

    Convenience function that returns SelectionRegistry.list().
    """
    return SelectionRegistry.list()
