"""Errors raised by component pools and scenes."""


class LifeError(Exception):
    """Base class of every error raised while handling entities and components."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LifeError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class NoComponentPool(LifeError):
    """No pool is registered for the requested component type."""

    def __init__(self, type_name: str) -> None:
        super().__init__(type_name)
        self.type_name = type_name

    def __str__(self) -> str:
        return f"There's no component pool for : {self.type_name}"


class Downcast(LifeError):
    """A stored pool did not hold the component type it was registered under."""

    def __init__(self, type_name: str) -> None:
        super().__init__(type_name)
        self.type_name = type_name

    def __str__(self) -> str:
        return (
            f"Downcasting the component pool failed for : {self.type_name}. "
            "Note: this is supposed to be impossible, so there's probably "
            "a rather large bug in ignition"
        )


class EntityNotFound(LifeError):
    """The entity lies outside the pool's sparse array."""

    def __init__(self, type_name: str, entity: int) -> None:
        super().__init__(type_name, entity)
        self.type_name = type_name
        self.entity = entity

    def __str__(self) -> str:
        return (
            f"Entity {self.entity} has not been found for : {self.type_name}. "
            f"Perhaps it is out of scope of the sparse array of the "
            f"{self.type_name} component pool."
        )


class ComponentNotFound(LifeError):
    """The component index lies outside the pool's packed array."""

    def __init__(self, type_name: str, component: int) -> None:
        super().__init__(type_name, component)
        self.type_name = type_name
        self.component = component

    def __str__(self) -> str:
        return (
            f"Component {self.component} has not been found for : {self.type_name}. "
            f"Perhaps it is out of scope of the packed array of the "
            f"{self.type_name} component pool."
        )


class EntityNotBoundToComponent(LifeError):
    """The entity exists but has no component in this pool."""

    def __init__(self, type_name: str, entity: int) -> None:
        super().__init__(type_name, entity)
        self.type_name = type_name
        self.entity = entity

    def __str__(self) -> str:
        return (
            f"Entity {self.entity} does not have any component bound to it "
            f"for : {self.type_name}."
        )


class EntityBoundToNonExistingComponent(LifeError):
    """The entity points at a component slot that does not exist."""

    def __init__(self, type_name: str, entity: int) -> None:
        super().__init__(type_name, entity)
        self.type_name = type_name
        self.entity = entity

    def __str__(self) -> str:
        return (
            f"Entity {self.entity} is bound to a non existing component "
            f"for : {self.type_name}. Note: this is supposed to be impossible, "
            "so there's probably a rather large bug in ignition"
        )