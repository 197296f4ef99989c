# ignition

A small entity component system (ECS) built on sparse sets.

Entities are plain integers. Each component type has its own
`ComponentPool`. A pool keeps a sparse array that maps each entity to a slot,
with -1 meaning "no component". It also keeps a packed array that maps each
slot back to its entity, and stores the components one after another. A
`Scene` hands out entity ids, reuses the ids of deleted entities, and sends
component operations to the pool for the component's type.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

```python
from dataclasses import dataclass

from ignition.scene import Scene
from ignition.errors import EntityNotFound


@dataclass
class Position:
    x: float
    y: float


@dataclass
class Velocity:
    dx: float
    dy: float


scene = Scene([Position, Velocity])

player = scene.entity()
scene.component(player, Position(0.0, 0.0))
scene.component(player, Velocity(1.0, 0.5))

for position in scene.get(Position):
    print(position)

scene.disable(Velocity, player)      # hide a component from iteration
scene.enable(Velocity, player)       # and bring it back

scene.delete(player)                 # the id is reused by the next entity()

try:
    scene.get_component(Position, 42)
except EntityNotFound as error:
    print(error)
```

A scene handles only the component types passed to its constructor.
`scene.get(SomeOtherType)` raises `NoComponentPool`. `scene.component(...)`
with a component of an unregistered type logs a warning and does nothing.

Other scene methods:

- `take_component(type, entity)` removes a component and returns it.
- `component_exists(type, entity)` checks whether the entity has a component of that type.
- `toggle(type, entity)` switches a component between enabled and disabled.
- `get_current_entity()` returns the id that was most recently made available.

### Pools

A `ComponentPool` can also be used without a scene:

```python
from ignition.pool import ComponentPool

pool = ComponentPool.empty()
pool.assign_component(1, 32)
pool.assign_component(2, 21)
pool.delete_entity(1)
assert list(pool) == [21]
```

Iterating over a pool yields only its enabled components, which are the first
`num_components` slots. `len(pool)` counts them.

- `get(entity)` returns the component bound to an entity.
- `take_entity(entity)` removes the component and returns it. The last
  component moves into the freed slot.
- `delete_entity(entity)` does the same but logs a warning instead of raising
  when there is nothing to remove.
- `has_component`, `component_id`, `entity_id`, `swap_entities`,
  `swap_components` and `move_to_back` give lower-level access to the arrays.

### Errors

Every lookup failure raises a subclass of `ignition.errors.LifeError`:
`NoComponentPool`, `Downcast`, `EntityNotFound`, `ComponentNotFound`,
`EntityNotBoundToComponent` and `EntityBoundToNonExistingComponent`. Two
errors compare equal when they have the same class and the same arguments.

### Runtime configuration

`ignition.config.RuntimeConfiguration` is a dataclass with three fields:

- `control_flow`, a `ControlFlow` of `POLL`, `WAIT` or `EXIT`
- `any_thread`
- `size`, a `PhysicalSize`

The defaults are `ControlFlow.POLL`, `False` and 1920×1080.

### Component registry

`ignition.registry` scans a source tree for declarations of the form

```
#[derive(Component)]
struct Name(...)
```

and for the `engine!(` marker, skipping any `macros` directory.

- `find_components` does the scan.
- `format_components` and `replace_components_in_file` render the crate's
  section of a `components.toml` registry.
- `write_component_file` writes the registry and copies it into the temporary
  directory.
- `update_components` and `search_and_rescue_components` run all of this under
  a `components.lock` file. They rescan only when the crate's section is more
  than two seconds old.

Helpers turn the results into names and import lines:

- `module_path` and `component_module_path` build module paths.
- `component_accessor_names` gives the trait name and the snake-case getter
  names.
- `component_imports` gives the import lines for components that are not
  declared beside the engine.

## What it does not do

This package is the entity and component storage only. It opens no window,
draws nothing, and runs no event loop. `RuntimeConfiguration` only holds
settings; nothing in the package acts on them. The registry produces names and
import lines as strings, and does not generate or load any code from them.