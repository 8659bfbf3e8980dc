from typing import Dict, Iterator, Optional, Tuple

from whilelang.ast import Node


class State:
    """The mathematical notion of state in While: a mapping from variable
    names to integers.

    Reading a name that was never assigned gives 0. Explicitly assigned
    zeros still show up when the state is displayed.
    """
    def __init__(self, mappings: Optional[Dict[str, int]] = None):
        self.mappings: Dict[str, int] = dict(mappings or {})

    def get(self, ident: str) -> int:
        return self.mappings.get(ident, 0)

    def set(self, ident: str, value: int):
        self.mappings[ident] = value

    def as_dict(self) -> Dict[str, int]:
        return dict(self.mappings)

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(sorted(self.mappings.items()))

    def copy(self) -> 'State':
        return State(self.mappings)

    def __contains__(self, ident: str) -> bool:
        return ident in self.mappings

    def __len__(self) -> int:
        return len(self.mappings)

    def __eq__(self, other) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return self.mappings == other.mappings

    def __str__(self) -> str:
        return '[' + ', '.join(f'{name} -> {value}' for name, value in self.items()) + ']'

    def __repr__(self) -> str:
        return f'State({self.mappings!r})'


class Context:
    """Everything the interpreter tracks while running one program: the
    variable state plus definitions, which are statements bound to names.
    """
    def __init__(self):
        self.state = State()
        self.definitions: Dict[str, Node] = {}

    def add_definition(self, name: str, definition: Node):
        self.definitions[name] = definition

    def get_definition(self, name: str) -> Optional[Node]:
        return self.definitions.get(name)

    def set_variable(self, name: str, value: int):
        self.state.set(name, value)

    def get_variable(self, name: str) -> int:
        return self.state.get(name)
