from typing import Any, Dict, Optional

from pelikan.errors import UndefinedNameError


class Environment:
    """Represents a scope mapping identifiers to values.

    A scope's parent is the lexically enclosing scope at the point it was
    created. Closures hold a reference to the scope object itself, so
    functions defined in the same block share it.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}
        # Feathers imported by the unit; only used on root scopes.
        self.feathers: Dict[str, Any] = {}
        # Directory of the source unit; used for relative path imports.
        self.origin_dir: Optional[str] = None

    def get(self, name: str, position=None) -> Any:
        scope = self
        while scope is not None:
            if name in scope.values:
                return scope.values[name]
            scope = scope.parent
        raise UndefinedNameError(f'undefined name {name}', position)

    def define(self, name: str, value: Any):
        self.values[name] = value

    def root(self) -> 'Environment':
        scope = self
        while scope.parent is not None:
            scope = scope.parent
        return scope

    def add_feather(self, name: str, feather: Any):
        self.root().feathers[name] = feather

    def find_feather(self, name: str) -> Optional[Any]:
        return self.root().feathers.get(name)
