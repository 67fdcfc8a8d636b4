from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Frame:
    """One scope level: its own bindings plus the index of its parent frame."""
    parent: Optional[int]
    values: Dict[str, Any] = field(default_factory=dict)


class Environment:
    """Arena of scope frames mapping identifiers to bindings.

    Frames are addressed by their index in the arena. Index 0 is the global
    frame and is never discarded. Frames are created and discarded in stack
    order, so discarding a frame also discards everything pushed after it.
    The type checker binds names to types, the interpreter to values.
    """
    GLOBAL = 0

    def __init__(self):
        self.frames: List[Frame] = [Frame(None)]

    @property
    def globals(self) -> Dict[str, Any]:
        return self.frames[self.GLOBAL].values

    def push(self, parent: int) -> int:
        """Create a child frame of `parent` and return its index."""
        self.frames.append(Frame(parent))
        return len(self.frames) - 1

    def pop(self, index: int) -> None:
        """Discard frame `index` and every frame created after it."""
        if index <= self.GLOBAL:
            raise ValueError('the global frame cannot be discarded')
        del self.frames[index:]

    def reset(self) -> None:
        """Discard every frame except the global one."""
        del self.frames[self.GLOBAL + 1:]

    def resolve(self, frame: int, name: str) -> Optional[int]:
        """Return the index of the nearest frame owning `name`, or None."""
        current: Optional[int] = frame
        while current is not None:
            scope = self.frames[current]
            if name in scope.values:
                return current
            current = scope.parent
        return None

    def lookup(self, frame: int, name: str) -> Any:
        owner = self.resolve(frame, name)
        if owner is None:
            return None
        return self.frames[owner].values[name]

    def declare(self, frame: int, name: str, value: Any) -> None:
        """Bind `name` in `frame` itself, shadowing any outer binding."""
        self.frames[frame].values[name] = value

    def assign(self, frame: int, name: str, value: Any) -> bool:
        """Rebind `name` in the nearest owning frame; False if none owns it."""
        owner = self.resolve(frame, name)
        if owner is None:
            return False
        self.frames[owner].values[name] = value
        return True

    def local(self, frame: int, name: str) -> Any:
        """Return the binding of `name` in `frame` only, or None."""
        return self.frames[frame].values.get(name)
