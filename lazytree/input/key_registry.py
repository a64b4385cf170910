"""Key-token to command-name dispatch table."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBinding:
    """One or more key tokens bound to a single command name."""

    keys: tuple[str, ...]
    command: str


class KeyRegistry:
    """Resolve key tokens to command names, later bindings overriding earlier ones."""

    def __init__(self, bindings: Iterable[KeyBinding] = (), normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else self._identity
        self._commands: dict[str, str] = {}
        self.register_bindings(*bindings)

    @staticmethod
    def _identity(key: str) -> str:
        return key

    def register_binding(self, binding: KeyBinding) -> KeyRegistry:
        for key in binding.keys:
            self._commands[self._normalize(key)] = binding.command
        return self

    def register_bindings(self, *bindings: KeyBinding) -> KeyRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def unbind(self, key: str) -> None:
        self._commands.pop(self._normalize(key), None)

    def command_for(self, key: str) -> str | None:
        return self._commands.get(self._normalize(key))

    def keys_for(self, command: str) -> tuple[str, ...]:
        return tuple(key for key, bound in self._commands.items() if bound == command)

    def dispatch(self, key: str, execute: Callable[[str], bool]) -> bool | None:
        """Run the command bound to ``key``; ``None`` when the key is unbound."""
        command = self.command_for(key)
        if command is None:
            return None
        return execute(command)
