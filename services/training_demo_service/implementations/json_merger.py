"""Deep merge over JSON values."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import JsonValue

Container = dict[str, JsonValue] | list[JsonValue]


class DeepJsonMerger:
    """Deep-merges JSON values the way lodash's ``merge`` does for parsed JSON.

    Mappings merge key by key, arrays merge index by index, and any other
    incoming value replaces what was there. Keys carry no special meaning, so
    ``__proto__`` and ``constructor`` are merged like any other key.

    Nested containers are walked with an explicit work stack, so nesting depth
    is limited only by the size of the input.
    """

    def merge(self, target: dict[str, JsonValue], *sources: JsonValue) -> dict[str, JsonValue]:
        for source in sources:
            if isinstance(source, dict):
                self._merge_entries(target, source.items())
            elif isinstance(source, list):
                # An array merged into a mapping contributes its indices as keys
                self._merge_entries(target, ((str(i), v) for i, v in enumerate(source)))
        return target

    def _merge_entries(
        self,
        target: dict[str, JsonValue],
        entries: Iterable[tuple[str, JsonValue]],
    ) -> None:
        pending: list[tuple[Container, Iterable[tuple[Any, JsonValue]]]] = [(target, entries)]

        while pending:
            container, items = pending.pop()
            for key, incoming in items:
                existing = _get(container, key)
                if isinstance(incoming, dict):
                    merged: JsonValue = existing if isinstance(existing, dict) else {}
                    pending.append((merged, incoming.items()))
                elif isinstance(incoming, list):
                    merged = existing if isinstance(existing, list) else []
                    pending.append((merged, enumerate(incoming)))
                else:
                    merged = incoming
                _put(container, key, merged)


def _get(container: Container, key: Any) -> JsonValue:
    if isinstance(container, dict):
        return container.get(key)
    return container[key] if key < len(container) else None


def _put(container: Container, key: Any, value: JsonValue) -> None:
    if isinstance(container, dict):
        container[key] = value
    elif key < len(container):
        container[key] = value
    else:
        # Indices arrive in order, so a missing index is always the next one
        container.append(value)
