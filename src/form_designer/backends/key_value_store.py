"""Key-value store contract used by the persistence gateway"""

from typing import Dict, Optional, Protocol


class KeyValueStore(Protocol):
    """Anything that can get and set a serialized blob by key"""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStore:
    """Process-local store; documents are lost on restart"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
