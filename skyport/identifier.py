"""
Namespaced resource identifiers

A resource pack addresses every asset as ``namespace:path``, where the path is
relative to ``assets/<namespace>/``. Identifiers are immutable values and are
used as dictionary keys throughout the converters.
"""

import re
from dataclasses import dataclass

DEFAULT_NAMESPACE = "minecraft"

_NAMESPACE_RE = re.compile(r"^[a-z0-9_.-]+$")
_PATH_RE = re.compile(r"^[a-z0-9_./-]+$")


@dataclass(frozen=True)
class Identifier:
    """
    A ``(namespace, path)`` pair naming one resource.

    Examples:
        >>> Identifier("fabricskyboxes", "sky/sky0.json")
        Identifier(namespace='fabricskyboxes', path='sky/sky0.json')
        >>> str(Identifier.parse("stone.png"))
        'minecraft:stone.png'
    """
    namespace: str
    path: str

    def __post_init__(self):
        if not _NAMESPACE_RE.match(self.namespace):
            raise ValueError(f"Invalid namespace: {self.namespace!r}")
        if not _PATH_RE.match(self.path):
            raise ValueError(f"Invalid path: {self.path!r}")
        # Resources never climb out of their namespace directory
        if any(segment in (".", "..") for segment in self.path.split("/")):
            raise ValueError(f"Relative segment in path: {self.path!r}")

    @classmethod
    def parse(cls, value: str) -> "Identifier":
        """Parse ``namespace:path``, defaulting the namespace to minecraft"""
        namespace, sep, path = value.partition(":")
        if not sep:
            return cls(DEFAULT_NAMESPACE, value)
        return cls(namespace, path)

    @property
    def name(self) -> str:
        """Last path segment (file name)"""
        return self.path.rsplit("/", 1)[-1]

    @property
    def stem(self) -> str:
        """File name without its extension"""
        name = self.name
        if "." in name:
            return name[:name.rindex(".")]
        return name

    def __str__(self) -> str:
        return f"{self.namespace}:{self.path}"
