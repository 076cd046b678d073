"""Registry of pages exposed in the site navigation."""

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class NavLink:
    label: str
    path: str


class NavigationRegistry:
    """Ordered set of navigation links, unique by path."""

    def __init__(self):
        self._links: List[NavLink] = []

    def register(self, label: str, path: str) -> NavLink:
        if not label or not path.startswith("/"):
            raise ValueError("navigation links need a label and an absolute path")
        if any(link.path == path for link in self._links):
            raise ValueError(f"path already registered: {path}")
        link = NavLink(label=label, path=path)
        self._links.append(link)
        return link

    def links(self) -> Tuple[NavLink, ...]:
        return tuple(self._links)


navigation = NavigationRegistry()
