#!/usr/bin/env python3
"""
Source descriptor model.

One entry of the source registry: a monitored publication.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional

SOURCE_KINDS = ('feed', 'scrape')


@dataclass(frozen=True)
class SourceDescriptor:
    """Immutable configuration for one publication source."""
    id: str
    title: str
    url: str
    category: str = ""
    kind: Optional[str] = None  # forces an adapter; resolved from the URL when None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SourceDescriptor':
        """
        Build a descriptor from a registry entry.

        Raises:
            ValueError: If a required field is missing or the kind is unknown
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")

        missing = [key for key in ('id', 'title', 'url') if not data.get(key)]
        if missing:
            raise ValueError(f"missing required fields: {', '.join(missing)}")

        kind = data.get('kind')
        if kind is not None and kind not in SOURCE_KINDS:
            raise ValueError(f"unknown kind '{kind}' (expected one of: {', '.join(SOURCE_KINDS)})")

        return cls(
            id=str(data['id']),
            title=str(data['title']),
            url=str(data['url']),
            category=str(data.get('category', '') or ''),
            kind=kind
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the registry JSON shape."""
        data = {
            'id': self.id,
            'title': self.title,
            'url': self.url,
            'category': self.category
        }
        if self.kind:
            data['kind'] = self.kind
        return data
