#!/usr/bin/env python3
"""
Source registry file loading.

The registry is a JSON array of source entries, read once at the start of
every run.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..exceptions import RegistryError
from ..models.source import SourceDescriptor

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Loads the list of monitored sources from a JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[SourceDescriptor]:
        """
        Read and validate every registry entry.

        Returns:
            Sources in file order

        Raises:
            RegistryError: If the file is missing, not JSON, not an array,
                or any entry is invalid
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise RegistryError(str(self.path), "file not found")
        except json.JSONDecodeError as e:
            raise RegistryError(str(self.path), f"invalid JSON: {e}")
        except OSError as e:
            raise RegistryError(str(self.path), str(e))

        if not isinstance(data, list):
            raise RegistryError(str(self.path), "expected a JSON array of sources")

        sources = []
        seen_ids = set()
        for index, entry in enumerate(data):
            try:
                source = SourceDescriptor.from_dict(entry)
            except ValueError as e:
                raise RegistryError(str(self.path), f"entry {index}: {e}")
            if source.id in seen_ids:
                logger.warning(f"Source id {source.id} appears more than once in {self.path}")
            seen_ids.add(source.id)
            sources.append(source)

        logger.info(f"Loaded {len(sources)} sources from {self.path}")
        return sources

    def select(self, sources: List[SourceDescriptor], ids: Optional[Iterable[str]] = None) -> List[SourceDescriptor]:
        """
        Restrict sources to the given ids, keeping registry order.

        Raises:
            RegistryError: If an id is not in the registry
        """
        if not ids:
            return list(sources)

        wanted = list(ids)
        known = {source.id for source in sources}
        unknown = [source_id for source_id in wanted if source_id not in known]
        if unknown:
            raise RegistryError(str(self.path), f"unknown source ids: {', '.join(unknown)}")

        return [source for source in sources if source.id in wanted]
