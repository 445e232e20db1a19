"""
JSON file store for the memory collection, with a seed corpus for first use.
"""

import json
import os
import tempfile
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from ..models.core import Memory
from ..utils.config import config
from ..utils.json_utils import memories_to_list, memory_from_dict
from ..utils.logging_config import get_logger
from ..utils.timestamp_utils import utc_date, utc_now

logger = get_logger(__name__)


class MemoryStoreError(Exception):
    """Custom exception for memory store errors."""
    pass


def new_memory_id() -> str:
    return uuid.uuid4().hex


class MemoryStore:
    """Load and save the memory collection as a JSON array in a local file."""

    def __init__(self,
                 path: Optional[str] = None,
                 id_factory: Optional[Callable[[], str]] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 seed_on_empty: Optional[bool] = None):
        """Initialize the memory store.

        Args:
            path: JSON file path (default from config)
            id_factory: Callable returning ids for new memories
            clock: Callable returning the creation time for new memories
            seed_on_empty: Seed the store when the file is missing (default from config)
        """
        self.path = path or config.store.path
        self.id_factory = id_factory or new_memory_id
        self.clock = clock or utc_now
        self.seed_on_empty = config.store.seed_on_empty if seed_on_empty is None else seed_on_empty
        logger.info(f'Initialized MemoryStore at {self.path}')

    def load(self) -> List[Memory]:
        """Load all memories.

        A missing file is seeded (when enabled). Unreadable or malformed
        content yields an empty list; malformed records are skipped.

        Returns:
            List of Memory objects
        """
        memories = self._read()
        return [] if memories is None else memories

    def _read(self) -> Optional[List[Memory]]:
        """Read the store file, or None when it exists but cannot be parsed."""
        if not os.path.exists(self.path):
            if not self.seed_on_empty:
                return []
            seeded = seed_memories()
            self.save(seeded)
            logger.info(f'Seeded memory store with {len(seeded)} memories')
            return seeded

        try:
            with open(self.path, encoding='utf-8') as handle:
                raw = json.load(handle)
        except (OSError, ValueError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            logger.warning(f'Failed to read memory store {self.path}: {e}')
            return None

        if not isinstance(raw, list):
            logger.warning(f'Memory store {self.path} does not contain a JSON array')
            return None

        memories = []
        for index, record in enumerate(raw):
            try:
                memories.append(memory_from_dict(record))
            except ValueError as e:
                logger.warning(f'Skipping malformed memory record {index}: {e}')

        logger.debug(f'Loaded {len(memories)} memories from {self.path}')
        return memories

    def save(self, memories: List[Memory]) -> None:
        """Write all memories, replacing the file atomically.

        Raises:
            MemoryStoreError: If the file cannot be written
        """
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            payload = json.dumps(memories_to_list(memories), ensure_ascii=False, indent=2)
            os.makedirs(directory, exist_ok=True)
            with tempfile.NamedTemporaryFile('w', encoding='utf-8', dir=directory, delete=False,
                                             suffix='.tmp') as handle:
                tmp_path = handle.name
                handle.write(payload)
            os.replace(tmp_path, self.path)
            logger.debug(f'Saved {len(memories)} memories to {self.path}')
        except (OSError, TypeError, ValueError) as e:
            logger.error(f'Failed to save memory store {self.path}: {e}')
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise MemoryStoreError(f'Memory save failed: {e}')

    def add_memory(self,
                   title: str,
                   summary: str,
                   tags: Optional[List[str]] = None,
                   ideas: Optional[List[str]] = None,
                   people: Optional[List[str]] = None,
                   events: Optional[List[str]] = None,
                   content: Optional[str] = None,
                   date: Optional[datetime] = None) -> Memory:
        """Create a memory, append it to the store and return it.

        Raises:
            MemoryStoreError: If the existing file cannot be parsed, or the
                updated collection cannot be saved
        """
        current = self._read()
        if current is None:
            logger.error(f'Refusing to overwrite unreadable memory store {self.path}')
            raise MemoryStoreError(f'Memory add failed: {self.path} could not be parsed')

        memory = Memory(id=self.id_factory(),
                        date=date or self.clock(),
                        title=title,
                        summary=summary,
                        tags=list(tags or []),
                        ideas=list(ideas or []),
                        people=list(people or []),
                        events=list(events or []),
                        content=content)
        current.append(memory)
        self.save(current)
        logger.debug(f'Added memory {memory.id}')
        return memory


def seed_memories() -> List[Memory]:
    """Sample notes used to populate an empty store."""
    return [
        Memory(id='m1',
               date=utc_date(2024, 3, 14),
               title='AI-optimised solar panels',
               summary='Explored machine learning to tune inverter MPPT and panel tilt for higher yield.',
               tags=['solar', 'AI', 'energy'],
               people=['You'],
               ideas=['smart inverters', 'photovoltaics'],
               content='Using ML to optimise PV output via MPPT control and predictive weather scheduling.'),
        Memory(id='m2',
               date=utc_date(2024, 10, 2),
               title='Urban wind turbines concept',
               summary='Looked into low-noise vertical-axis turbines for rooftop use.',
               tags=['wind', 'urban', 'energy'],
               ideas=['VAWT', 'noise control'],
               content='Compact VAWT designs for cities; focus on vibration and acoustic mitigation.'),
        Memory(id='m3',
               date=utc_date(2025, 1, 5),
               title='Edge robotics + vision',
               summary='Deployed light vision models on microcontrollers for real-time navigation.',
               tags=['robotics', 'vision', 'embedded'],
               ideas=['SLAM-lite', 'event cameras'],
               content='TinyML with quantized CNNs guiding robots in constrained environments.'),
        Memory(id='m4',
               date=utc_date(2023, 12, 7),
               title='Bio-signal wearables',
               summary='Prototyped stress detection from HRV and skin temperature.',
               tags=['health', 'wearables'],
               people=['Dr. Lin'],
               ideas=['HRV', 'non-invasive sensors'],
               events=['user study']),
        Memory(id='m5',
               date=utc_date(2024, 6, 21),
               title='Urban micro-mobility data',
               summary='Aggregated scooter and bike GPS data to optimise lanes.',
               tags=['mobility', 'GIS', 'urban'],
               people=['CityLab'],
               ideas=['lane optimisation', 'heatmaps']),
        Memory(id='m6',
               date=utc_date(2022, 9, 9),
               title='Acoustic metamaterials',
               summary='Explored materials that bend sound for noise abatement.',
               tags=['materials', 'acoustics'],
               ideas=['phononic crystals']),
    ]
