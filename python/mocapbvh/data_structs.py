"""
Data structures for parsed BVH files.

Contains dataclasses for the joint hierarchy and the motion segments read
from a BVH file.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple

from .config import Channel


@dataclass(eq=False)
class JointNode:
    """Represents a joint in the skeleton hierarchy"""
    name: str
    offset: np.ndarray = field(default_factory=lambda: np.zeros(3))
    channel_layout: Sequence[Channel] = field(default_factory=list)
    motion_start_index: int = 0
    children: Sequence['JointNode'] = field(default_factory=list)
    is_end_site: bool = False

    @property
    def channel_count(self) -> int:
        return len(self.channel_layout)

    @property
    def channel_slice(self) -> slice:
        """Slice of a frame vector holding this joint's values"""
        return slice(self.motion_start_index, self.motion_start_index + self.channel_count)

    @property
    def has_position(self) -> bool:
        return any(c.is_position for c in self.channel_layout)

    @property
    def has_rotation(self) -> bool:
        return any(c.is_rotation for c in self.channel_layout)

    @property
    def rotation_order(self) -> str:
        """Rotation order from channels (e.g., 'ZXY')"""
        return ''.join(c.axis for c in self.channel_layout if c.is_rotation)

    def channel_index(self, channel: Channel) -> Optional[int]:
        """Absolute frame index of one channel, None if the joint lacks it"""
        try:
            return self.motion_start_index + self.channel_layout.index(channel)
        except ValueError:
            return None

    def add_child(self, node: 'JointNode'):
        self.children.append(node)

    def iter_preorder(self) -> Iterator['JointNode']:
        """Yield this joint and all descendants, parents before children"""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def freeze(self):
        """Make this joint and its descendants read-only once parsing is done"""
        for node in self.iter_preorder():
            node.channel_layout = tuple(node.channel_layout)
            node.children = tuple(node.children)
            node.offset = np.asarray(node.offset, dtype=np.float64).view()
            node.offset.setflags(write=False)


@dataclass(frozen=True, eq=False)
class Motion:
    """One MOTION segment: frame time plus a frames x channels grid"""
    frame_time: float
    values: np.ndarray

    def __post_init__(self):
        values = np.asarray(self.values).view()
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

    @property
    def frame_count(self) -> int:
        return self.values.shape[0]

    @property
    def channel_count(self) -> int:
        return self.values.shape[1]

    @property
    def frames(self) -> Tuple[np.ndarray, ...]:
        return tuple(self.values)

    @property
    def duration(self) -> float:
        return self.frame_count * self.frame_time

    @property
    def fps(self) -> float:
        return 1.0 / self.frame_time if self.frame_time > 0 else 0.0

    def get_frame(self, frame_idx: int) -> np.ndarray:
        return self.values[frame_idx]
