"""
BVH dataset container.

Splits a BVH file at its MOTION line, runs the hierarchy and motion parsers
in order and exposes the result read-only.
"""

import logging
import numpy as np
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .config import Channel, ParserConfig
from .data_structs import JointNode, Motion
from .errors import MotionFormatError
from .hierarchy import HierarchyBuilder
from .motion_reader import MotionReader, is_motion_line, MOTION_KEYWORD
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

JointRef = Union[str, JointNode]


@dataclass(frozen=True, eq=False)
class Dataset:
    """
    Complete BVH file data.

    Attributes:
        root: Root joint of the skeleton hierarchy
        motions: Motion segments in file order (one for well-formed files)
        total_channels: Length of every frame vector
        source: File path or name the data was parsed from
    """
    root: JointNode
    motions: Tuple[Motion, ...]
    total_channels: int
    source: str = ""

    @classmethod
    def from_file(cls, filepath: Union[str, Path], config: ParserConfig = None) -> 'Dataset':
        """Parse a BVH file"""
        config = config or ParserConfig()
        with open(filepath, 'r', encoding=config.encoding) as f:
            text = f.read()
        return cls.from_string(text, config=config, source=str(filepath))

    @classmethod
    def from_string(cls, text: str, config: ParserConfig = None, source: str = "<string>") -> 'Dataset':
        """Parse BVH text"""
        config = config or ParserConfig()
        lines = text.lstrip("\ufeff").splitlines()

        motion_line = next((i for i, line in enumerate(lines) if is_motion_line(line)), None)
        if motion_line is None:
            raise MotionFormatError(f"missing {MOTION_KEYWORD} section", source=source)

        tokens = tokenize("\n".join(lines[:motion_line]), source=source)
        hierarchy = HierarchyBuilder(config, source).build(tokens)

        reader = MotionReader(hierarchy.total_channels, config, source)
        motions = reader.read(lines[motion_line + 1:], first_line=motion_line + 2)

        dataset = cls(
            root=hierarchy.root,
            motions=tuple(motions),
            total_channels=hierarchy.total_channels,
            source=source,
        )
        logger.info(f"Loaded {source}: {len(dataset.joint_names)} joints, "
                    f"{dataset.total_channels} channels, {dataset.frame_count} frames")
        return dataset

    @property
    def motion(self) -> Motion:
        return self.motions[0]

    @property
    def frame_count(self) -> int:
        return self.motion.frame_count

    @property
    def frame_time(self) -> float:
        return self.motion.frame_time

    @property
    def joint_names(self) -> List[str]:
        return [j.name for j in self.joints()]

    def joints(self, include_end_sites: bool = False) -> Iterator[JointNode]:
        """Joints in file order"""
        for node in self.root.iter_preorder():
            if include_end_sites or not node.is_end_site:
                yield node

    def joint(self, name: str) -> JointNode:
        """Find a joint by name (first match in file order)"""
        for node in self.root.iter_preorder():
            if node.name == name:
                return node
        raise KeyError(name)

    def joint_map(self) -> Dict[str, JointNode]:
        return {j.name: j for j in self.joints()}

    def _resolve(self, joint: JointRef) -> JointNode:
        return self.joint(joint) if isinstance(joint, str) else joint

    def joint_values(self, joint: JointRef, frame_index: int, motion_index: int = 0) -> np.ndarray:
        """One joint's channel values for a frame, in its channel layout order"""
        node = self._resolve(joint)
        return self.motions[motion_index].values[frame_index, node.channel_slice]

    def channel_value(self, frame_index: int, joint: JointRef, channel: Channel, motion_index: int = 0) -> float:
        """Value of a single channel of a joint at a frame"""
        node = self._resolve(joint)
        index = node.channel_index(channel)
        if index is None:
            raise KeyError(f"{node.name} has no {channel.value} channel")
        return float(self.motions[motion_index].values[frame_index, index])


def load_bvh(filepath: Union[str, Path], config: Optional[ParserConfig] = None) -> Dataset:
    """Load and parse a BVH file."""
    return Dataset.from_file(filepath, config)


def loads_bvh(text: str, config: Optional[ParserConfig] = None) -> Dataset:
    """Parse BVH text."""
    return Dataset.from_string(text, config)
