"""
BVH (BioVision Hierarchy) file writer.

Writes a parsed dataset back to BVH text. The output parses to an
equivalent dataset.
"""

from io import StringIO
from typing import TextIO

from .data_structs import JointNode, Motion
from .dataset import Dataset


class BVHWriter:
    """Writer for BVH files"""

    def __init__(self, dataset: Dataset, precision: int = 6):
        self.dataset = dataset
        self.precision = precision

    def _fmt(self, value: float) -> str:
        return f"{value:.{self.precision}f}"

    def write(self, filepath: str):
        """Write BVH file."""
        with open(filepath, 'w', encoding="utf-8") as f:
            self._write(f)

    def dumps(self) -> str:
        buf = StringIO()
        self._write(buf)
        return buf.getvalue()

    def _write(self, f: TextIO):
        f.write("HIERARCHY\n")
        self._write_joint(f, self.dataset.root, 0)
        f.write("MOTION\n")
        for motion in self.dataset.motions:
            f.write(f"Frames:\t{motion.frame_count}\n")
            f.write(f"Frame Time:\t{motion.frame_time:.{max(self.precision, 6)}f}\n")
            self._write_motion(f, motion)

    def _write_joint(self, f: TextIO, joint: JointNode, depth: int):
        """Write a joint and its children"""
        indent = "\t" * depth

        if joint.is_end_site:
            f.write(f"{indent}End Site\n")
        else:
            joint_type = "ROOT" if depth == 0 else "JOINT"
            f.write(f"{indent}{joint_type} {joint.name}\n")
        f.write(f"{indent}{{\n")

        offset = "\t".join(self._fmt(v) for v in joint.offset)
        f.write(f"{indent}\tOFFSET\t{offset}\n")

        if joint.channel_count or not joint.is_end_site:
            names = " ".join(c.value for c in joint.channel_layout)
            f.write(f"{indent}\tCHANNELS {joint.channel_count} {names}".rstrip() + "\n")

        for child in joint.children:
            self._write_joint(f, child, depth + 1)

        f.write(f"{indent}}}\n")

    def _write_motion(self, f: TextIO, motion: Motion):
        """Write motion data, one line per frame"""
        for frame in motion.values:
            f.write("\t".join(self._fmt(v) for v in frame) + "\n")


def write_bvh(dataset: Dataset, filepath: str, precision: int = 6):
    BVHWriter(dataset, precision).write(filepath)
