"""
Command-line interface for inspecting BVH files.

Parses a file and prints a summary of its skeleton and motion, optionally
the joint tree and the per-joint values of one frame.
"""

import argparse
import logging
import sys

from .batch_validate import setup_logging
from .config import ParserConfig
from .data_structs import JointNode
from .dataset import Dataset
from .errors import BVHError


def format_tree(joint: JointNode, depth: int = 0) -> str:
    """Indented listing of a joint and its descendants"""
    indent = "  " * depth
    if joint.is_end_site:
        line = f"{indent}{joint.name} (end site)"
    else:
        channels = " ".join(c.value for c in joint.channel_layout)
        line = f"{indent}{joint.name} [{joint.motion_start_index}:{joint.motion_start_index + joint.channel_count}] {channels}"
    lines = [line.rstrip()]
    for child in joint.children:
        lines.append(format_tree(child, depth + 1))
    return "\n".join(lines)


def print_summary(dataset: Dataset):
    print(f"File: {dataset.source}")
    print(f"  Root: {dataset.root.name}")
    print(f"  Joints: {len(dataset.joint_names)}")
    print(f"  Channels: {dataset.total_channels}")
    for i, motion in enumerate(dataset.motions):
        label = "Motion" if len(dataset.motions) == 1 else f"Motion {i}"
        print(f"  {label}: {motion.frame_count} frames, frame time {motion.frame_time:g}s "
              f"({motion.fps:.2f} fps, {motion.duration:.2f}s)")


def print_frame(dataset: Dataset, frame_index: int):
    print(f"\nFrame {frame_index}:")
    for joint in dataset.joints():
        if not joint.channel_count:
            continue
        values = dataset.joint_values(joint, frame_index)
        pairs = ", ".join(f"{c.value}={v:.4f}" for c, v in zip(joint.channel_layout, values))
        print(f"  {joint.name}: {pairs}")


def main(argv=None):
    """Command-line interface for BVH inspection"""
    parser = argparse.ArgumentParser(
        description='Parse a BVH file and print its structure',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  # Summary only
  %(prog)s walk.bvh

  # Joint tree and the first frame's values
  %(prog)s walk.bvh --joints --frame 0

  # Accept unclosed joints and unknown channel names
  %(prog)s broken.bvh --lenient
        """
    )

    parser.add_argument('bvh', help='Input BVH file')
    parser.add_argument('--joints', action='store_true', help='Print the joint tree')
    parser.add_argument('--frame', type=int, default=None, help='Print per-joint values of this frame')
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--strict', action='store_true',
                      help='Require the HIERARCHY header and reject trailing data')
    mode.add_argument('--lenient', action='store_true',
                      help='Accept unclosed joints and skip unknown channels')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')

    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.strict:
        config = ParserConfig.strict()
    elif args.lenient:
        config = ParserConfig.lenient()
    else:
        config = ParserConfig()

    try:
        dataset = Dataset.from_file(args.bvh, config)
    except (BVHError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_summary(dataset)
    if args.joints:
        print()
        print(format_tree(dataset.root))
    if args.frame is not None:
        if not 0 <= args.frame < dataset.frame_count:
            print(f"Error: frame {args.frame} out of range 0..{dataset.frame_count - 1}", file=sys.stderr)
            return 1
        print_frame(dataset, args.frame)
    return 0


if __name__ == '__main__':
    sys.exit(main())
