"""
BVH (Biovision Hierarchy) Parser Package

Reads a BVH motion capture file into:
- a joint tree with offsets, channel layouts and frame vector indices
- one or more motion segments of per-frame channel values

Fatal problems raise a BVHError subclass; recoverable ones are logged.
"""

from .config import Channel, ParserConfig
from .errors import (
    BVHError,
    TokenizeError,
    HierarchyError,
    MissingHeaderError,
    UnbalancedStructureError,
    MalformedEndSiteError,
    MotionFormatError,
    TruncatedMotionError,
)
from .tokenizer import Token, TokenKind, tokenize
from .data_structs import JointNode, Motion
from .hierarchy import HierarchyBuilder, HierarchyResult
from .motion_reader import MotionReader
from .dataset import Dataset, load_bvh, loads_bvh
from .bvh_writer import BVHWriter, write_bvh
# Note: command-line modules not imported here to avoid RuntimeWarning when running as -m

__version__ = "1.0.0"

__all__ = [
    # Configuration
    'Channel',
    'ParserConfig',

    # Errors
    'BVHError',
    'TokenizeError',
    'HierarchyError',
    'MissingHeaderError',
    'UnbalancedStructureError',
    'MalformedEndSiteError',
    'MotionFormatError',
    'TruncatedMotionError',

    # Data structures
    'JointNode',
    'Motion',
    'Dataset',

    # Parsers
    'Token',
    'TokenKind',
    'tokenize',
    'HierarchyBuilder',
    'HierarchyResult',
    'MotionReader',

    # Loading and writing
    'load_bvh',
    'loads_bvh',
    'BVHWriter',
    'write_bvh',
]
