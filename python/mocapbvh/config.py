"""
Configuration classes for BVH parsing.

Contains the parser options and the channel kinds a BVH file may declare.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Channel(Enum):
    """Animated degrees of freedom a joint may declare in CHANNELS"""
    XPOSITION = "Xposition"
    YPOSITION = "Yposition"
    ZPOSITION = "Zposition"
    XROTATION = "Xrotation"
    YROTATION = "Yrotation"
    ZROTATION = "Zrotation"
    # Placeholder slot for a channel name that is not recognised
    UNKNOWN = "Unknown"

    @property
    def axis(self) -> str:
        return self.value[0]

    @property
    def is_position(self) -> bool:
        return self.value.endswith("position")

    @property
    def is_rotation(self) -> bool:
        return self.value.endswith("rotation")

    @classmethod
    def lookup(cls, token: str) -> Optional["Channel"]:
        """Case-insensitive match of a CHANNELS token, None if unknown"""
        return _CHANNEL_BY_NAME.get(token.upper())


# Read-only after import, shared by every parse
_CHANNEL_BY_NAME = {c.value.upper(): c for c in Channel if c is not Channel.UNKNOWN}

MAX_CHANNELS = len(_CHANNEL_BY_NAME)


@dataclass
class ParserConfig:
    """Configuration for the parsing process"""
    # Text encoding of BVH files
    encoding: str = "utf-8-sig"

    # Name given to END SITE leaves, formatted with the parent joint name
    end_site_name: str = "{parent}_End"

    # Missing HIERARCHY keyword is fatal instead of a warning
    require_header: bool = False

    # Joints still open when MOTION is reached are accepted
    allow_unterminated_hierarchy: bool = False

    # Unknown channel names are fatal (False: logged, slot kept as Channel.UNKNOWN)
    strict_channels: bool = True

    # Values after the last declared frame are ignored (False: fatal)
    ignore_trailing_data: bool = True

    def format_end_site_name(self, parent_name: str) -> str:
        return self.end_site_name.format(parent=parent_name)

    @staticmethod
    def strict() -> "ParserConfig":
        """Reject anything outside the BVH grammar"""
        return ParserConfig(require_header=True, ignore_trailing_data=False)

    @staticmethod
    def lenient() -> "ParserConfig":
        """Accept files written by sloppy exporters"""
        return ParserConfig(allow_unterminated_hierarchy=True, strict_channels=False)
