"""
HIERARCHY section parser.

Builds the joint tree from the token stream with an explicit stack of open
joints. Each node reads its own name, offset and channel layout through a
TokenCursor that carries the read position.
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import List, Optional

from .config import Channel, MAX_CHANNELS, ParserConfig
from .data_structs import JointNode
from .errors import (
    HierarchyError,
    MalformedEndSiteError,
    MissingHeaderError,
    UnbalancedStructureError,
)
from .tokenizer import Token, TokenKind

logger = logging.getLogger(__name__)

HEADER_KEYWORD = "HIERARCHY"
ROOT_KEYWORD = "ROOT"
OFFSET_KEYWORD = "OFFSET"
CHANNELS_KEYWORD = "CHANNELS"
JOINT_KEYWORD = "JOINT"
END_KEYWORD = "END"
SITE_KEYWORD = "SITE"


class TokenCursor:
    """Read position over a token list"""

    def __init__(self, tokens: List[Token], source: Optional[str] = None):
        self.tokens = tokens
        self.pos = 0
        self.source = source

    @property
    def exhausted(self) -> bool:
        return self.peek().kind is TokenKind.END

    def peek(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.tokens[-1]

    def next(self) -> Token:
        token = self.peek()
        if token.kind is not TokenKind.END:
            self.pos += 1
        return token

    def error(self, cls, message: str, token: Token):
        return cls(message, line=token.line, column=token.column, source=self.source)

    def expect_symbol(self, what: str) -> Token:
        token = self.next()
        if token.kind is not TokenKind.SYMBOL:
            raise self.error(HierarchyError, f"expected {what}, found {token.kind.value!r}", token)
        return token

    def read_float(self, what: str) -> float:
        token = self.expect_symbol(what)
        try:
            return float(token.value)
        except ValueError:
            raise self.error(HierarchyError, f"expected {what}, found {token.value!r}", token) from None

    def read_int(self, what: str) -> int:
        token = self.expect_symbol(what)
        try:
            return int(token.value)
        except ValueError:
            raise self.error(HierarchyError, f"expected {what}, found {token.value!r}", token) from None


def read_joint_name(node: JointNode, cursor: TokenCursor):
    node.name = cursor.expect_symbol("joint name").value


def read_offset(node: JointNode, cursor: TokenCursor):
    node.offset = np.array([cursor.read_float(f"OFFSET {axis} value") for axis in "xyz"])


def read_channel_layout(node: JointNode, cursor: TokenCursor, config: ParserConfig) -> int:
    """
    Read 'CHANNELS <n> <name>...' arguments into the node's layout.

    Returns:
        Number of channels the joint contributes to each frame
    """
    count_token = cursor.peek()
    count = cursor.read_int("channel count")
    if not 0 <= count <= MAX_CHANNELS:
        raise cursor.error(HierarchyError, f"channel count {count} outside 0..{MAX_CHANNELS}", count_token)

    layout = []
    for _ in range(count):
        token = cursor.expect_symbol("channel name")
        channel = Channel.lookup(token.value)
        if channel is None:
            if config.strict_channels:
                raise cursor.error(HierarchyError, f"unknown channel {token.value!r}", token)
            logger.warning(f"{node.name}: ignoring unknown channel {token.value!r} at line {token.line}")
            channel = Channel.UNKNOWN
        layout.append(channel)

    node.channel_layout = layout
    return len(layout)


@dataclass
class HierarchyResult:
    """Completed joint tree and the per-frame vector length it implies"""
    root: JointNode
    total_channels: int
    has_header: bool


class HierarchyBuilder:
    """Parser for the token stream of a HIERARCHY section"""

    def __init__(self, config: ParserConfig = None, source: Optional[str] = None):
        self.config = config or ParserConfig()
        self.source = source

    def build(self, tokens: List[Token]) -> HierarchyResult:
        """
        Build the joint tree.

        Args:
            tokens: Output of tokenize() for the text before MOTION

        Returns:
            HierarchyResult with the root joint and total channel count
        """
        cursor = TokenCursor(tokens, self.source)
        stack: List[JointNode] = []
        root = None
        has_header = False
        total_channels = 0
        with_channels = set()

        while not cursor.exhausted:
            token = cursor.next()

            if token.kind is TokenKind.LBRACE:
                continue

            if token.kind is TokenKind.RBRACE:
                if not stack:
                    raise cursor.error(UnbalancedStructureError, "'}' without an open joint", token)
                stack.pop()
                continue

            if token.is_keyword(HEADER_KEYWORD):
                has_header = True
            elif token.is_keyword(ROOT_KEYWORD):
                if root is not None:
                    raise cursor.error(HierarchyError, "more than one ROOT joint", token)
                root = JointNode(name="")
                read_joint_name(root, cursor)
                stack.append(root)
            elif token.is_keyword(OFFSET_KEYWORD):
                read_offset(self._top(stack, cursor, token), cursor)
            elif token.is_keyword(CHANNELS_KEYWORD):
                node = self._top(stack, cursor, token)
                if id(node) in with_channels:
                    raise cursor.error(HierarchyError, f"duplicate CHANNELS for joint {node.name!r}", token)
                with_channels.add(id(node))
                node.motion_start_index = total_channels
                total_channels += read_channel_layout(node, cursor, self.config)
            elif token.is_keyword(JOINT_KEYWORD):
                parent = self._top(stack, cursor, token)
                node = JointNode(name="")
                read_joint_name(node, cursor)
                parent.add_child(node)
                stack.append(node)
            elif token.is_keyword(END_KEYWORD):
                parent = self._top(stack, cursor, token)
                site = cursor.next()
                if not site.is_keyword(SITE_KEYWORD):
                    found = site.value or site.kind.value
                    raise cursor.error(
                        MalformedEndSiteError, f"END must be followed by SITE, found {found!r}", site)
                node = JointNode(
                    name=self.config.format_end_site_name(parent.name),
                    motion_start_index=total_channels,
                    is_end_site=True,
                )
                parent.add_child(node)
                stack.append(node)
            else:
                logger.warning(f"Unrecognized token {token.value!r} at line {token.line}, skipping")

        self._check_complete(root, stack, has_header, cursor)
        root.freeze()
        logger.debug(f"Hierarchy parsed: root={root.name}, channels={total_channels}")
        return HierarchyResult(root=root, total_channels=total_channels, has_header=has_header)

    def _top(self, stack: List[JointNode], cursor: TokenCursor, token: Token) -> JointNode:
        if not stack:
            raise cursor.error(HierarchyError, f"{token.value} outside of a joint scope", token)
        return stack[-1]

    def _check_complete(self, root: Optional[JointNode], stack: List[JointNode], has_header: bool,
                        cursor: TokenCursor):
        end = cursor.peek()
        if not has_header:
            if self.config.require_header:
                raise cursor.error(MissingHeaderError, "missing HIERARCHY keyword", cursor.tokens[0])
            logger.warning(f"{self.source or 'input'}: missing HIERARCHY keyword")
        if root is None:
            raise cursor.error(HierarchyError, "no ROOT joint", end)
        if stack:
            open_names = ", ".join(node.name for node in stack)
            if not self.config.allow_unterminated_hierarchy:
                raise cursor.error(
                    UnbalancedStructureError, f"hierarchy ends with unclosed joints: {open_names}", end)
            logger.warning(f"Hierarchy ends with unclosed joints: {open_names}")
