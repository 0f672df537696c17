"""
Exception types raised while parsing BVH files.

Every fatal condition derives from BVHError, so callers can catch one type
and still tell the failure modes apart. Non-fatal conditions are reported
through logging and never raised.
"""

from typing import Optional


class BVHError(ValueError):
    """Base class for fatal BVH parse errors"""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None,
                 source: Optional[str] = None):
        self.message = message
        self.line = line
        self.column = column
        self.source = source
        super().__init__(self._format())

    def _format(self) -> str:
        where = []
        if self.source:
            where.append(str(self.source))
        if self.line is not None:
            where.append(f"line {self.line}")
            if self.column is not None:
                where.append(f"column {self.column}")
        if where:
            return f"{', '.join(where)}: {self.message}"
        return self.message


class TokenizeError(BVHError):
    """The HIERARCHY section could not be split into tokens"""


class HierarchyError(BVHError):
    """The joint hierarchy violates the BVH grammar"""


class MissingHeaderError(HierarchyError):
    """The HIERARCHY keyword is absent and a header is required"""


class UnbalancedStructureError(HierarchyError):
    """Braces do not balance: a '}' without an open joint, or joints left open"""


class MalformedEndSiteError(HierarchyError):
    """The END keyword is not immediately followed by SITE"""


class MotionFormatError(BVHError):
    """The MOTION section header or its values are malformed"""


class TruncatedMotionError(MotionFormatError):
    """Fewer motion values are present than the declared frame count requires"""
