"""
Order number pattern

A pattern such as ``"{YYYY}{MM}{DD}_{SEQ:6}"`` expands into a readable order
number. Date tokens are filled from a timestamp; the sequence token is filled
from the last issued order number.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

SEQUENCE_TOKEN_RE = re.compile(r"\{SEQ(?::(\d+))?\}")
DIGIT_RUN_RE = re.compile(r"\d+")

PREFIX_TOKEN = "{PREFIX}"


@dataclass(frozen=True)
class SequenceToken:
    """Sequence placeholder found in an expanded pattern"""

    text: str
    width: int

    def render(self, value: int) -> str:
        """Zero-pad the sequence value to the token width"""
        return f"{value:0{self.width}d}"


@dataclass(frozen=True)
class OrderNumberPattern:
    """Order number pattern value object"""

    value: str
    prefix: str = ""

    def expand_dates(self, now: datetime) -> str:
        """Replace the prefix and date tokens; the sequence token is left in place"""
        result = self.value.replace(PREFIX_TOKEN, self.prefix)
        # Longer tokens first so {YYYY} is not eaten by {YY}
        replacements = (
            ("{YYYY}", f"{now.year:04d}"),
            ("{YY}", f"{now.year % 100:02d}"),
            ("{MM}", f"{now.month:02d}"),
            ("{DD}", f"{now.day:02d}"),
            ("{M}", str(now.month)),
            ("{D}", str(now.day)),
        )
        for token, text in replacements:
            result = result.replace(token, text)
        return result

    @staticmethod
    def find_sequence_token(expanded: str, default_width: int) -> Optional[SequenceToken]:
        """Locate the first ``{SEQ}`` / ``{SEQ:N}`` token"""
        match = SEQUENCE_TOKEN_RE.search(expanded)
        if not match:
            return None
        width = int(match.group(1)) if match.group(1) else default_width
        return SequenceToken(text=match.group(0), width=width)

    def __str__(self) -> str:
        return self.value


def next_sequence(last_order_number: Optional[str]) -> int:
    """
    Next counter value after ``last_order_number``

    The last digit run wins, so digits in a prefix or date part never shadow
    the trailing counter: ``"A12B034"`` continues at 35.
    """
    if not last_order_number:
        return 1
    runs = DIGIT_RUN_RE.findall(last_order_number)
    if not runs:
        return 1
    return int(runs[-1]) + 1
