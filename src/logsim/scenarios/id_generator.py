"""
Generate correlation IDs from format templates.

Formats come from config id_formats with placeholders:
  {millis}  - current epoch milliseconds
  {hex:N}   - N random hex chars
  {b36:N}   - N random base-36 chars (0-9a-z)
  {seq}     - per-generator sequence number, starting at 1
"""

import itertools
import random
import re
import string
import time
from collections.abc import Callable, Mapping

from ..config import DEFAULT_ID_FORMATS

_MILLIS_PLACEHOLDER = re.compile(r"\{millis\}")
_HEX_PLACEHOLDER = re.compile(r"\{hex:(\d+)\}")
_B36_PLACEHOLDER = re.compile(r"\{b36:(\d+)\}")
_SEQ_PLACEHOLDER = re.compile(r"\{seq\}")

_B36_ALPHABET = string.digits + string.ascii_lowercase


def _clamp_width(match: re.Match[str]) -> int:
    return min(max(1, int(match.group(1))), 64)


class IdGenerator:
    """
    Expand id_formats templates using an injected random source and clock.

    Keys: request_id, session_id, order_id, transaction_id, job_id, correlation_id.
    """

    def __init__(
        self,
        rng: random.Random,
        formats: Mapping[str, str] | None = None,
        millis: Callable[[], int] | None = None,
    ):
        self._rng = rng
        self._formats = dict(DEFAULT_ID_FORMATS)
        if formats:
            self._formats.update(formats)
        self._millis = millis or (lambda: time.time_ns() // 1_000_000)
        self._seq = itertools.count(1)

    def expand(self, template: str) -> str:
        """Expand placeholders in a template."""
        if not template:
            return ""
        rng = self._rng

        def replace_hex(match: re.Match[str]) -> str:
            return "".join(rng.choice("0123456789abcdef") for _ in range(_clamp_width(match)))

        def replace_b36(match: re.Match[str]) -> str:
            return "".join(rng.choice(_B36_ALPHABET) for _ in range(_clamp_width(match)))

        out = _MILLIS_PLACEHOLDER.sub(lambda _: str(self._millis()), template)
        out = _HEX_PLACEHOLDER.sub(replace_hex, out)
        out = _B36_PLACEHOLDER.sub(replace_b36, out)
        if _SEQ_PLACEHOLDER.search(out):
            out = _SEQ_PLACEHOLDER.sub(str(next(self._seq)), out)
        return out

    def generate(self, format_key: str) -> str:
        template = self._formats.get(format_key)
        if not template:
            raise KeyError(f"Unknown id format key: {format_key}")
        return self.expand(template)

    def request_id(self) -> str:
        return self.generate("request_id")

    def session_id(self) -> str:
        return self.generate("session_id")

    def order_id(self) -> str:
        return self.generate("order_id")

    def transaction_id(self) -> str:
        return self.generate("transaction_id")

    def job_id(self) -> str:
        return self.generate("job_id")

    def correlation_id(self) -> str:
        """Burst correlation id; the {seq} part keeps overlapping bursts distinct."""
        return self.generate("correlation_id")
