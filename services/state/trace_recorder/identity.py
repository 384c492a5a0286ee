"""Deterministic synthetic identities for traced operations.

Record keys and metadata conditions carry numeric content (``key42``,
``purpose7``, ``obj40``). That number seeds a modular mapping onto the
configured user and purpose ranges so independent calls for the same key
agree on who is asking and why.
"""

from __future__ import annotations

import re
from threading import Lock

from packages.tracer_shared.config import WorkloadSettings
from services.state.trace_recorder.domain import FieldKind, Identity

DEFAULT_IDENTITY = "0"
MAX_SEED = 2**64 - 1
MAX_SEED_DIGITS = len(str(MAX_SEED))

_NON_DIGITS = re.compile(r"[^0-9]")


def seed_from_text(text: object) -> int:
    """Return the integer formed by every ASCII digit in ``text``.

    Digit runs are concatenated (``key-12-34`` -> ``1234``). No digits, or a
    value beyond the unsigned 64-bit range, yields ``0``.
    """
    digits = _NON_DIGITS.sub("", "" if text is None else str(text))
    digits = digits.lstrip("0")
    if digits == "" or len(digits) > MAX_SEED_DIGITS:
        return 0
    seed = int(digits)
    if seed > MAX_SEED:
        return 0
    return seed


class SelectorCounter:
    """Session-wide monotonic counter shared by every client thread."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._value = 0

    def increment(self) -> int:
        """Atomically advance the counter and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        """Return the current counter snapshot."""
        with self._lock:
            return self._value


class IdentityResolver:
    """Map keys and metadata conditions onto synthetic identities."""

    def __init__(self, *, workload: WorkloadSettings) -> None:
        self._workload = workload

    def identity_from_key(self, key: str) -> Identity:
        """Derive user and purpose from the same numeric seed of ``key``."""
        seed = seed_from_text(key)
        return Identity(
            user=str(seed % self._workload.user_count),
            purpose=str(seed % self._workload.purpose_count),
        )

    def identity_from_condition(
        self,
        condition: str,
        field_kind: FieldKind | str | None,
        selector: int,
    ) -> Identity:
        """Derive an identity consistent with one metadata condition.

        ``selector`` is the counter value taken for this call. Purpose and
        user conditions name their own side of the identity verbatim; the
        other side is spread over the record space by the selector.
        """
        workload = self._workload
        seed = seed_from_text(condition)
        kind = FieldKind.parse(field_kind)

        if kind is FieldKind.PURPOSE:
            slot = (workload.purpose_count * selector + seed) % workload.record_count
            return Identity(
                user=str(slot % workload.user_count),
                purpose=str(condition),
            )

        if kind is FieldKind.OBJECTION:
            offset = seed - workload.objection_start
            slot = (workload.objection_count * selector + offset) % workload.record_count
            return Identity(
                user=str(slot % workload.user_count),
                purpose=str(slot % workload.purpose_count),
            )

        if kind is FieldKind.USER:
            slot = (workload.user_count * selector + seed) % workload.record_count
            return Identity(
                user=str(condition),
                purpose=str(slot % workload.purpose_count),
            )

        return Identity(user=DEFAULT_IDENTITY, purpose=DEFAULT_IDENTITY)
