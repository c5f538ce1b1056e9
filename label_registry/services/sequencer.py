"""
Sequencer - correlative numbering for label codes and default item names.

Two strategies share the same code format ``prefix + zero_pad(n, digits)``:

- DerivedSequencer: the next number is recomputed from the stored codes on
  every call (max trailing numeric suffix + 1). Nothing to go stale, but the
  scan is O(n) and codes without a trailing number are skipped silently
  when computing the maximum.
- StoredSequencer: the next number is an explicit counter kept in the
  document's ``state``. It is read and advanced by the batch size on each
  generation and never reconciled with the actual codes, so deleting or
  editing labels leaves it untouched.
"""

import re
from typing import List, Optional, Sequence, Tuple

from label_registry.schemas.label import Label
from label_registry.schemas.state import DerivedState, RegistryState

TRAILING_NUMBER = re.compile(r"([0-9]+)\Z")

DEFAULT_ITEM_NAME = "Articulo"
NAME_SEQ_DIGITS = 2


def pad(number: int, width: int) -> str:
    """Zero-pad ``number`` to ``width``; wider numbers are kept whole."""
    return str(number).zfill(width)


def format_code(prefix: str, number: int, digits: int) -> str:
    """
    Build a label code.

    Example:
        >>> format_code("KIOSCO-922-", 7, 5)
        'KIOSCO-922-00007'
        >>> format_code("A-", 1234, 3)
        'A-1234'
    """
    return f"{prefix}{pad(number, digits)}"


def code_suffix(code: str) -> Optional[int]:
    """Trailing decimal number of ``code``, or None if it has none."""
    match = TRAILING_NUMBER.search(code)
    if not match:
        return None
    return int(match.group(1))


def next_code_number(labels: Sequence[Label]) -> int:
    """Max trailing number over all codes plus one (1 for no numbered codes)."""
    highest = 0
    for label in labels:
        suffix = code_suffix(label.code)
        if suffix is not None and suffix > highest:
            highest = suffix
    return highest + 1


def next_name_seq(labels: Sequence[Label]) -> int:
    return len(labels) + 1


def numbered_item_name(seq: int) -> str:
    return f"{DEFAULT_ITEM_NAME} {pad(seq, NAME_SEQ_DIGITS)}"


def advance_state(state: RegistryState, count: int) -> Tuple[List[int], RegistryState]:
    """
    Reserve ``count`` numbers from a stored counter.

    Returns the reserved numbers and a new state whose ``next`` follows
    them. The given state is not modified.
    """
    numbers = list(range(state.next, state.next + count))
    return numbers, state.model_copy(update={"next": state.next + count})


class DerivedSequencer:
    """Numbering computed from the current labels; prefix and digits are fixed."""

    stored = False

    def __init__(self, prefix: str, digits: int):
        self.prefix = prefix
        self.digits = digits

    def current_state(self, labels: Sequence[Label], state=None) -> DerivedState:
        return DerivedState(
            prefix=self.prefix,
            digits=self.digits,
            next=next_code_number(labels),
            name_seq=next_name_seq(labels),
        )

    def allocate(
        self, labels: Sequence[Label], state, count: int
    ) -> Tuple[List[str], List[str], None]:
        """Codes and default names for a batch of ``count`` labels."""
        start = next_code_number(labels)
        name_start = next_name_seq(labels)
        codes = [format_code(self.prefix, start + i, self.digits) for i in range(count)]
        names = [numbered_item_name(name_start + i) for i in range(count)]
        return codes, names, None


class StoredSequencer:
    """Numbering driven by the persisted ``RegistryState`` counter."""

    stored = True

    def current_state(
        self, labels: Sequence[Label], state: RegistryState
    ) -> RegistryState:
        return state

    def allocate(
        self, labels: Sequence[Label], state: RegistryState, count: int
    ) -> Tuple[List[str], List[str], RegistryState]:
        numbers, new_state = advance_state(state, count)
        codes = [format_code(state.prefix, n, state.digits) for n in numbers]
        names = [DEFAULT_ITEM_NAME] * count
        return codes, names, new_state


def build_sequencer(stored: bool, prefix: str, digits: int):
    if stored:
        return StoredSequencer()
    return DerivedSequencer(prefix, digits)
