"""Shared building blocks: byte reading, account resolution and summaries."""

from __future__ import annotations

import struct
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

PUBKEY_SIZE = 32
UNKNOWN_TOKEN_SYMBOL = "???"
FEE_PAYER_TITLE = "Fee payer"


class ParseError(ValueError):
    """Raised when instruction data or accounts cannot be decoded."""


class ByteReader:
    """Sequential little-endian reader over a byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def remaining(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._pos

    def _take(self, size: int) -> bytes:
        if size > self.remaining():
            raise ParseError(
                f"need {size} bytes, only {self.remaining()} left"
            )
        chunk = self._data[self._pos:self._pos + size]
        self._pos += size
        return chunk

    def _unpack(self, fmt: str) -> int:
        (value,) = struct.unpack(fmt, self._take(struct.calcsize(fmt)))
        return value

    def read_u8(self) -> int:
        return self._unpack("<B")

    def read_u32(self) -> int:
        return self._unpack("<I")

    def read_u64(self) -> int:
        return self._unpack("<Q")

    def read_i64(self) -> int:
        return self._unpack("<q")

    def read_pubkey(self) -> bytes:
        return self._take(PUBKEY_SIZE)

    def read_option(self) -> bool:
        """Read an option tag: False for None, True for Some."""
        tag = self.read_u8()
        if tag == 0:
            return False
        if tag == 1:
            return True
        raise ParseError(f"invalid option tag {tag}")

    def read_sized_string(self) -> str:
        """Read a u64 length followed by that many UTF-8 bytes."""
        length = self.read_u64()
        raw = self._take(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError("sized string is not valid UTF-8") from exc


@dataclass(frozen=True)
class Instruction:
    """A compiled instruction: program index, account indices and data."""

    program_id_index: int
    accounts: Sequence[int]
    data: bytes


class AccountsIterator:
    """Walks an instruction's account indices, resolving them to pubkeys."""

    def __init__(self, pubkeys: Sequence[bytes], instruction: Instruction) -> None:
        self._pubkeys = pubkeys
        self._indices = list(instruction.accounts)
        self._pos = 0

    def next(self) -> bytes:
        """Return the next account's pubkey."""
        if self._pos >= len(self._indices):
            raise ParseError("instruction has too few accounts")
        index = self._indices[self._pos]
        if index >= len(self._pubkeys):
            raise ParseError(f"account index {index} out of range")
        self._pos += 1
        return self._pubkeys[index]

    def skip(self) -> None:
        """Step over one account without using it."""
        self.next()

    def remaining(self) -> int:
        return len(self._indices) - self._pos

    def __iter__(self) -> Iterator[bytes]:
        while self.remaining():
            yield self.next()


class ItemKind(Enum):
    AMOUNT = auto()
    TOKEN_AMOUNT = auto()
    U64 = auto()
    I64 = auto()
    TIMESTAMP = auto()
    PUBKEY = auto()
    STRING = auto()
    SIZED_STRING = auto()


@dataclass(frozen=True)
class SummaryItem:
    title: str
    kind: ItemKind
    value: Any


@dataclass
class TransactionSummary:
    """Collects the titled values that describe a transaction."""

    fee_payer: bytes | None = None
    _primary: SummaryItem | None = field(default=None, init=False, repr=False)
    _nonce_account: SummaryItem | None = field(default=None, init=False, repr=False)
    _nonce_authority: SummaryItem | None = field(default=None, init=False, repr=False)
    _general: list[SummaryItem] = field(default_factory=list, init=False, repr=False)
    _fee_payer_text: str | None = field(default=None, init=False, repr=False)

    def __init__(self) -> None:
        self.fee_payer = None
        self._primary = None
        self._nonce_account = None
        self._nonce_authority = None
        self._general = []
        self._fee_payer_text = None

    def primary(self, title: str, kind: ItemKind, value: Any) -> SummaryItem:
        if self._primary is not None:
            raise ValueError("primary item is already set")
        self._primary = SummaryItem(title, kind, value)
        return self._primary

    def general(self, title: str, kind: ItemKind, value: Any) -> SummaryItem:
        item = SummaryItem(title, kind, value)
        self._general.append(item)
        return item

    def nonce_account(self, title: str, value: bytes) -> SummaryItem:
        self._nonce_account = SummaryItem(title, ItemKind.PUBKEY, value)
        return self._nonce_account

    def nonce_authority(self, title: str, value: bytes) -> SummaryItem:
        self._nonce_authority = SummaryItem(title, ItemKind.PUBKEY, value)
        return self._nonce_authority

    def set_fee_payer_text(self, text: str) -> None:
        """Show the fee payer by role instead of by pubkey."""
        self._fee_payer_text = text

    def items(self) -> list[SummaryItem]:
        """All items in display order, fee payer last."""
        result = [
            item
            for item in (self._primary, self._nonce_account, self._nonce_authority)
            if item is not None
        ]
        result.extend(self._general)
        if self._fee_payer_text is not None:
            result.append(
                SummaryItem(FEE_PAYER_TITLE, ItemKind.STRING, self._fee_payer_text)
            )
        elif self.fee_payer is not None:
            result.append(SummaryItem(FEE_PAYER_TITLE, ItemKind.PUBKEY, self.fee_payer))
        return result


def get_token_symbol(
    mint_address: bytes, registry: Mapping[bytes, str] | None = None
) -> str:
    """Look up a mint's ticker symbol, or "???" when it is unknown."""
    if registry is None:
        return UNKNOWN_TOKEN_SYMBOL
    return registry.get(bytes(mint_address), UNKNOWN_TOKEN_SYMBOL)