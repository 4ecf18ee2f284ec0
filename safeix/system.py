"""Decoding of system program instructions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Union

from .common import AccountsIterator, ByteReader, Instruction, ParseError

SYSTEM_PROGRAM_ID = bytes(32)


class SystemInstructionKind(IntEnum):
    CREATE_ACCOUNT = 0
    ASSIGN = 1
    TRANSFER = 2
    CREATE_ACCOUNT_WITH_SEED = 3
    ADVANCE_NONCE_ACCOUNT = 4
    WITHDRAW_NONCE_ACCOUNT = 5
    INITIALIZE_NONCE_ACCOUNT = 6
    AUTHORIZE_NONCE_ACCOUNT = 7
    ALLOCATE = 8
    ALLOCATE_WITH_SEED = 9
    ASSIGN_WITH_SEED = 10


@dataclass(frozen=True)
class SystemTransferInfo:
    kind: ClassVar = SystemInstructionKind.TRANSFER
    from_: bytes
    to: bytes
    lamports: int


@dataclass(frozen=True)
class SystemCreateAccountInfo:
    kind: ClassVar = SystemInstructionKind.CREATE_ACCOUNT
    from_: bytes
    to: bytes
    lamports: int


@dataclass(frozen=True)
class SystemCreateAccountWithSeedInfo:
    kind: ClassVar = SystemInstructionKind.CREATE_ACCOUNT_WITH_SEED
    from_: bytes
    to: bytes
    base: bytes
    seed: str
    lamports: int


@dataclass(frozen=True)
class SystemAdvanceNonceInfo:
    kind: ClassVar = SystemInstructionKind.ADVANCE_NONCE_ACCOUNT
    account: bytes
    authority: bytes


@dataclass(frozen=True)
class SystemInitializeNonceInfo:
    kind: ClassVar = SystemInstructionKind.INITIALIZE_NONCE_ACCOUNT
    account: bytes
    authority: bytes


@dataclass(frozen=True)
class SystemWithdrawNonceInfo:
    kind: ClassVar = SystemInstructionKind.WITHDRAW_NONCE_ACCOUNT
    account: bytes
    to: bytes
    authority: bytes
    lamports: int


@dataclass(frozen=True)
class SystemAuthorizeNonceInfo:
    kind: ClassVar = SystemInstructionKind.AUTHORIZE_NONCE_ACCOUNT
    account: bytes
    authority: bytes
    new_authority: bytes


@dataclass(frozen=True)
class SystemAllocateInfo:
    kind: ClassVar = SystemInstructionKind.ALLOCATE
    account: bytes
    space: int


@dataclass(frozen=True)
class SystemAssignInfo:
    kind: ClassVar = SystemInstructionKind.ASSIGN
    account: bytes
    program_id: bytes


@dataclass(frozen=True)
class SystemAllocateWithSeedInfo:
    kind: ClassVar = SystemInstructionKind.ALLOCATE_WITH_SEED
    account: bytes
    base: bytes
    seed: str
    space: int
    program_id: bytes


SystemInfo = Union[
    SystemTransferInfo,
    SystemCreateAccountInfo,
    SystemCreateAccountWithSeedInfo,
    SystemAdvanceNonceInfo,
    SystemInitializeNonceInfo,
    SystemWithdrawNonceInfo,
    SystemAuthorizeNonceInfo,
    SystemAllocateInfo,
    SystemAssignInfo,
    SystemAllocateWithSeedInfo,
]


def parse_system_instruction_kind(reader: ByteReader) -> SystemInstructionKind:
    """Read the u32 instruction tag."""
    value = reader.read_u32()
    try:
        return SystemInstructionKind(value)
    except ValueError:
        raise ParseError(f"unknown system instruction {value}") from None


def _transfer(reader: ByteReader, it: AccountsIterator) -> SystemTransferInfo:
    from_, to = it.next(), it.next()
    return SystemTransferInfo(from_=from_, to=to, lamports=reader.read_u64())


def _create_account(reader: ByteReader, it: AccountsIterator) -> SystemCreateAccountInfo:
    from_, to = it.next(), it.next()
    return SystemCreateAccountInfo(from_=from_, to=to, lamports=reader.read_u64())


def _create_account_with_seed(
    reader: ByteReader, it: AccountsIterator
) -> SystemCreateAccountWithSeedInfo:
    from_, to = it.next(), it.next()
    base = reader.read_pubkey()
    seed = reader.read_sized_string()
    lamports = reader.read_u64()
    return SystemCreateAccountWithSeedInfo(
        from_=from_, to=to, base=base, seed=seed, lamports=lamports
    )


def _advance_nonce(reader: ByteReader, it: AccountsIterator) -> SystemAdvanceNonceInfo:
    account = it.next()
    it.skip()  # recent blockhashes sysvar
    return SystemAdvanceNonceInfo(account=account, authority=it.next())


def _initialize_nonce(
    reader: ByteReader, it: AccountsIterator
) -> SystemInitializeNonceInfo:
    account = it.next()
    it.skip()  # recent blockhashes sysvar
    it.skip()  # rent sysvar
    return SystemInitializeNonceInfo(account=account, authority=reader.read_pubkey())


def _withdraw_nonce(reader: ByteReader, it: AccountsIterator) -> SystemWithdrawNonceInfo:
    account = it.next()
    to = it.next()
    it.skip()  # recent blockhashes sysvar
    it.skip()  # rent sysvar
    authority = it.next()
    return SystemWithdrawNonceInfo(
        account=account, to=to, authority=authority, lamports=reader.read_u64()
    )


def _authorize_nonce(
    reader: ByteReader, it: AccountsIterator
) -> SystemAuthorizeNonceInfo:
    account, authority = it.next(), it.next()
    return SystemAuthorizeNonceInfo(
        account=account, authority=authority, new_authority=reader.read_pubkey()
    )


def _allocate(reader: ByteReader, it: AccountsIterator) -> SystemAllocateInfo:
    account = it.next()
    return SystemAllocateInfo(account=account, space=reader.read_u64())


def _assign(reader: ByteReader, it: AccountsIterator) -> SystemAssignInfo:
    account = it.next()
    return SystemAssignInfo(account=account, program_id=reader.read_pubkey())


def _allocate_with_seed(
    reader: ByteReader, it: AccountsIterator
) -> SystemAllocateWithSeedInfo:
    account = it.next()
    it.skip()  # base; taken from the instruction data instead
    base = reader.read_pubkey()
    seed = reader.read_sized_string()
    space = reader.read_u64()
    program_id = reader.read_pubkey()
    return SystemAllocateWithSeedInfo(
        account=account, base=base, seed=seed, space=space, program_id=program_id
    )


_PARSERS = {
    SystemInstructionKind.TRANSFER: _transfer,
    SystemInstructionKind.ADVANCE_NONCE_ACCOUNT: _advance_nonce,
    SystemInstructionKind.CREATE_ACCOUNT: _create_account,
    SystemInstructionKind.CREATE_ACCOUNT_WITH_SEED: _create_account_with_seed,
    SystemInstructionKind.INITIALIZE_NONCE_ACCOUNT: _initialize_nonce,
    SystemInstructionKind.WITHDRAW_NONCE_ACCOUNT: _withdraw_nonce,
    SystemInstructionKind.AUTHORIZE_NONCE_ACCOUNT: _authorize_nonce,
    SystemInstructionKind.ASSIGN: _assign,
    SystemInstructionKind.ALLOCATE: _allocate,
    SystemInstructionKind.ALLOCATE_WITH_SEED: _allocate_with_seed,
}


def parse_system_instruction(
    instruction: Instruction, pubkeys: Sequence[bytes]
) -> SystemInfo:
    """Decode a system program instruction against the message's pubkeys."""
    reader = ByteReader(instruction.data)
    kind = parse_system_instruction_kind(reader)
    parser = _PARSERS.get(kind)
    if parser is None:
        raise ParseError(f"unsupported system instruction {kind.name}")
    return parser(reader, AccountsIterator(pubkeys, instruction))