"""Decoding of stake program instructions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Callable, ClassVar, Optional, Union

from .common import AccountsIterator, ByteReader, Instruction, ParseError


class StakeInstructionKind(IntEnum):
    INITIALIZE = 0
    AUTHORIZE = 1
    DELEGATE = 2
    SPLIT = 3
    WITHDRAW = 4
    DEACTIVATE = 5
    SET_LOCKUP = 6
    MERGE = 7
    AUTHORIZE_WITH_SEED = 8
    INITIALIZE_CHECKED = 9
    AUTHORIZE_CHECKED = 10
    AUTHORIZE_CHECKED_WITH_SEED = 11
    SET_LOCKUP_CHECKED = 12


class StakeAuthorize(IntEnum):
    STAKER = 0
    WITHDRAWER = 1


class StakeLockupPresent(IntFlag):
    """Which members of a lockup were supplied."""

    NONE = 0
    TIMESTAMP = 1
    EPOCH = 2
    CUSTODIAN = 4
    ALL = 7


@dataclass(frozen=True)
class StakeLockup:
    present: StakeLockupPresent = StakeLockupPresent.NONE
    unix_timestamp: int = 0
    epoch: int = 0
    custodian: Optional[bytes] = None


@dataclass(frozen=True)
class StakeDelegateInfo:
    kind: ClassVar = StakeInstructionKind.DELEGATE
    stake_pubkey: bytes
    vote_pubkey: bytes
    authorized_pubkey: bytes


@dataclass(frozen=True)
class StakeInitializeInfo:
    account: bytes
    stake_authority: bytes
    withdraw_authority: bytes
    lockup: StakeLockup
    kind: StakeInstructionKind = StakeInstructionKind.INITIALIZE


@dataclass(frozen=True)
class StakeWithdrawInfo:
    kind: ClassVar = StakeInstructionKind.WITHDRAW
    account: bytes
    to: bytes
    authority: bytes
    lamports: int


@dataclass(frozen=True)
class StakeAuthorizeInfo:
    account: bytes
    authority: bytes
    new_authority: bytes
    authorize: StakeAuthorize
    custodian: Optional[bytes] = None
    kind: StakeInstructionKind = StakeInstructionKind.AUTHORIZE


@dataclass(frozen=True)
class StakeDeactivateInfo:
    kind: ClassVar = StakeInstructionKind.DEACTIVATE
    account: bytes
    authority: bytes


@dataclass(frozen=True)
class StakeSetLockupInfo:
    account: bytes
    custodian: bytes
    lockup: StakeLockup
    kind: StakeInstructionKind = StakeInstructionKind.SET_LOCKUP


@dataclass(frozen=True)
class StakeSplitInfo:
    kind: ClassVar = StakeInstructionKind.SPLIT
    account: bytes
    split_account: bytes
    authority: bytes
    lamports: int


@dataclass(frozen=True)
class StakeMergeInfo:
    kind: ClassVar = StakeInstructionKind.MERGE
    destination: bytes
    source: bytes
    authority: bytes


StakeInfo = Union[
    StakeDelegateInfo,
    StakeInitializeInfo,
    StakeWithdrawInfo,
    StakeAuthorizeInfo,
    StakeDeactivateInfo,
    StakeSetLockupInfo,
    StakeSplitInfo,
    StakeMergeInfo,
]


def parse_stake_instruction_kind(reader: ByteReader) -> StakeInstructionKind:
    """Read the u32 instruction tag."""
    value = reader.read_u32()
    try:
        return StakeInstructionKind(value)
    except ValueError:
        raise ParseError(f"unknown stake instruction {value}") from None


def parse_stake_authorize(reader: ByteReader) -> StakeAuthorize:
    """Read the u32 authority role."""
    value = reader.read_u32()
    try:
        return StakeAuthorize(value)
    except ValueError:
        raise ParseError(f"unknown stake authorize value {value}") from None


def parse_stake_lockup_args(
    reader: ByteReader, parse_custodian: bool
) -> StakeLockup:
    """Read lockup arguments whose members are each optional."""
    present = StakeLockupPresent.NONE
    unix_timestamp = 0
    epoch = 0
    custodian = None
    if reader.read_option():
        unix_timestamp = reader.read_i64()
        present |= StakeLockupPresent.TIMESTAMP
    if reader.read_option():
        epoch = reader.read_u64()
        present |= StakeLockupPresent.EPOCH
    if parse_custodian and reader.read_option():
        custodian = reader.read_pubkey()
        present |= StakeLockupPresent.CUSTODIAN
    return StakeLockup(present, unix_timestamp, epoch, custodian)


def _optional_next(it: AccountsIterator) -> Optional[bytes]:
    try:
        return it.next()
    except ParseError:
        return None


def _delegate(reader: ByteReader, it: AccountsIterator) -> StakeDelegateInfo:
    stake_pubkey = it.next()
    vote_pubkey = it.next()
    it.skip()  # clock sysvar
    it.skip()  # stake history sysvar
    it.skip()  # stake config account
    return StakeDelegateInfo(
        stake_pubkey=stake_pubkey,
        vote_pubkey=vote_pubkey,
        authorized_pubkey=it.next(),
    )


def _initialize(reader: ByteReader, it: AccountsIterator) -> StakeInitializeInfo:
    account = it.next()
    it.skip()  # rent sysvar
    stake_authority = reader.read_pubkey()
    withdraw_authority = reader.read_pubkey()
    unix_timestamp = reader.read_i64()
    epoch = reader.read_u64()
    custodian = reader.read_pubkey()
    return StakeInitializeInfo(
        account=account,
        stake_authority=stake_authority,
        withdraw_authority=withdraw_authority,
        lockup=StakeLockup(StakeLockupPresent.ALL, unix_timestamp, epoch, custodian),
    )


def _initialize_checked(
    reader: ByteReader, it: AccountsIterator
) -> StakeInitializeInfo:
    account = it.next()
    it.skip()  # rent sysvar
    stake_authority = it.next()
    withdraw_authority = it.next()
    return StakeInitializeInfo(
        account=account,
        stake_authority=stake_authority,
        withdraw_authority=withdraw_authority,
        lockup=StakeLockup(),
        kind=StakeInstructionKind.INITIALIZE_CHECKED,
    )


def _withdraw(reader: ByteReader, it: AccountsIterator) -> StakeWithdrawInfo:
    account = it.next()
    to = it.next()
    it.skip()  # clock sysvar
    it.skip()  # stake history sysvar
    authority = it.next()
    return StakeWithdrawInfo(
        account=account, to=to, authority=authority, lamports=reader.read_u64()
    )


def _authorize(reader: ByteReader, it: AccountsIterator) -> StakeAuthorizeInfo:
    account = it.next()
    it.skip()  # clock sysvar
    authority = it.next()
    custodian = _optional_next(it)
    new_authority = reader.read_pubkey()
    authorize = parse_stake_authorize(reader)
    return StakeAuthorizeInfo(
        account=account,
        authority=authority,
        new_authority=new_authority,
        authorize=authorize,
        custodian=custodian,
    )


def _authorize_checked(
    reader: ByteReader, it: AccountsIterator
) -> StakeAuthorizeInfo:
    account = it.next()
    it.skip()  # clock sysvar
    authority = it.next()
    new_authority = it.next()
    custodian = _optional_next(it)
    authorize = parse_stake_authorize(reader)
    return StakeAuthorizeInfo(
        account=account,
        authority=authority,
        new_authority=new_authority,
        authorize=authorize,
        custodian=custodian,
        kind=StakeInstructionKind.AUTHORIZE_CHECKED,
    )


def _deactivate(reader: ByteReader, it: AccountsIterator) -> StakeDeactivateInfo:
    account = it.next()
    it.skip()  # clock sysvar
    return StakeDeactivateInfo(account=account, authority=it.next())


def _set_lockup(reader: ByteReader, it: AccountsIterator) -> StakeSetLockupInfo:
    account, custodian = it.next(), it.next()
    return StakeSetLockupInfo(
        account=account,
        custodian=custodian,
        lockup=parse_stake_lockup_args(reader, True),
    )


def _set_lockup_checked(
    reader: ByteReader, it: AccountsIterator
) -> StakeSetLockupInfo:
    account, custodian = it.next(), it.next()
    lockup = parse_stake_lockup_args(reader, False)
    new_custodian = _optional_next(it)
    if new_custodian is not None:
        lockup = StakeLockup(
            lockup.present | StakeLockupPresent.CUSTODIAN,
            lockup.unix_timestamp,
            lockup.epoch,
            new_custodian,
        )
    return StakeSetLockupInfo(
        account=account,
        custodian=custodian,
        lockup=lockup,
        kind=StakeInstructionKind.SET_LOCKUP_CHECKED,
    )


def _split(reader: ByteReader, it: AccountsIterator) -> StakeSplitInfo:
    account = it.next()
    split_account = it.next()
    authority = it.next()
    return StakeSplitInfo(
        account=account,
        split_account=split_account,
        authority=authority,
        lamports=reader.read_u64(),
    )


def _merge(reader: ByteReader, it: AccountsIterator) -> StakeMergeInfo:
    destination = it.next()
    source = it.next()
    it.skip()  # clock sysvar
    it.skip()  # stake history sysvar
    return StakeMergeInfo(destination=destination, source=source, authority=it.next())


_PARSERS: dict[
    StakeInstructionKind, Callable[[ByteReader, AccountsIterator], StakeInfo]
] = {
    StakeInstructionKind.DELEGATE: _delegate,
    StakeInstructionKind.INITIALIZE: _initialize,
    StakeInstructionKind.INITIALIZE_CHECKED: _initialize_checked,
    StakeInstructionKind.WITHDRAW: _withdraw,
    StakeInstructionKind.AUTHORIZE: _authorize,
    StakeInstructionKind.AUTHORIZE_CHECKED: _authorize_checked,
    StakeInstructionKind.DEACTIVATE: _deactivate,
    StakeInstructionKind.SET_LOCKUP: _set_lockup,
    StakeInstructionKind.SET_LOCKUP_CHECKED: _set_lockup_checked,
    StakeInstructionKind.SPLIT: _split,
    StakeInstructionKind.MERGE: _merge,
}


def parse_stake_instruction(
    instruction: Instruction, pubkeys: Sequence[bytes]
) -> StakeInfo:
    """Decode a stake program instruction against the message's pubkeys."""
    reader = ByteReader(instruction.data)
    kind = parse_stake_instruction_kind(reader)
    parser = _PARSERS.get(kind)
    if parser is None:
        raise ParseError(f"unsupported stake instruction {kind.name}")
    return parser(reader, AccountsIterator(pubkeys, instruction))