"""Summary items describing decoded stake program instructions."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .common import ItemKind, TransactionSummary
from .stake import (
    StakeAuthorize,
    StakeAuthorizeInfo,
    StakeDeactivateInfo,
    StakeDelegateInfo,
    StakeInfo,
    StakeInitializeInfo,
    StakeLockupPresent,
    StakeMergeInfo,
    StakeSetLockupInfo,
    StakeSplitInfo,
    StakeWithdrawInfo,
)

INIT_STAKE_TITLE = "Init stake acct"

_NEW_AUTHORITY_TITLES = {
    StakeAuthorize.STAKER: "New stake auth",
    StakeAuthorize.WITHDRAWER: "New withdraw auth",
}


def _print_delegate(
    info: StakeDelegateInfo, pubkeys: Sequence[bytes], summary: TransactionSummary
) -> None:
    summary.primary("Delegate from", ItemKind.PUBKEY, info.stake_pubkey)
    summary.general("Authorized by", ItemKind.PUBKEY, info.authorized_pubkey)
    summary.general("Vote account", ItemKind.PUBKEY, info.vote_pubkey)

    payer = pubkeys[0]
    summary.fee_payer = payer
    if payer == info.authorized_pubkey:
        summary.set_fee_payer_text("authorizer")


def _print_withdraw(info: StakeWithdrawInfo, summary: TransactionSummary) -> None:
    summary.primary("Stake withdraw", ItemKind.AMOUNT, info.lamports)
    summary.general("From", ItemKind.PUBKEY, info.account)
    summary.general("To", ItemKind.PUBKEY, info.to)
    summary.general("Authorized by", ItemKind.PUBKEY, info.authority)


def _print_authorize(info: StakeAuthorizeInfo, summary: TransactionSummary) -> None:
    summary.primary("Set stake auth", ItemKind.PUBKEY, info.account)
    summary.general(
        _NEW_AUTHORITY_TITLES[info.authorize], ItemKind.PUBKEY, info.new_authority
    )
    summary.general("Authorized by", ItemKind.PUBKEY, info.authority)
    if info.custodian is not None:
        summary.general("Custodian", ItemKind.PUBKEY, info.custodian)


def _print_deactivate(info: StakeDeactivateInfo, summary: TransactionSummary) -> None:
    summary.primary("Deactivate stake", ItemKind.PUBKEY, info.account)
    summary.general("Authorized by", ItemKind.PUBKEY, info.authority)


def _print_set_lockup(info: StakeSetLockupInfo, summary: TransactionSummary) -> None:
    summary.primary("Set lockup", ItemKind.PUBKEY, info.account)

    lockup = info.lockup
    if lockup.present & StakeLockupPresent.TIMESTAMP:
        summary.general("Time", ItemKind.TIMESTAMP, lockup.unix_timestamp)
    if lockup.present & StakeLockupPresent.EPOCH:
        summary.general("Epoch", ItemKind.U64, lockup.epoch)
    if lockup.present & StakeLockupPresent.CUSTODIAN:
        summary.general("New authority", ItemKind.PUBKEY, lockup.custodian)

    summary.general("Authorized by", ItemKind.PUBKEY, info.custodian)


def _print_split(info: StakeSplitInfo, summary: TransactionSummary) -> None:
    print_stake_split_info1(info, summary)
    print_stake_split_info2(info, summary)


def _print_merge(info: StakeMergeInfo, summary: TransactionSummary) -> None:
    summary.primary("Merge", ItemKind.PUBKEY, info.source)
    summary.general("Into", ItemKind.PUBKEY, info.destination)
    summary.general("Authorized by", ItemKind.PUBKEY, info.authority)


_Printer = Callable[[StakeInfo, Sequence[bytes], TransactionSummary], None]

_PRINTERS: dict[type, _Printer] = {
    StakeDelegateInfo: _print_delegate,
    StakeInitializeInfo: lambda info, _, summary: print_stake_initialize_info(
        INIT_STAKE_TITLE, info, summary
    ),
    StakeWithdrawInfo: lambda info, _, summary: _print_withdraw(info, summary),
    StakeAuthorizeInfo: lambda info, _, summary: _print_authorize(info, summary),
    StakeDeactivateInfo: lambda info, _, summary: _print_deactivate(info, summary),
    StakeSetLockupInfo: lambda info, _, summary: _print_set_lockup(info, summary),
    StakeSplitInfo: lambda info, _, summary: _print_split(info, summary),
    StakeMergeInfo: lambda info, _, summary: _print_merge(info, summary),
}


def print_stake_info(
    info: StakeInfo, pubkeys: Sequence[bytes], summary: TransactionSummary
) -> None:
    """Add the summary items for a decoded stake instruction."""
    printer = _PRINTERS.get(type(info))
    if printer is None:
        raise ValueError(f"unsupported stake instruction info {type(info).__name__}")
    printer(info, pubkeys, summary)


def print_stake_initialize_info(
    primary_title: str | None,
    info: StakeInitializeInfo,
    summary: TransactionSummary,
) -> None:
    """Describe a new stake account's authorities and lockup."""
    if primary_title is not None:
        summary.primary(primary_title, ItemKind.PUBKEY, info.account)

    if info.withdraw_authority == info.stake_authority:
        summary.general("New authority", ItemKind.PUBKEY, info.stake_authority)
    else:
        summary.general("New stake auth", ItemKind.PUBKEY, info.stake_authority)
        summary.general(
            "New withdraw auth", ItemKind.PUBKEY, info.withdraw_authority
        )

    lockup_time = info.lockup.unix_timestamp
    lockup_epoch = info.lockup.epoch
    if lockup_time > 0 or lockup_epoch > 0:
        if lockup_time > 0:
            summary.general("Lockup time", ItemKind.TIMESTAMP, lockup_time)
        if lockup_epoch > 0:
            summary.general("Lockup epoch", ItemKind.U64, lockup_epoch)
        summary.general("Lockup authority", ItemKind.PUBKEY, info.lockup.custodian)
    else:
        summary.general("Lockup", ItemKind.STRING, "None")


def print_stake_split_info1(info: StakeSplitInfo, summary: TransactionSummary) -> None:
    """Add the amount and the two accounts of a split."""
    summary.primary("Split stake", ItemKind.AMOUNT, info.lamports)
    summary.general("From", ItemKind.PUBKEY, info.account)
    summary.general("To", ItemKind.PUBKEY, info.split_account)


def print_stake_split_info2(info: StakeSplitInfo, summary: TransactionSummary) -> None:
    """Add the authority of a split."""
    summary.general("Authorized by", ItemKind.PUBKEY, info.authority)