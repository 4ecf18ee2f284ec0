"""Summary items describing decoded system program instructions."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .common import ItemKind, TransactionSummary
from .system import (
    SystemAdvanceNonceInfo,
    SystemAllocateInfo,
    SystemAllocateWithSeedInfo,
    SystemAssignInfo,
    SystemAuthorizeNonceInfo,
    SystemCreateAccountInfo,
    SystemCreateAccountWithSeedInfo,
    SystemInfo,
    SystemInitializeNonceInfo,
    SystemTransferInfo,
    SystemWithdrawNonceInfo,
)

CREATE_ACCOUNT_TITLE = "Create account"


def _fee_payer(pubkeys: Sequence[bytes], summary: TransactionSummary) -> bytes:
    payer = pubkeys[0]
    summary.fee_payer = payer
    return payer


def _print_transfer(
    info: SystemTransferInfo, pubkeys: Sequence[bytes], summary: TransactionSummary
) -> None:
    summary.primary("Transfer", ItemKind.AMOUNT, info.lamports)
    summary.general("Sender", ItemKind.PUBKEY, info.from_)
    summary.general("Recipient", ItemKind.PUBKEY, info.to)

    payer = _fee_payer(pubkeys, summary)
    if payer == info.to:
        summary.set_fee_payer_text("recipient")
    elif payer == info.from_:
        summary.set_fee_payer_text("sender")


def _print_advance_nonce(
    info: SystemAdvanceNonceInfo,
    pubkeys: Sequence[bytes],
    summary: TransactionSummary,
) -> None:
    summary.primary("Advance nonce", ItemKind.PUBKEY, info.account)
    summary.general("Authorized by", ItemKind.PUBKEY, info.authority)

    if _fee_payer(pubkeys, summary) == info.authority:
        summary.set_fee_payer_text("authority")


def _print_withdraw_nonce(
    info: SystemWithdrawNonceInfo, summary: TransactionSummary
) -> None:
    summary.primary("Nonce withdraw", ItemKind.AMOUNT, info.lamports)
    summary.general("From", ItemKind.PUBKEY, info.account)
    summary.general("To", ItemKind.PUBKEY, info.to)
    summary.general("Authorized by", ItemKind.PUBKEY, info.authority)


def _print_authorize_nonce(
    info: SystemAuthorizeNonceInfo, summary: TransactionSummary
) -> None:
    summary.primary("Set nonce auth", ItemKind.PUBKEY, info.account)
    summary.general("New authority", ItemKind.PUBKEY, info.new_authority)
    summary.general("Authorized by", ItemKind.PUBKEY, info.authority)


def _print_allocate(info: SystemAllocateInfo, summary: TransactionSummary) -> None:
    summary.primary("Allocate acct", ItemKind.PUBKEY, info.account)
    summary.general("Data size", ItemKind.U64, info.space)


def _print_assign(info: SystemAssignInfo, summary: TransactionSummary) -> None:
    summary.primary("Assign acct", ItemKind.PUBKEY, info.account)
    summary.general("To program", ItemKind.PUBKEY, info.program_id)


_Printer = Callable[[SystemInfo, Sequence[bytes], TransactionSummary], None]

_PRINTERS: dict[type, _Printer] = {
    SystemTransferInfo: _print_transfer,
    SystemAdvanceNonceInfo: _print_advance_nonce,
    SystemCreateAccountInfo: lambda info, _, summary: print_system_create_account_info(
        CREATE_ACCOUNT_TITLE, info, summary
    ),
    SystemCreateAccountWithSeedInfo: (
        lambda info, _, summary: print_system_create_account_with_seed_info(
            CREATE_ACCOUNT_TITLE, info, summary
        )
    ),
    SystemInitializeNonceInfo: (
        lambda info, _, summary: print_system_initialize_nonce_info(
            "Init nonce acct", info, summary
        )
    ),
    SystemWithdrawNonceInfo: lambda info, _, summary: _print_withdraw_nonce(
        info, summary
    ),
    SystemAuthorizeNonceInfo: lambda info, _, summary: _print_authorize_nonce(
        info, summary
    ),
    SystemAssignInfo: lambda info, _, summary: _print_assign(info, summary),
    SystemAllocateInfo: lambda info, _, summary: _print_allocate(info, summary),
    SystemAllocateWithSeedInfo: (
        lambda info, _, summary: print_system_allocate_with_seed_info(
            "Allocate acct", info, summary
        )
    ),
}


def print_system_info(
    info: SystemInfo, pubkeys: Sequence[bytes], summary: TransactionSummary
) -> None:
    """Add the summary items for a decoded system instruction."""
    printer = _PRINTERS.get(type(info))
    if printer is None:
        raise ValueError(f"unsupported system instruction info {type(info).__name__}")
    printer(info, pubkeys, summary)


def print_system_nonced_transaction_sentinel(
    info: SystemAdvanceNonceInfo, summary: TransactionSummary
) -> None:
    """Record the nonce account and authority of a durable-nonce transaction."""
    summary.nonce_account("Nonce account", info.account)
    summary.nonce_authority("Nonce authority", info.authority)


def print_system_create_account_info(
    primary_title: str | None,
    info: SystemCreateAccountInfo,
    summary: TransactionSummary,
) -> None:
    if primary_title is not None:
        summary.primary(primary_title, ItemKind.PUBKEY, info.to)
    summary.general("Deposit", ItemKind.AMOUNT, info.lamports)
    summary.general("From", ItemKind.PUBKEY, info.from_)


def print_system_create_account_with_seed_info(
    primary_title: str | None,
    info: SystemCreateAccountWithSeedInfo,
    summary: TransactionSummary,
) -> None:
    if primary_title is not None:
        summary.primary(primary_title, ItemKind.PUBKEY, info.to)
    summary.general("Deposit", ItemKind.AMOUNT, info.lamports)
    summary.general("From", ItemKind.PUBKEY, info.from_)
    summary.general("Base", ItemKind.PUBKEY, info.base)
    summary.general("Seed", ItemKind.SIZED_STRING, info.seed)


def print_system_initialize_nonce_info(
    primary_title: str | None,
    info: SystemInitializeNonceInfo,
    summary: TransactionSummary,
) -> None:
    if primary_title is not None:
        summary.primary(primary_title, ItemKind.PUBKEY, info.account)
    summary.general("New authority", ItemKind.PUBKEY, info.authority)


def print_system_allocate_with_seed_info(
    primary_title: str | None,
    info: SystemAllocateWithSeedInfo,
    summary: TransactionSummary,
) -> None:
    # The primary item always carries the fixed title when requested.
    if primary_title is not None:
        summary.primary("Allocate acct", ItemKind.PUBKEY, info.account)
    summary.general("Base", ItemKind.PUBKEY, info.base)
    summary.general("Seed", ItemKind.SIZED_STRING, info.seed)