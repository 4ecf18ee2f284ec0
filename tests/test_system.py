import pytest

from safeix.common import ByteReader, Instruction, ParseError
from safeix.system import (
    SYSTEM_PROGRAM_ID,
    SystemAdvanceNonceInfo,
    SystemAllocateWithSeedInfo,
    SystemCreateAccountWithSeedInfo,
    SystemInstructionKind,
    SystemTransferInfo,
    parse_system_instruction,
    parse_system_instruction_kind,
)

KEY_171 = bytes([
    171, 88, 202, 32, 185, 160, 182, 116, 130, 185, 73, 48, 13, 216, 170, 71,
    172, 195, 165, 123, 87, 70, 130, 219, 5, 157, 240, 187, 26, 191, 158, 218,
])
KEY_204 = bytes([
    204, 241, 115, 109, 41, 173, 110, 48, 24, 113, 210, 213, 163, 78, 1, 112,
    146, 114, 235, 220, 96, 185, 184, 85, 163, 27, 124, 48, 54, 250, 233, 54,
])
NONCE_AUTHORITY = bytes([
    18, 67, 85, 168, 124, 173, 88, 142, 77, 171, 80, 178, 8, 218, 230, 68,
    85, 231, 39, 54, 184, 42, 162, 85, 172, 139, 54, 173, 194, 7, 64, 250,
])
RECENT_BLOCKHASHES = bytes([
    6, 167, 213, 23, 25, 44, 86, 142, 224, 138, 132, 95, 115, 210, 151, 136,
    207, 3, 92, 49, 69, 178, 26, 179, 68, 216, 6, 46, 169, 64, 0, 0,
])
TRANSFER_DATA = bytes([2, 0, 0, 0, 42, 0, 0, 0, 0, 0, 0, 0])


def test_parse_system_transfer_instructions():
    pubkeys = [KEY_171, KEY_204, SYSTEM_PROGRAM_ID]
    ix = Instruction(program_id_index=2, accounts=(0, 1), data=TRANSFER_DATA)
    info = parse_system_instruction(ix, pubkeys)
    assert isinstance(info, SystemTransferInfo)
    assert info.lamports == 42
    assert info.from_ == pubkeys[0]
    assert info.to == KEY_204


def test_parse_system_transfer_instructions_with_payer():
    pubkeys = [KEY_204, KEY_171, SYSTEM_PROGRAM_ID]
    ix = Instruction(program_id_index=2, accounts=(1, 0), data=TRANSFER_DATA)
    info = parse_system_instruction(ix, pubkeys)
    # "to", not "from", is paying for this transaction.
    assert info.to == pubkeys[0]
    assert info.from_ == KEY_171


def test_parse_system_advance_nonce_account_instruction():
    pubkeys = [NONCE_AUTHORITY, bytes([1]) * 32, RECENT_BLOCKHASHES, bytes(32)]
    ix = Instruction(program_id_index=3, accounts=(1, 2, 0), data=bytes([4, 0, 0, 0]))

    reader = ByteReader(ix.data)
    assert parse_system_instruction_kind(reader) is SystemInstructionKind.ADVANCE_NONCE_ACCOUNT

    info = parse_system_instruction(ix, pubkeys)
    assert isinstance(info, SystemAdvanceNonceInfo)
    assert info.account == pubkeys[ix.accounts[0]]
    assert info.authority == pubkeys[ix.accounts[2]]


def test_system_create_account_with_seed_instruction():
    from_key = bytes([0x22]) * 32
    to_key = bytes([0x33]) * 32
    base_key = bytes([0x44]) * 32
    owner_program = bytes([0x55]) * 32
    pubkeys = [from_key, to_key, SYSTEM_PROGRAM_ID]
    data = (
        bytes([3, 0, 0, 0])
        + base_key
        + bytes([4, 0, 0, 0, 0, 0, 0, 0])
        + b"seed"
        + bytes([1, 0, 0, 0, 0, 0, 0, 0])
        + bytes([16, 0, 0, 0, 0, 0, 0, 0])
        + owner_program
    )
    ix = Instruction(program_id_index=2, accounts=(0, 1), data=data)
    info = parse_system_instruction(ix, pubkeys)
    assert isinstance(info, SystemCreateAccountWithSeedInfo)
    assert info.from_ == from_key
    assert info.to == to_key
    assert info.base == base_key
    assert info.seed == "seed"
    assert info.lamports == 1


def test_parse_allocate_with_seed_instruction():
    account = bytes([0x61]) * 32
    base_key = bytes([0x62]) * 32
    owner_program = bytes([0x63]) * 32
    data = (
        bytes([9, 0, 0, 0])
        + base_key
        + bytes([4, 0, 0, 0, 0, 0, 0, 0])
        + b"seed"
        + bytes([16, 0, 0, 0, 0, 0, 0, 0])
        + owner_program
    )
    ix = Instruction(program_id_index=2, accounts=(0, 1), data=data)
    info = parse_system_instruction(ix, [account, base_key, SYSTEM_PROGRAM_ID])
    assert info == SystemAllocateWithSeedInfo(
        account=account, base=base_key, seed="seed", space=16, program_id=owner_program
    )


@pytest.mark.parametrize(
    "value, kind",
    [
        (0, SystemInstructionKind.CREATE_ACCOUNT),
        (1, SystemInstructionKind.ASSIGN),
        (2, SystemInstructionKind.TRANSFER),
        (3, SystemInstructionKind.CREATE_ACCOUNT_WITH_SEED),
        (4, SystemInstructionKind.ADVANCE_NONCE_ACCOUNT),
        (5, SystemInstructionKind.WITHDRAW_NONCE_ACCOUNT),
        (6, SystemInstructionKind.INITIALIZE_NONCE_ACCOUNT),
        (7, SystemInstructionKind.AUTHORIZE_NONCE_ACCOUNT),
        (8, SystemInstructionKind.ALLOCATE),
        (9, SystemInstructionKind.ALLOCATE_WITH_SEED),
        (10, SystemInstructionKind.ASSIGN_WITH_SEED),
    ],
)
def test_parse_system_instruction_kind(value, kind):
    reader = ByteReader(bytes([value, 0, 0, 0]))
    assert parse_system_instruction_kind(reader) is kind


@pytest.mark.parametrize("data", [bytes([11, 0, 0, 0]), bytes([255, 255, 255, 255])])
def test_parse_system_instruction_kind_rejects_unknown(data):
    with pytest.raises(ParseError):
        parse_system_instruction_kind(ByteReader(data))


def test_assign_with_seed_is_unsupported():
    ix = Instruction(program_id_index=1, accounts=(0,), data=bytes([10, 0, 0, 0]))
    with pytest.raises(ParseError):
        parse_system_instruction(ix, [KEY_171, SYSTEM_PROGRAM_ID])


def test_transfer_with_missing_account_fails():
    ix = Instruction(program_id_index=1, accounts=(0,), data=TRANSFER_DATA)
    with pytest.raises(ParseError):
        parse_system_instruction(ix, [KEY_171, SYSTEM_PROGRAM_ID])


def test_transfer_with_truncated_data_fails():
    ix = Instruction(program_id_index=2, accounts=(0, 1), data=TRANSFER_DATA[:8])
    with pytest.raises(ParseError):
        parse_system_instruction(ix, [KEY_171, KEY_204, SYSTEM_PROGRAM_ID])