# safeix

`safeix` decodes the binary instructions of a transaction message, both
system program and stake program instructions, into typed Python objects.
It then turns those objects into an ordered list of short titled items that
can be shown to someone before they approve the transaction.

The package has no dependencies outside the standard library.

## Modules

| Module                  | Purpose                                                            |
|-------------------------|--------------------------------------------------------------------|
| `safeix.common`         | `ByteReader`, `Instruction`, `AccountsIterator`, summary types, `ParseError`, `get_token_symbol` |
| `safeix.system`         | Parse system program instructions (transfer, create account, nonce, allocate, assign) |
| `safeix.system_display` | Add summary items for parsed system instructions                   |
| `safeix.stake`          | Parse stake program instructions (initialize, delegate, authorize, split, withdraw, lockup, merge, deactivate) |
| `safeix.stake_display`  | Add summary items for parsed stake instructions                    |

If data cannot be decoded, the parsers raise `safeix.common.ParseError`, a
subclass of `ValueError`. This covers truncated data, an unknown instruction
tag, an invalid option tag, an account index out of range, too few accounts,
and the kinds that are recognised but not supported. For the system program
the unsupported kind is `ASSIGN_WITH_SEED`. For the stake program the
unsupported kinds are `AUTHORIZE_WITH_SEED` and `AUTHORIZE_CHECKED_WITH_SEED`.

## Reading raw data

`ByteReader` reads little-endian `u8`, `u32`, `u64` and `i64` values. It also
reads 32-byte public keys, option tags (`read_option` returns `False` or
`True`) and strings prefixed with a `u64` length. When the buffer runs out it
raises `ParseError`:

```python
from safeix.common import ByteReader, ParseError
from safeix.system import SystemInstructionKind, parse_system_instruction_kind

reader = ByteReader(bytes([2, 0, 0, 0, 42, 0, 0, 0, 0, 0, 0, 0]))
assert parse_system_instruction_kind(reader) is SystemInstructionKind.TRANSFER
assert reader.read_u64() == 42
assert reader.remaining() == 0

try:
    parse_system_instruction_kind(ByteReader(bytes([11, 0, 0, 0])))
except ParseError:
    pass  # not a known system instruction
```

## Parsing an instruction

Each program module has one entry point. It takes an `Instruction` and the
message's list of account public keys, and returns the matching frozen info
dataclass:

- `safeix.system.parse_system_instruction(instruction, pubkeys)`
- `safeix.stake.parse_stake_instruction(instruction, pubkeys)`

The account indices of the instruction are resolved to public keys through an
`AccountsIterator`. The info objects therefore hold the keys themselves, as
`bytes`.

```python
from safeix.common import Instruction
from safeix.system import parse_system_instruction

pubkeys = [bytes([1]) * 32, bytes([2]) * 32, bytes(32)]
instruction = Instruction(
    program_id_index=2,
    accounts=[0, 1],
    data=bytes([2, 0, 0, 0, 42, 0, 0, 0, 0, 0, 0, 0]),
)
info = parse_system_instruction(instruction, pubkeys)
assert info.lamports == 42
assert info.from_ == pubkeys[0] and info.to == pubkeys[1]
```

Some stake helpers can be used on their own:

- `parse_stake_instruction_kind` reads the instruction tag.
- `parse_stake_authorize` reads the authority role.
- `parse_stake_lockup_args(reader, parse_custodian)` reads the optional lockup
  members. It returns a `StakeLockup` whose `present` flags
  (`StakeLockupPresent`) record which members were supplied.

## Building a summary

The display functions add `SummaryItem`s (title, `ItemKind`, value) to a
`TransactionSummary`. A summary holds:

- at most one primary item; setting a second one raises `ValueError`,
- optional nonce account and nonce authority items,
- any number of general items,
- a fee payer line.

`items()` returns them in that order, with the fee payer last.

```python
from safeix.common import TransactionSummary
from safeix.system_display import print_system_info

summary = TransactionSummary()
print_system_info(info, pubkeys, summary)
assert [(item.title, item.value) for item in summary.items()] == [
    ("Transfer", 42),
    ("Sender", pubkeys[0]),
    ("Recipient", pubkeys[1]),
    ("Fee payer", "sender"),
]
```

`print_stake_info(info, pubkeys, summary)` does the same for stake
instructions.

Both modules also expose the building blocks that those two functions use:

- `print_system_create_account_info`
- `print_system_create_account_with_seed_info`
- `print_system_initialize_nonce_info`
- `print_system_allocate_with_seed_info`
- `print_system_nonced_transaction_sentinel`
- `print_stake_initialize_info`
- `print_stake_split_info1`
- `print_stake_split_info2`

The first four system functions and `print_stake_initialize_info` take a
primary title, or `None` to leave out the primary item.

`safeix.common.get_token_symbol(mint_address, registry)` looks a mint up in a
mapping from mint address to symbol. It returns `"???"` when the mint is
unknown or no registry is given.

## What it does not do

- It does not decode token program instructions. Only the system and stake
  programs are covered.
- It does not parse a whole serialized message or its header. The caller
  supplies the account public keys and builds each `Instruction`.
- It does not render values as display text. Summary items keep raw values:
  amounts as integer base units, timestamps as integers and public keys as
  bytes. Each item has an `ItemKind` that says how the value is meant to be
  shown.
- It has no command-line interface and no user interface.