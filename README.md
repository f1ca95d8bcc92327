# cosa

A small auction ledger. Auctions are created, approved by their creator,
receive bids until their end time, and are then closed (the highest bidder
becomes the owner) or expire when nobody bid. State lives in a key-value
mapping carried by a `Context`, and every change is driven by messages and
by the time of the current block.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from datetime import datetime, timedelta, timezone

from cosa.keeper import Context
from cosa.module import provide_module
from cosa.msg_server import MsgServer
from cosa.types import MsgCreateAuction

keeper, app = provide_module()
server = MsgServer(keeper)
ctx = Context(block_time=datetime.now(timezone.utc))

creator = keeper.authority  # any valid "cosmos1..." address will do
server.create_auction(ctx, MsgCreateAuction(creator=creator, item="lamp", duration=60))
print(keeper.get_all_auctions(ctx))

ctx.block_time += timedelta(seconds=5)
app.begin_block(ctx)  # settles approved auctions whose end time has passed
```

## Modules

### `cosa.types`

The data and the errors.

- `Auction` and `Bid` records; `Auction.to_bytes()` / `Auction.from_bytes()`
  serialise an auction as compact JSON.
- `AuctionStatus`: `PENDING`, `APPROVED`, `CLOSED`, `EXPIRED` (values
  `"Pending"`, `"Approved"`, `"Closed"`, `"Expired"`).
- `Params` (no fields at present; `validate`, `to_bytes`, `from_bytes`) and
  `default_params()`.
- `GenesisState` with `validate`, `to_json` and `from_json`, and
  `default_genesis()`.
- Messages `MsgCreateAuction`, `MsgApproveAuction`, `MsgCreatBid`,
  `MsgCloseAuction` and `MsgUpdateParams`, each with `validate_basic()`.
  The first four raise `InvalidAddressError` when `creator` is not a valid
  bech32 account address; `MsgUpdateParams` does the same for `authority`
  and then validates its params.
- Responses `MsgCreateAuctionResponse`, `MsgApproveAuctionResponse`,
  `MsgCreatBidResponse`, `MsgCloseAuctionResponse`,
  `MsgUpdateParamsResponse`, and the query types `QueryParamsRequest` and
  `QueryParamsResponse`.
- Errors, all subclasses of `CosaError`: `InvalidSignerError`,
  `InvalidAddressError`, `UnauthorizedError`, `KeyNotFoundError`,
  `InvalidArgumentError`. The message of each is the context given followed
  by the error's description.
- Address helpers: `bech32_address(data, prefix="cosmos")` encodes bytes;
  `acc_address_from_bech32(address)` decodes an address, checking the
  checksum, the `cosmos` prefix and the length. `key_prefix(p)` turns a
  string into a store key prefix.

### `cosa.keeper`

- `Context(block_time, store)`: the current block time (timezone-aware UTC
  by default) and the store, a plain `dict[bytes, bytes]`.
- `Keeper(authority, logger=None)` raises `ValueError` if `authority` is not
  a valid account address. Its methods:
  - `set_auction(ctx, auction)` stores a copy of the auction under the next
    free id (8 big-endian bytes, see `id_bytes`), bumps the count and returns
    that id. Every call writes a new record, so updating an auction also
    creates a new entry with a new id.
  - `get_auction(ctx, auction_id)` returns the auction or `None`.
  - `get_all_auctions(ctx)` returns every auction in id order.
  - `get_auction_count(ctx)` / `set_auction_count(ctx, count)`.
  - `blocker(ctx)`: for each approved auction whose end time is strictly
    before the block time, marks it Closed (owner and sale price taken from
    the highest bid) when it has bids, or Expired when it has none, and
    stores the result.
  - `get_params(ctx)`, `set_params(ctx, params)`, and the query
    `params(ctx, request)`, which raises `InvalidArgumentError` when
    `request` is `None`.

### `cosa.msg_server`

`MsgServer(keeper)` handles the messages:

- `create_auction` stores a Pending auction whose end time is the current
  wall-clock time plus `duration` read as nanoseconds.
- `approve_auction` raises `KeyNotFoundError` for an unknown id and
  `UnauthorizedError` unless the sender is the creator; otherwise it marks
  the auction Approved with end time = block time + `duration` seconds and
  returns the status.
- `creat_bid` raises `KeyNotFoundError` for an unknown or unapproved
  auction and `UnauthorizedError` once the block time is past the end time;
  otherwise it records the bid, and a bid higher than the current highest
  takes the lead.
- `close_auction` requires an approved auction whose end time has been
  reached and which has at least one bid (`KeyNotFoundError` or
  `UnauthorizedError` otherwise); it marks the auction Closed and returns
  the winner and highest bid.
- `update_params` raises `InvalidSignerError` unless the message's
  authority is the keeper's, then stores the new params.

### `cosa.module`

- `init_genesis(ctx, keeper, gen_state)` and `export_genesis(ctx, keeper)`
  load and dump the genesis state (the params).
- `module_address(name)` derives a bech32 account address from a module
  name.
- `provide_module(authority="", logger=None)` returns `(keeper, app_module)`.
  The authority defaults to `module_address("gov")`; a given value is used
  as a bech32 address if it is one, otherwise as a module name.
- `AppModule(keeper)` offers `default_genesis()`, `validate_genesis(data)`,
  `init_genesis(ctx, data)` and `export_genesis(ctx)` on JSON text,
  `consensus_version()` (1), `begin_block(ctx)`, which runs the keeper's
  blocker, and `end_block(ctx)`, which does nothing.

## What it does not do

- There is no command-line tool and no network service; the package is a
  library driven from Python.
- Storage is the in-memory `dict` held by a `Context`; nothing is written
  to disk unless the caller does so.
- There is no transaction signing, fee handling or block production: the
  caller supplies messages and the block time directly.