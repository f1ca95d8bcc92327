"""State access for the auction module: auctions, the auction counter and parameters."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from cosa.types import (
    AUCTION_COUNT_KEY,
    MODULE_NAME,
    PARAMS_KEY,
    STORE_KEY,
    Auction,
    AuctionStatus,
    InvalidAddressError,
    InvalidArgumentError,
    Params,
    QueryParamsRequest,
    QueryParamsResponse,
    acc_address_from_bech32,
    key_prefix,
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_AUCTION_PREFIX = key_prefix(STORE_KEY)
_COUNT_KEY = key_prefix(AUCTION_COUNT_KEY) + key_prefix(AUCTION_COUNT_KEY)
_ID_LENGTH = 8


def _as_utc(moment: datetime | None) -> datetime:
    """Normalise a timestamp; a missing one stands for the Unix epoch."""
    if moment is None:
        return _EPOCH
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def id_bytes(auction_id: int) -> bytes:
    """Encode an auction id as 8 big-endian bytes."""
    return auction_id.to_bytes(_ID_LENGTH, "big")


@dataclass
class Context:
    """The block being processed: its time and the module's key-value store."""

    block_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    store: dict[bytes, bytes] = field(default_factory=dict)


class Keeper:
    """Reads and writes the module's state."""

    def __init__(self, authority: str, logger: logging.Logger | None = None) -> None:
        try:
            acc_address_from_bech32(authority)
        except InvalidAddressError:
            raise ValueError(f"invalid authority address: {authority}") from None
        self.authority = authority
        self._logger = logger if logger is not None else logging.getLogger(MODULE_NAME)

    @property
    def logger(self) -> logging.LoggerAdapter:
        """A logger tagged with the module name."""
        return logging.LoggerAdapter(self._logger, {"module": f"x/{MODULE_NAME}"})

    # -- auctions -----------------------------------------------------------

    def set_auction(self, ctx: Context, auction: Auction) -> int:
        """Store the auction under the next free id and return that id."""
        count = self.get_auction_count(ctx)
        stored = replace(auction, id=count)
        ctx.store[_AUCTION_PREFIX + id_bytes(count)] = stored.to_bytes()
        self.set_auction_count(ctx, count + 1)
        return count

    def get_auction(self, ctx: Context, auction_id: int) -> Auction | None:
        """Return the auction with this id, or None if there is none."""
        data = ctx.store.get(_AUCTION_PREFIX + id_bytes(auction_id))
        if data is None:
            return None
        return Auction.from_bytes(data)

    def get_all_auctions(self, ctx: Context) -> list[Auction]:
        """Return every stored auction in id order."""
        return [
            Auction.from_bytes(ctx.store[key])
            for key in sorted(ctx.store)
            if key.startswith(_AUCTION_PREFIX)
            and len(key) == len(_AUCTION_PREFIX) + _ID_LENGTH
        ]

    def get_auction_count(self, ctx: Context) -> int:
        data = ctx.store.get(_COUNT_KEY)
        if data is None:
            return 0
        return int.from_bytes(data, "big")

    def set_auction_count(self, ctx: Context, count: int) -> None:
        ctx.store[_COUNT_KEY] = count.to_bytes(_ID_LENGTH, "big")

    def blocker(self, ctx: Context) -> None:
        """Settle approved auctions whose end time has passed."""
        now = _as_utc(ctx.block_time)
        for auction in self.get_all_auctions(ctx):
            if auction.status != AuctionStatus.APPROVED or not now > _as_utc(auction.endtime):
                continue
            if auction.bids:
                auction.status = AuctionStatus.CLOSED.value
                auction.owner = auction.highest_bidder
                auction.sale_price = auction.highest_bid
            else:
                auction.status = AuctionStatus.EXPIRED.value
            self.set_auction(ctx, auction)

    # -- parameters ---------------------------------------------------------

    def get_params(self, ctx: Context) -> Params:
        data = ctx.store.get(PARAMS_KEY)
        if data is None:
            return Params()
        return Params.from_bytes(data)

    def set_params(self, ctx: Context, params: Params) -> None:
        ctx.store[PARAMS_KEY] = params.to_bytes()

    def params(self, ctx: Context, request: QueryParamsRequest | None) -> QueryParamsResponse:
        """Answer a parameters query."""
        if request is None:
            raise InvalidArgumentError("invalid request")
        return QueryParamsResponse(params=self.get_params(ctx))