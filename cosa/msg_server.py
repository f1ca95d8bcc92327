"""Handlers for the module's transaction messages."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from cosa.keeper import Context, Keeper, _as_utc
from cosa.types import (
    Auction,
    AuctionStatus,
    Bid,
    InvalidSignerError,
    KeyNotFoundError,
    MsgApproveAuction,
    MsgApproveAuctionResponse,
    MsgCloseAuction,
    MsgCloseAuctionResponse,
    MsgCreatBid,
    MsgCreatBidResponse,
    MsgCreateAuction,
    MsgCreateAuctionResponse,
    MsgUpdateParams,
    MsgUpdateParamsResponse,
    UnauthorizedError,
)


class MsgServer:
    """Applies auction messages to the keeper's state."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def create_auction(self, ctx: Context, msg: MsgCreateAuction) -> MsgCreateAuctionResponse:
        # The duration is taken as nanoseconds from the wall clock here.
        endtime = datetime.now(timezone.utc) + timedelta(microseconds=msg.duration // 1000)
        self.keeper.logger.debug("endtime: %s", endtime)
        auction = Auction(
            item=msg.item,
            creator=msg.creator,
            starting_price=msg.starting_price,
            duration=msg.duration,
            endtime=endtime,
            status=AuctionStatus.PENDING.value,
        )
        self.keeper.set_auction(ctx, auction)
        return MsgCreateAuctionResponse(id=auction.id)

    def approve_auction(self, ctx: Context, msg: MsgApproveAuction) -> MsgApproveAuctionResponse:
        auction = self.keeper.get_auction(ctx, msg.id)
        if auction is None:
            raise KeyNotFoundError(f"auction {msg.id} doesnt exist")
        if auction.creator != msg.creator:
            raise UnauthorizedError("cannot change bid creator")
        auction.status = AuctionStatus.APPROVED.value
        auction.endtime = _as_utc(ctx.block_time) + timedelta(seconds=auction.duration)
        self.keeper.set_auction(ctx, auction)
        return MsgApproveAuctionResponse(status=auction.status)

    def creat_bid(self, ctx: Context, msg: MsgCreatBid) -> MsgCreatBidResponse:
        auction = self.keeper.get_auction(ctx, msg.auction_id)
        if auction is None:
            raise KeyNotFoundError(f"auction {msg.auction_id} doesnt exist")
        if auction.status != AuctionStatus.APPROVED:
            raise KeyNotFoundError(f"auction {auction.id} doesnt is not approved")
        if _as_utc(ctx.block_time) > _as_utc(auction.endtime):
            raise UnauthorizedError("auction has ended")
        auction.bids.append(Bid(bidder=msg.bidder, amount=msg.bid_amount))
        if msg.bid_amount > auction.highest_bid:
            auction.highest_bid = msg.bid_amount
            auction.highest_bidder = msg.bidder
        self.keeper.set_auction(ctx, auction)
        return MsgCreatBidResponse(id=msg.auction_id)

    def close_auction(self, ctx: Context, msg: MsgCloseAuction) -> MsgCloseAuctionResponse:
        auction = self.keeper.get_auction(ctx, msg.id)
        if auction is None:
            raise KeyNotFoundError(f"auction {msg.id} doesn't exist")
        if auction.status != AuctionStatus.APPROVED:
            raise UnauthorizedError("auction is not approved")
        if _as_utc(ctx.block_time) < _as_utc(auction.endtime):
            raise UnauthorizedError("auction has not ended yet")
        if not auction.bids:
            raise UnauthorizedError("no bids placed")
        winner = auction.highest_bidder
        highest_bid = auction.highest_bid
        auction.status = AuctionStatus.CLOSED.value
        auction.owner = winner
        auction.sale_price = highest_bid
        self.keeper.set_auction(ctx, auction)
        return MsgCloseAuctionResponse(winner=winner, highest_bid=highest_bid)

    def update_params(self, ctx: Context, msg: MsgUpdateParams) -> MsgUpdateParamsResponse:
        if self.keeper.authority != msg.authority:
            raise InvalidSignerError(
                f"invalid authority; expected {self.keeper.authority}, got {msg.authority}"
            )
        self.keeper.set_params(ctx, msg.params)
        return MsgUpdateParamsResponse()