"""Messages, state records, parameters, errors and address helpers of the auction module."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

MODULE_NAME = "cosa"
STORE_KEY = MODULE_NAME
AUCTION_COUNT_KEY = "cosa/count"
MEM_STORE_KEY = "mem_cosa"
PARAMS_KEY = b"p_cosa"
ACCOUNT_ADDRESS_PREFIX = "cosmos"
DEFAULT_INDEX = 1


def key_prefix(p: str) -> bytes:
    """Return the store key prefix for a string."""
    return p.encode()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class CosaError(Exception):
    """Base error; the message is the optional context followed by the description."""

    codespace = "sdk"
    code = 1
    description = "internal"

    def __init__(self, context: str | None = None) -> None:
        self.context = context
        message = f"{context}: {self.description}" if context else self.description
        super().__init__(message)


class InvalidSignerError(CosaError):
    codespace = MODULE_NAME
    code = 1100
    description = "expected gov account as only signer for proposal message"


class InvalidAddressError(CosaError):
    code = 7
    description = "invalid address"


class UnauthorizedError(CosaError):
    code = 4
    description = "unauthorized"


class KeyNotFoundError(CosaError):
    code = 38
    description = "key not found"


class InvalidArgumentError(CosaError):
    codespace = "grpc"
    code = 3
    description = "invalid argument"


# ---------------------------------------------------------------------------
# Bech32 addresses
# ---------------------------------------------------------------------------

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_MAX_BECH32_LENGTH = 1023
_MAX_ADDRESS_LENGTH = 255


def _polymod(values: list[int]) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ value
        for bit, gen in enumerate(_GENERATOR):
            if (top >> bit) & 1:
                chk ^= gen
    return chk


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _checksum(hrp: str, data: list[int]) -> list[int]:
    poly = _polymod(_hrp_expand(hrp) + data + [0] * 6) ^ 1
    return [(poly >> 5 * (5 - i)) & 31 for i in range(6)]


def _convert_bits(data: bytes | list[int], from_bits: int, to_bits: int, pad: bool) -> list[int]:
    acc = 0
    bits = 0
    out: list[int] = []
    maxv = (1 << to_bits) - 1
    for value in data:
        if value >> from_bits:
            raise ValueError(f"invalid data range: {value}")
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & maxv)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & maxv)
    elif bits >= from_bits or (acc << (to_bits - bits)) & maxv:
        raise ValueError("invalid padding in bech32 data")
    return out


def _bech32_decode(text: str) -> tuple[str, bytes]:
    if len(text) > _MAX_BECH32_LENGTH:
        raise ValueError(f"decoding bech32 failed: invalid length {len(text)}")
    if any(ord(c) < 33 or ord(c) > 126 for c in text):
        raise ValueError("decoding bech32 failed: invalid character in string")
    if text.lower() != text and text.upper() != text:
        raise ValueError("decoding bech32 failed: string not all lowercase or all uppercase")
    text = text.lower()
    pos = text.rfind("1")
    if pos < 1 or pos + 7 > len(text):
        raise ValueError("decoding bech32 failed: invalid separator index")
    hrp = text[:pos]
    try:
        data = [_CHARSET.index(c) for c in text[pos + 1:]]
    except ValueError:
        raise ValueError("decoding bech32 failed: invalid character not part of charset") from None
    if _polymod(_hrp_expand(hrp) + data) != 1:
        raise ValueError("decoding bech32 failed: invalid checksum")
    return hrp, bytes(_convert_bits(data[:-6], 5, 8, pad=False))


def bech32_address(data: bytes, prefix: str = ACCOUNT_ADDRESS_PREFIX) -> str:
    """Encode raw address bytes as a bech32 string with the given prefix."""
    hrp = prefix.lower()
    values = _convert_bits(data, 8, 5, pad=True)
    return hrp + "1" + "".join(_CHARSET[v] for v in values + _checksum(hrp, values))


def acc_address_from_bech32(address: str) -> bytes:
    """Decode an account address, checking its prefix and length."""
    if not address.strip():
        raise InvalidAddressError("empty address string is not allowed")
    try:
        hrp, data = _bech32_decode(address)
    except ValueError as exc:
        raise InvalidAddressError(str(exc)) from None
    if hrp != ACCOUNT_ADDRESS_PREFIX:
        raise InvalidAddressError(
            f"invalid Bech32 prefix; expected {ACCOUNT_ADDRESS_PREFIX}, got {hrp}"
        )
    if not data:
        raise InvalidAddressError("addresses cannot be empty")
    if len(data) > _MAX_ADDRESS_LENGTH:
        raise InvalidAddressError(
            f"address max length is {_MAX_ADDRESS_LENGTH}, got {len(data)}"
        )
    return data


def _check_creator(creator: str) -> None:
    try:
        acc_address_from_bech32(creator)
    except InvalidAddressError as exc:
        raise InvalidAddressError(f"invalid creator address ({exc})") from None


# ---------------------------------------------------------------------------
# Params and genesis
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Params:
    """Module parameters; the module currently defines none."""

    def validate(self) -> None:
        return None

    def to_dict(self) -> dict[str, Any]:
        return {}

    @classmethod
    def from_dict(cls, data: Any) -> Params:
        if not isinstance(data, dict):
            raise ValueError("params must be a JSON object")
        return cls()

    def to_bytes(self) -> bytes:
        return json.dumps(self.to_dict(), sort_keys=True).encode()

    @classmethod
    def from_bytes(cls, data: bytes) -> Params:
        return cls.from_dict(json.loads(data))


def default_params() -> Params:
    """Return the default parameter set."""
    return Params()


@dataclass(frozen=True)
class GenesisState:
    params: Params = field(default_factory=Params)

    def validate(self) -> None:
        self.params.validate()

    def to_json(self) -> str:
        return json.dumps({"params": self.params.to_dict()})

    @classmethod
    def from_json(cls, data: str | bytes) -> GenesisState:
        raw = json.loads(data)
        if not isinstance(raw, dict):
            raise ValueError("genesis state must be a JSON object")
        return cls(params=Params.from_dict(raw.get("params", {})))


def default_genesis() -> GenesisState:
    """Return the default genesis state."""
    return GenesisState(params=default_params())


# ---------------------------------------------------------------------------
# Auctions
# ---------------------------------------------------------------------------


class AuctionStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    CLOSED = "Closed"
    EXPIRED = "Expired"


@dataclass
class Bid:
    bidder: str = ""
    amount: int = 0


@dataclass
class Auction:
    id: int = 0
    item: str = ""
    creator: str = ""
    starting_price: int = 0
    duration: int = 0
    endtime: datetime | None = None
    status: str = ""
    bids: list[Bid] = field(default_factory=list)
    highest_bid: int = 0
    highest_bidder: str = ""
    owner: str = ""
    sale_price: int = 0

    def to_bytes(self) -> bytes:
        record = {
            "id": self.id,
            "item": self.item,
            "creator": self.creator,
            "starting_price": self.starting_price,
            "duration": self.duration,
            "endtime": self.endtime.isoformat() if self.endtime else None,
            "status": str(self.status.value if isinstance(self.status, Enum) else self.status),
            "bids": [{"bidder": b.bidder, "amount": b.amount} for b in self.bids],
            "highest_bid": self.highest_bid,
            "highest_bidder": self.highest_bidder,
            "owner": self.owner,
            "sale_price": self.sale_price,
        }
        return json.dumps(record, sort_keys=True, separators=(",", ":")).encode()

    @classmethod
    def from_bytes(cls, data: bytes) -> Auction:
        raw = json.loads(data)
        if not isinstance(raw, dict):
            raise ValueError("auction record must be a JSON object")
        endtime = raw.get("endtime")
        return cls(
            id=raw.get("id", 0),
            item=raw.get("item", ""),
            creator=raw.get("creator", ""),
            starting_price=raw.get("starting_price", 0),
            duration=raw.get("duration", 0),
            endtime=datetime.fromisoformat(endtime) if endtime else None,
            status=raw.get("status", ""),
            bids=[Bid(b.get("bidder", ""), b.get("amount", 0)) for b in raw.get("bids", [])],
            highest_bid=raw.get("highest_bid", 0),
            highest_bidder=raw.get("highest_bidder", ""),
            owner=raw.get("owner", ""),
            sale_price=raw.get("sale_price", 0),
        )


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


@dataclass
class MsgCreateAuction:
    creator: str = ""
    item: str = ""
    starting_price: int = 0
    duration: int = 0
    status: str = ""

    def validate_basic(self) -> None:
        _check_creator(self.creator)


@dataclass
class MsgApproveAuction:
    creator: str = ""
    item: str = ""
    id: int = 0
    starting_price: int = 0

    def validate_basic(self) -> None:
        _check_creator(self.creator)


@dataclass
class MsgCreatBid:
    creator: str = ""
    item: str = ""
    auction_id: int = 0
    bid_amount: int = 0
    bidder: str = ""

    def validate_basic(self) -> None:
        _check_creator(self.creator)


@dataclass
class MsgCloseAuction:
    creator: str = ""
    id: int = 0
    highest_bid: int = 0

    def validate_basic(self) -> None:
        _check_creator(self.creator)


@dataclass
class MsgUpdateParams:
    authority: str = ""
    params: Params = field(default_factory=Params)

    def validate_basic(self) -> None:
        try:
            acc_address_from_bech32(self.authority)
        except InvalidAddressError as exc:
            raise InvalidAddressError(f"invalid authority address: {exc}") from None
        self.params.validate()


@dataclass
class MsgCreateAuctionResponse:
    id: int = 0


@dataclass
class MsgApproveAuctionResponse:
    status: str = ""


@dataclass
class MsgCreatBidResponse:
    id: int = 0


@dataclass
class MsgCloseAuctionResponse:
    winner: str = ""
    highest_bid: int = 0


@dataclass
class MsgUpdateParamsResponse:
    pass


@dataclass
class QueryParamsRequest:
    pass


@dataclass
class QueryParamsResponse:
    params: Params = field(default_factory=Params)


MSG_TYPES: dict[str, type] = {
    "/cosa.cosa.MsgCreateAuction": MsgCreateAuction,
    "/cosa.cosa.MsgApproveAuction": MsgApproveAuction,
    "/cosa.cosa.MsgCreatBid": MsgCreatBid,
    "/cosa.cosa.MsgCloseAuction": MsgCloseAuction,
    "/cosa.cosa.MsgUpdateParams": MsgUpdateParams,
}