from datetime import datetime, timezone

import pytest

from cosa.types import (
    Auction,
    AuctionStatus,
    Bid,
    GenesisState,
    InvalidAddressError,
    KeyNotFoundError,
    InvalidSignerError,
    MsgApproveAuction,
    MsgCloseAuction,
    MsgCreatBid,
    MsgCreateAuction,
    MsgUpdateParams,
    Params,
    acc_address_from_bech32,
    bech32_address,
    default_genesis,
    default_params,
    key_prefix,
)

SAMPLE_BYTES = bytes(range(20))
SAMPLE_ADDRESS = bech32_address(SAMPLE_BYTES)

MSG_CLASSES = [MsgApproveAuction, MsgCloseAuction, MsgCreatBid, MsgCreateAuction]


@pytest.mark.parametrize(
    "gen_state", [default_genesis(), GenesisState()], ids=["default", "valid"]
)
def test_genesis_state_validate(gen_state):
    assert gen_state.validate() is None
    assert gen_state == GenesisState(params=default_params())


def test_genesis_json_round_trip():
    gen_state = default_genesis()
    text = gen_state.to_json()
    assert text == '{"params": {}}'
    assert GenesisState.from_json(text) == gen_state


def test_genesis_from_invalid_json():
    with pytest.raises(ValueError):
        GenesisState.from_json("[1, 2]")
    with pytest.raises(ValueError):
        GenesisState.from_json("not json")


def test_params_bytes_round_trip():
    params = Params()
    assert Params.from_bytes(params.to_bytes()) == params
    assert params.to_bytes() == b"{}"


@pytest.mark.parametrize("msg_cls", MSG_CLASSES)
def test_validate_basic_invalid_address(msg_cls):
    with pytest.raises(InvalidAddressError):
        acc_address_from_bech32("invalid_address")
    msg = msg_cls(creator="invalid_address")
    with pytest.raises(InvalidAddressError) as info:
        msg.validate_basic()
    assert "invalid creator address" in str(info.value)


@pytest.mark.parametrize("msg_cls", MSG_CLASSES)
def test_validate_basic_valid_address(msg_cls):
    msg = msg_cls(creator=SAMPLE_ADDRESS)
    assert msg.validate_basic() is None
    assert acc_address_from_bech32(msg.creator) == SAMPLE_BYTES


def test_bech32_known_vector():
    data = bytes.fromhex("00443214c74254b635cf84653a56d7c675be77df")
    assert bech32_address(data, "abcdef") == "abcdef1qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxw"


def test_address_round_trip_and_uppercase():
    assert SAMPLE_ADDRESS.startswith("cosmos1")
    assert acc_address_from_bech32(SAMPLE_ADDRESS.upper()) == SAMPLE_BYTES


def test_address_bad_checksum():
    last = SAMPLE_ADDRESS[-1]
    replacement = "q" if last != "q" else "p"
    with pytest.raises(InvalidAddressError, match="checksum"):
        acc_address_from_bech32(SAMPLE_ADDRESS[:-1] + replacement)


def test_address_wrong_prefix():
    with pytest.raises(InvalidAddressError, match="expected cosmos, got abcdef"):
        acc_address_from_bech32("abcdef1qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxw")


def test_address_empty_and_mixed_case():
    with pytest.raises(InvalidAddressError, match="empty address"):
        acc_address_from_bech32("  ")
    mixed = SAMPLE_ADDRESS[:-1] + SAMPLE_ADDRESS[-1].upper()
    with pytest.raises(InvalidAddressError):
        acc_address_from_bech32(mixed)


def test_msg_update_params_validate_basic():
    with pytest.raises(InvalidAddressError, match="invalid authority address"):
        MsgUpdateParams(authority="invalid", params=Params()).validate_basic()
    assert MsgUpdateParams(authority=SAMPLE_ADDRESS).validate_basic() is None


def test_key_prefix():
    assert key_prefix("cosa/count") == b"cosa/count"
    assert key_prefix("cosa") == b"cosa"


def test_error_messages():
    err = KeyNotFoundError("auction 3 doesnt exist")
    assert str(err) == "auction 3 doesnt exist: key not found"
    assert err.code == 38
    signer = InvalidSignerError()
    assert signer.code == 1100
    assert signer.codespace == "cosa"
    assert str(signer) == "expected gov account as only signer for proposal message"


def test_auction_status_values():
    assert AuctionStatus.APPROVED == "Approved"
    assert AuctionStatus("Expired") is AuctionStatus.EXPIRED


def test_auction_bytes_round_trip():
    auction = Auction(
        id=4,
        item="lamp",
        creator=SAMPLE_ADDRESS,
        starting_price=10,
        duration=60,
        endtime=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        status=AuctionStatus.APPROVED,
        bids=[Bid("alice", 11), Bid("bob", 15)],
        highest_bid=15,
        highest_bidder="bob",
    )
    restored = Auction.from_bytes(auction.to_bytes())
    assert restored == auction
    assert restored.status == "Approved"
    assert restored.bids[1].amount == 15


def test_auction_without_endtime_round_trip():
    auction = Auction(item="chair", status=AuctionStatus.PENDING)
    restored = Auction.from_bytes(auction.to_bytes())
    assert restored.endtime is None
    assert restored.item == "chair"
    assert restored.bids == []