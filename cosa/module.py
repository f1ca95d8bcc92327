"""Module wiring for the auction module: genesis handling, block hooks and construction."""

from __future__ import annotations

import hashlib
import logging

from cosa.keeper import Context, Keeper
from cosa.types import (
    MODULE_NAME,
    GenesisState,
    InvalidAddressError,
    acc_address_from_bech32,
    bech32_address,
    default_genesis,
)

GOV_MODULE_NAME = "gov"
CONSENSUS_VERSION = 1
_MODULE_ADDRESS_LENGTH = 20


def init_genesis(ctx: Context, keeper: Keeper, gen_state: GenesisState) -> None:
    """Load the module's state from a genesis state."""
    keeper.set_params(ctx, gen_state.params)


def export_genesis(ctx: Context, keeper: Keeper) -> GenesisState:
    """Build a genesis state from the module's current state."""
    return GenesisState(params=keeper.get_params(ctx))


def module_address(name: str) -> str:
    """Return the bech32 account address derived from a module name."""
    digest = hashlib.sha256(name.encode()).digest()[:_MODULE_ADDRESS_LENGTH]
    return bech32_address(digest)


def _module_address_or_bech32(value: str) -> str:
    try:
        return bech32_address(acc_address_from_bech32(value))
    except InvalidAddressError:
        return module_address(value)


class AppModule:
    """The auction module as seen by the application."""

    name = MODULE_NAME

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def default_genesis(self) -> str:
        """Return the default genesis state as JSON."""
        return default_genesis().to_json()

    def validate_genesis(self, data: str | bytes) -> None:
        """Parse and validate a JSON genesis state."""
        try:
            state = GenesisState.from_json(data)
        except ValueError as exc:
            raise ValueError(f"failed to unmarshal {MODULE_NAME} genesis state: {exc}") from exc
        state.validate()

    def init_genesis(self, ctx: Context, data: str | bytes) -> None:
        """Load the module's state from a JSON genesis state."""
        init_genesis(ctx, self.keeper, GenesisState.from_json(data))

    def export_genesis(self, ctx: Context) -> str:
        """Return the module's current state as JSON genesis."""
        return export_genesis(ctx, self.keeper).to_json()

    def consensus_version(self) -> int:
        return CONSENSUS_VERSION

    def begin_block(self, ctx: Context) -> None:
        """Settle expired auctions at the start of a block."""
        self.keeper.blocker(ctx)

    def end_block(self, ctx: Context) -> None:
        """Nothing happens at the end of a block."""
        return None


def provide_module(
    authority: str = "", logger: logging.Logger | None = None
) -> tuple[Keeper, AppModule]:
    """Build the keeper and module; the authority defaults to the governance module account."""
    address = _module_address_or_bech32(authority) if authority else module_address(GOV_MODULE_NAME)
    keeper = Keeper(address, logger)
    return keeper, AppModule(keeper)