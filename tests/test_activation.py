"""Tests for the token activation entry points."""

from __future__ import annotations

import asyncio

import pytest
from conftest import ORACLE_TOKEN_ADDRESS, PLAIN_TOKEN_ADDRESS, DummyWeb3, make_signer

from chain_tokens.activation import activate_network, activate_tokens, resolve_active_network
from chain_tokens.exceptions import (
    MissingPriceSourceError,
    NoProviderError,
    UnsupportedNetworkError,
)
from chain_tokens.registry import NetworkRegistry


def _fallback(chain_id, token):
    return 0.99


def test_activates_tokens_in_registry_order(signer, network):
    registry = NetworkRegistry({56: network})

    tokens = asyncio.run(activate_tokens(signer, registry, _fallback))

    assert [token.symbol for token in tokens] == ["WETH", "MIM"]
    weth, mim = tokens
    assert (weth.balance, weth.price) == (1.5, 1234.56789)
    assert (mim.balance, mim.price) == (2.5, 0.99)
    assert all(token.chain_id == 56 for token in tokens)


def test_unsupported_chain_rejects(contracts, network):
    signer = make_signer(DummyWeb3(1, contracts))
    registry = NetworkRegistry({56: network})

    with pytest.raises(UnsupportedNetworkError) as excinfo:
        asyncio.run(activate_tokens(signer, registry, _fallback))

    assert excinfo.value.chain_id == 1
    assert contracts[ORACLE_TOKEN_ADDRESS].decimals_calls == 0


def test_signer_without_provider_rejects(network):
    with pytest.raises(NoProviderError):
        asyncio.run(activate_tokens(make_signer(None), NetworkRegistry({56: network}), _fallback))


def test_missing_fallback_fails_before_any_read(signer, contracts, network):
    with pytest.raises(MissingPriceSourceError):
        asyncio.run(activate_tokens(signer, NetworkRegistry({56: network})))

    assert contracts[ORACLE_TOKEN_ADDRESS].decimals_calls == 0
    assert contracts[PLAIN_TOKEN_ADDRESS].decimals_calls == 0


def test_one_failed_initialisation_fails_the_batch(signer, contracts, network):
    contracts[PLAIN_TOKEN_ADDRESS].decimals_error = RuntimeError("call reverted")

    with pytest.raises(RuntimeError, match="call reverted"):
        asyncio.run(activate_tokens(signer, NetworkRegistry({56: network}), _fallback))


def test_async_fallback_is_supported(signer, network):
    async def fallback(chain_id, token):
        await asyncio.sleep(0)
        return 1.25

    tokens = asyncio.run(activate_tokens(signer, NetworkRegistry({56: network}), fallback))

    assert tokens[1].price == 1.25


def test_plain_mapping_registry_is_accepted(signer, network):
    chain_id, resolved = asyncio.run(resolve_active_network(signer, {56: network}))
    assert chain_id == 56
    assert resolved is network

    with pytest.raises(UnsupportedNetworkError):
        asyncio.run(resolve_active_network(signer, {43114: network}))


def test_activate_network(signer, contracts, network):
    activated = asyncio.run(activate_network(signer, NetworkRegistry({56: network}), _fallback))

    assert activated.chain_id == 56
    assert activated.name == "Binance Smart Chain"
    assert activated.native_currency == "BNB"
    assert activated.network is network
    assert activated.token_by_symbol("mim") is activated.tokens[1]
    assert activated.total_value == pytest.approx(1.5 * 1234.56789 + 2.5 * 0.99)


def test_activated_network_update_refreshes_every_token(signer, contracts, network):
    activated = asyncio.run(activate_network(signer, NetworkRegistry({56: network}), _fallback))
    contracts[ORACLE_TOKEN_ADDRESS].balance = 0
    contracts[PLAIN_TOKEN_ADDRESS].balance = 5_000_000

    snapshots = asyncio.run(activated.update())

    assert [snapshot.balance for snapshot in snapshots] == [0.0, 5.0]
    assert activated.tokens[0].balance == 0.0
    assert activated.tokens[1].balance == 5.0


def test_failed_network_update_keeps_every_previous_value(signer, contracts, network):
    activated = asyncio.run(activate_network(signer, NetworkRegistry({56: network}), _fallback))
    contracts[ORACLE_TOKEN_ADDRESS].balance = 7_000_000_000_000_000_000
    contracts[PLAIN_TOKEN_ADDRESS].balance_error = RuntimeError("rpc unavailable")

    with pytest.raises(RuntimeError, match="rpc unavailable"):
        asyncio.run(activated.update())

    assert activated.tokens[0].balance == 1.5
    assert activated.tokens[1].balance == 2.5
