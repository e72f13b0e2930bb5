"""Activate the configured tokens of the signer's network and print balances."""

import asyncio
import logging

from chain_tokens import DEFAULT_NETWORKS, SignerConfig, Web3Signer, activate_network

logging.basicConfig(level=logging.INFO)

# Stablecoins without an on-chain oracle are assumed to sit at their peg
STABLE_SYMBOLS = {"MIM", "USDT", "DAI"}


def fallback_price(chain_id: int, token) -> float:
    if token.symbol in STABLE_SYMBOLS:
        return 1.0
    raise ValueError(f"No price available for {token.symbol} on chain {chain_id}")


async def main() -> None:
    # PRIVATE_KEY and RPC_URL come from the environment or a .env file
    config = SignerConfig.from_env()
    signer = await Web3Signer.connect(config)

    network = await activate_network(signer, DEFAULT_NETWORKS, fallback_price)
    print(f"{network.name} (chain id {network.chain_id})")
    for token in network.tokens:
        print(f"  {token.symbol:<6} balance={token.balance:<14} price=${token.price:<12} value=${token.value:.2f}")
    print(f"  total value: ${network.total_value:.2f}")


if __name__ == "__main__":
    asyncio.run(main())
