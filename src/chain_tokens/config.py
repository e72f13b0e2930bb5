"""Configuration containers for the signer connection."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .exceptions import ValidationError

DEFAULT_REQUEST_TIMEOUT = 10.0


@dataclass(frozen=True)
class SignerConfig:
    """Credentials and RPC endpoint used to build a :class:`Web3Signer`."""

    private_key: str
    rpc_url: str
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> SignerConfig:
        """Read ``PRIVATE_KEY``, ``RPC_URL`` and ``REQUEST_TIMEOUT`` from the environment.

        Values from a ``.env`` file are loaded first without overriding
        variables already set in the process environment.
        """

        load_dotenv(dotenv_path)

        private_key = os.getenv("PRIVATE_KEY")
        if not private_key:
            raise ValidationError("PRIVATE_KEY not found in environment variables", field="PRIVATE_KEY")

        rpc_url = os.getenv("RPC_URL")
        if not rpc_url:
            raise ValidationError("RPC_URL not found in environment variables", field="RPC_URL")

        raw_timeout = os.getenv("REQUEST_TIMEOUT")
        if raw_timeout:
            try:
                request_timeout = float(raw_timeout)
            except ValueError as exc:
                raise ValidationError(
                    "REQUEST_TIMEOUT must be a number", field="REQUEST_TIMEOUT", value=raw_timeout
                ) from exc
        else:
            request_timeout = DEFAULT_REQUEST_TIMEOUT

        return cls(private_key=private_key, rpc_url=rpc_url, request_timeout=request_timeout)
