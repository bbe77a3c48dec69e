"""Per-invocation chain session: secrets → connection → signer → contract."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from .chains.evm import connect, derive_signer
from .config import AppConfig
from .interfaces.secret_provider import SecretProvider
from .protocols.leveraged_yield_farm import LeveragedYieldFarm

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_session(
    config: AppConfig, secrets: SecretProvider
) -> AsyncIterator[LeveragedYieldFarm]:
    """Yield a farm contract bound to one connection and one signer.

    The provider is disconnected when the block exits, even on error.
    """
    api_key = secrets.resolve(config.secrets.api_key)
    private_key = secrets.resolve(config.secrets.private_key)

    w3 = connect(config.chain, api_key)
    try:
        account = derive_signer(private_key)
        yield LeveragedYieldFarm(w3, account, config.contract, config.chain)
    finally:
        await w3.provider.disconnect()
        logger.debug("Chain session closed")
