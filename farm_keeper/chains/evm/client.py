"""EVM RPC connection and signer construction."""
import logging

import aiohttp
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncHTTPProvider, AsyncWeb3

from ...config import ChainConfig

logger = logging.getLogger(__name__)


def build_rpc_url(config: ChainConfig, api_key: str) -> str:
    """Fill the ``{api_key}`` placeholder of the configured RPC URL."""
    return config.rpc_url.replace("{api_key}", api_key)


def connect(config: ChainConfig, api_key: str) -> AsyncWeb3:
    """Create an async web3 connection to the configured node."""
    provider = AsyncHTTPProvider(
        build_rpc_url(config, api_key),
        request_kwargs={"timeout": aiohttp.ClientTimeout(total=config.rpc_timeout)},
    )
    logger.debug("Connecting to chain %d", config.chain_id)
    return AsyncWeb3(provider)


def derive_signer(private_key: str) -> LocalAccount:
    """Build the signing account for ``private_key``."""
    account = Account.from_key(private_key)
    logger.info("Using signer %s", account.address)
    return account
