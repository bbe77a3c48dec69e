"""Leveraged yield-farm contract — position reads and deposit/withdraw submission."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3, Web3

from ...config import ChainConfig, ContractConfig
from ...errors import ChainQueryError, ChainSubmissionError
from ...models import PositionSnapshot

logger = logging.getLogger(__name__)

ABI_DIR = Path(__file__).parent / "abis"


def load_abi(path: str | Path | None = None) -> list[dict[str, Any]]:
    """Load a contract ABI, defaulting to the bundled LeveragedYieldFarm ABI."""
    abi_file = Path(path) if path else ABI_DIR / "LeveragedYieldFarm.json"
    with open(abi_file) as f:
        return json.load(f)


class LeveragedYieldFarm:
    """Read positions from and submit transactions to the farm contract.

    Submissions are fire-and-forget: the transaction hash is returned as soon
    as the node accepts the raw transaction.
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        account: LocalAccount,
        contract_config: ContractConfig,
        chain_config: ChainConfig,
    ) -> None:
        self._w3 = w3
        self._account = account
        self._chain = chain_config
        self.address = Web3.to_checksum_address(contract_config.address)
        self._contract = w3.eth.contract(
            address=self.address,
            abi=load_abi(contract_config.abi_path),
        )

    async def get_position_info(self, asset_address: str) -> PositionSnapshot:
        """Return (supplied, borrowed, rewards) for ``asset_address``."""
        try:
            supplied, borrowed, rewards = await self._contract.functions.getPositionInfo(
                Web3.to_checksum_address(asset_address)
            ).call()
        except Exception as e:
            raise ChainQueryError(
                f"getPositionInfo({asset_address}) failed: {e}"
            ) from e

        return PositionSnapshot(
            supplied=int(supplied), borrowed=int(borrowed), rewards=int(rewards)
        )

    async def deposit(self, asset_address: str, amount: int, leverage: int) -> str:
        fn = self._contract.functions.deposit(
            Web3.to_checksum_address(asset_address), amount, leverage
        )
        return await self._submit(fn, f"deposit({asset_address}, {amount}, {leverage})")

    async def withdraw(self, asset_address: str, amount: int) -> str:
        fn = self._contract.functions.withdraw(
            Web3.to_checksum_address(asset_address), amount
        )
        return await self._submit(fn, f"withdraw({asset_address}, {amount})")

    async def _submit(self, fn: Any, label: str) -> str:
        """Build, sign and broadcast a contract call; no receipt wait."""
        try:
            nonce = await self._w3.eth.get_transaction_count(
                self._account.address, "pending"
            )
            tx = await fn.build_transaction(
                {
                    "from": self._account.address,
                    "nonce": nonce,
                    "gas": self._chain.gas_limit,
                    "gasPrice": await self._w3.eth.gas_price,
                    "chainId": self._chain.chain_id,
                }
            )
            signed = self._account.sign_transaction(tx)
            tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
        except Exception as e:
            raise ChainSubmissionError(f"{label} failed: {e}") from e

        tx_hex = Web3.to_hex(tx_hash)
        logger.info("Submitted %s: %s", label, tx_hex)
        return tx_hex
