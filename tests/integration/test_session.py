"""Integration tests for per-invocation session setup and teardown."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from farm_keeper.chains.evm.client import build_rpc_url
from farm_keeper.config import AppConfig, ChainConfig
from farm_keeper.errors import SecretNotFound
from farm_keeper.session import open_session


@pytest.fixture()
def secrets() -> MagicMock:
    secrets = MagicMock()
    secrets.resolve.side_effect = lambda name: {
        "TEST_API_KEY": "api-123",
        "TEST_PRIVATE_KEY": "0x" + "11" * 32,
    }[name]
    return secrets


class TestBuildRpcUrl:
    def test_fills_api_key(self) -> None:
        cfg = ChainConfig(rpc_url="https://base-mainnet.g.alchemy.com/v2/{api_key}")
        assert build_rpc_url(cfg, "abc") == "https://base-mainnet.g.alchemy.com/v2/abc"

    def test_url_without_placeholder_unchanged(self) -> None:
        cfg = ChainConfig(rpc_url="http://localhost:8545")
        assert build_rpc_url(cfg, "abc") == "http://localhost:8545"


class TestOpenSession:
    @pytest.mark.asyncio
    async def test_connects_once_and_disconnects(
        self, sample_app_config: AppConfig, secrets: MagicMock
    ) -> None:
        w3 = MagicMock()
        w3.provider.disconnect = AsyncMock()

        with patch("farm_keeper.session.connect", return_value=w3) as connect, \
                patch("farm_keeper.session.derive_signer") as derive_signer, \
                patch("farm_keeper.session.LeveragedYieldFarm") as farm_cls:
            async with open_session(sample_app_config, secrets) as farm:
                assert farm is farm_cls.return_value

        connect.assert_called_once_with(sample_app_config.chain, "api-123")
        derive_signer.assert_called_once_with("0x" + "11" * 32)
        farm_cls.assert_called_once_with(
            w3,
            derive_signer.return_value,
            sample_app_config.contract,
            sample_app_config.chain,
        )
        w3.provider.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_disconnects_on_error(
        self, sample_app_config: AppConfig, secrets: MagicMock
    ) -> None:
        w3 = MagicMock()
        w3.provider.disconnect = AsyncMock()

        with patch("farm_keeper.session.connect", return_value=w3), \
                patch("farm_keeper.session.derive_signer"), \
                patch("farm_keeper.session.LeveragedYieldFarm"):
            with pytest.raises(RuntimeError):
                async with open_session(sample_app_config, secrets):
                    raise RuntimeError("boom")

        w3.provider.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_secret_never_connects(self, sample_app_config: AppConfig) -> None:
        secrets = MagicMock()
        secrets.resolve.side_effect = SecretNotFound("missing")

        with patch("farm_keeper.session.connect") as connect:
            with pytest.raises(SecretNotFound):
                async with open_session(sample_app_config, secrets):
                    pass

        connect.assert_not_called()
