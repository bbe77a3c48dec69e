"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from farm_keeper.config import (
    AppConfig,
    AssetConfig,
    ChainConfig,
    ContractConfig,
    NotificationsConfig,
    SecretsConfig,
    StrategyConfig,
    TelegramConfig,
    ThresholdsConfig,
)
from farm_keeper.models import PositionSnapshot

USDC = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
WETH = "0x4200000000000000000000000000000000000006"
FARM = "0x1111111111111111111111111111111111111111"

# Snapshots with supplied=2_000_000 and borrowed=1_000_000 (net 1_000_000).
# daily rewards = rewards // 86400; apy = daily * 36500 // net / 100
REWARDS_APY_3_65 = 864_000_000   # daily 10_000 → 3.65%
REWARDS_APY_6 = 16_439 * 86_400  # daily 16_439 → 6.0%
REWARDS_APY_1 = 2_740 * 86_400   # daily 2_740 → 1.0%


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_thresholds() -> ThresholdsConfig:
    return ThresholdsConfig(deposit_apy=5.0, withdraw_apy=2.0)


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(
        rpc_url="https://rpc.example.com/v2/{api_key}",
        chain_id=8453,
        rpc_timeout=10,
        gas_limit=400_000,
    )


@pytest.fixture()
def sample_app_config(
    sample_thresholds: ThresholdsConfig, sample_chain_config: ChainConfig
) -> AppConfig:
    return AppConfig(
        assets=(AssetConfig(address=USDC, symbol="USDC", decimals=6),),
        thresholds=sample_thresholds,
        strategy=StrategyConfig(deposit_amount="1000", leverage=3),
        chain=sample_chain_config,
        secrets=SecretsConfig(api_key="TEST_API_KEY", private_key="TEST_PRIVATE_KEY"),
        contract=ContractConfig(address=FARM),
        notifications=NotificationsConfig(
            telegram=TelegramConfig(enabled=False),
        ),
    )


@pytest.fixture()
def two_asset_config(sample_app_config: AppConfig) -> AppConfig:
    return AppConfig(
        assets=(
            AssetConfig(address=USDC, symbol="USDC", decimals=6),
            AssetConfig(address=WETH, symbol="WETH", decimals=18),
        ),
        thresholds=sample_app_config.thresholds,
        strategy=sample_app_config.strategy,
        chain=sample_app_config.chain,
        secrets=sample_app_config.secrets,
        contract=sample_app_config.contract,
    )


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


def make_snapshot(rewards: int) -> PositionSnapshot:
    return PositionSnapshot(supplied=2_000_000, borrowed=1_000_000, rewards=rewards)


@pytest.fixture()
def mock_farm() -> AsyncMock:
    farm = AsyncMock()
    farm.get_position_info.return_value = make_snapshot(REWARDS_APY_3_65)
    farm.deposit.return_value = "0xdeposit"
    farm.withdraw.return_value = "0xwithdraw"
    return farm


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent(f"""\
    assets:
      - symbol: USDC
        address: "{USDC}"
        decimals: 6
      - symbol: WETH
        address: "{WETH}"
        decimals: 18
    thresholds:
      deposit_apy: 5.0
      withdraw_apy: 2.0
    strategy:
      deposit_amount: "1000"
      leverage: 3
    chain:
      rpc_url: "https://rpc.example.com/v2/{{api_key}}"
      chain_id: 8453
      rpc_timeout: 10
    secrets:
      api_key: TEST_API_KEY
      private_key: TEST_PRIVATE_KEY
    contract:
      address: "{FARM}"
    notifications:
      telegram:
        enabled: true
        bot_token: "tok"
        chat_id: 999
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


@pytest.fixture()
def hold_snapshot() -> PositionSnapshot:
    """APY 3.65%, between the thresholds."""
    return make_snapshot(REWARDS_APY_3_65)


@pytest.fixture()
def deposit_snapshot() -> PositionSnapshot:
    """APY 6.0%, above the deposit threshold."""
    return make_snapshot(REWARDS_APY_6)


@pytest.fixture()
def withdraw_snapshot() -> PositionSnapshot:
    """APY 1.0%, below the withdraw threshold."""
    return make_snapshot(REWARDS_APY_1)
