"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "KEEPER_CONFIG"
SECRET_PROVIDERS = ("env", "aws")

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AssetConfig:
    address: str = ""
    symbol: str = ""
    decimals: int = 6


@dataclass(frozen=True)
class ThresholdsConfig:
    deposit_apy: float = 5.0
    withdraw_apy: float = 2.0


@dataclass(frozen=True)
class StrategyConfig:
    deposit_amount: str = "1000"
    leverage: int = 3


@dataclass(frozen=True)
class ChainConfig:
    rpc_url: str = "https://base-mainnet.g.alchemy.com/v2/{api_key}"
    chain_id: int = 8453
    rpc_timeout: int = 30
    gas_limit: int = 500_000


@dataclass(frozen=True)
class SecretsConfig:
    provider: str = "env"
    region: str = ""
    api_key: str = "ALCHEMY_API_KEY"
    private_key: str = "PRIVATE_KEY"


@dataclass(frozen=True)
class ContractConfig:
    address: str = ""
    abi_path: str = ""


@dataclass(frozen=True)
class TelegramConfig:
    enabled: bool = False
    bot_token: str = ""
    chat_id: str = ""


@dataclass(frozen=True)
class NotificationsConfig:
    telegram: TelegramConfig = field(default_factory=TelegramConfig)


@dataclass(frozen=True)
class AppConfig:
    assets: tuple[AssetConfig, ...] = ()
    thresholds: ThresholdsConfig = field(default_factory=ThresholdsConfig)
    strategy: StrategyConfig = field(default_factory=StrategyConfig)
    chain: ChainConfig = field(default_factory=ChainConfig)
    secrets: SecretsConfig = field(default_factory=SecretsConfig)
    contract: ContractConfig = field(default_factory=ContractConfig)
    notifications: NotificationsConfig = field(default_factory=NotificationsConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_assets(raw: list[dict[str, Any]]) -> tuple[AssetConfig, ...]:
    return tuple(
        AssetConfig(
            address=a.get("address", ""),
            symbol=a.get("symbol", ""),
            decimals=int(a.get("decimals", 6)),
        )
        for a in raw
    )


def _build_thresholds(raw: dict[str, Any]) -> ThresholdsConfig:
    return ThresholdsConfig(
        deposit_apy=float(raw.get("deposit_apy", 5.0)),
        withdraw_apy=float(raw.get("withdraw_apy", 2.0)),
    )


def _build_strategy(raw: dict[str, Any]) -> StrategyConfig:
    return StrategyConfig(
        deposit_amount=str(raw.get("deposit_amount", "1000")),
        leverage=int(raw.get("leverage", 3)),
    )


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    return ChainConfig(
        rpc_url=raw.get("rpc_url", ChainConfig.rpc_url),
        chain_id=int(raw.get("chain_id", 8453)),
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
        gas_limit=int(raw.get("gas_limit", 500_000)),
    )


def _build_secrets(raw: dict[str, Any]) -> SecretsConfig:
    return SecretsConfig(
        provider=str(raw.get("provider", "env")).lower(),
        region=raw.get("region") or "",
        api_key=raw.get("api_key", SecretsConfig.api_key),
        private_key=raw.get("private_key", SecretsConfig.private_key),
    )


def _build_contract(raw: dict[str, Any]) -> ContractConfig:
    return ContractConfig(
        address=raw.get("address", ""),
        abi_path=raw.get("abi_path") or "",
    )


def _build_notifications(raw: dict[str, Any]) -> NotificationsConfig:
    tg = raw.get("telegram", {})
    return NotificationsConfig(
        telegram=TelegramConfig(
            enabled=bool(tg.get("enabled", False)),
            bot_token=tg.get("bot_token", ""),
            chat_id=str(tg.get("chat_id", "")),
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def default_config_path() -> Path:
    """Return ``$KEEPER_CONFIG`` or ``config.yaml`` in the project root."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path(__file__).resolve().parent.parent / "config.yaml"


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``$KEEPER_CONFIG`` or
            ``config.yaml`` in the project root.
    """
    load_dotenv()

    if config_path is None:
        config_path = default_config_path()
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Malformed YAML in {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"Config root must be a mapping: {config_path}")

    raw = _interpolate_env(raw)

    try:
        cfg = AppConfig(
            assets=_build_assets(raw.get("assets", [])),
            thresholds=_build_thresholds(raw.get("thresholds", {})),
            strategy=_build_strategy(raw.get("strategy", {})),
            chain=_build_chain(raw.get("chain", {})),
            secrets=_build_secrets(raw.get("secrets", {})),
            contract=_build_contract(raw.get("contract", {})),
            notifications=_build_notifications(raw.get("notifications", {})),
        )
    except (AttributeError, TypeError) as e:
        raise ValueError(f"Malformed config structure in {config_path}: {e}") from e

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.assets:
        raise ValueError("At least one asset must be configured")

    for asset in cfg.assets:
        if not asset.address:
            raise ValueError(f"Asset '{asset.symbol}' has no address")
        if asset.decimals < 0:
            raise ValueError(f"Asset '{asset.symbol}' has negative decimals")

    if not cfg.contract.address:
        raise ValueError("Farm contract address is not configured")

    if cfg.secrets.provider not in SECRET_PROVIDERS:
        raise ValueError(
            f"Unknown secrets provider '{cfg.secrets.provider}' "
            f"(expected one of: {', '.join(SECRET_PROVIDERS)})"
        )

    if cfg.thresholds.withdraw_apy >= cfg.thresholds.deposit_apy:
        raise ValueError("withdraw_apy must be lower than deposit_apy")

    if cfg.strategy.leverage < 1:
        raise ValueError("leverage must be at least 1")

    try:
        amount = Decimal(cfg.strategy.deposit_amount)
    except InvalidOperation:
        raise ValueError(
            f"deposit_amount '{cfg.strategy.deposit_amount}' is not a number"
        ) from None
    if not amount.is_finite() or amount <= 0:
        raise ValueError("deposit_amount must be positive")
