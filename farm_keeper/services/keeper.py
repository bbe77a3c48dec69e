"""Decision and execution loop — estimates APY per asset and rebalances."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from ..config import AppConfig, AssetConfig
from ..interfaces.farm import FarmContract
from ..interfaces.notifier import Notifier
from ..models import Action, AssetAction, parse_units
from .yield_estimator import estimate_apy

logger = logging.getLogger(__name__)


class Keeper:
    """Evaluates every configured asset once and deposits or withdraws."""

    def __init__(
        self,
        config: AppConfig,
        farm: FarmContract,
        notifiers: list[Notifier] | None = None,
    ) -> None:
        self._config = config
        self._farm = farm
        self._thresholds = config.thresholds
        self._strategy = config.strategy
        self._notifiers: list[Notifier] = list(notifiers or [])

    # ------------------------------------------------------------------
    # Formatting helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _now_str() -> str:
        return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

    @staticmethod
    def _describe(action: AssetAction) -> str:
        if action.action is Action.DEPOSIT:
            return f"deposit {action.amount}"
        if action.action is Action.WITHDRAW:
            return f"withdraw {action.amount}"
        return "hold"

    def _build_summary(self, actions: list[AssetAction], dry_run: bool) -> str:
        title = "🔎 Farm keeper preview" if dry_run else "🌾 Farm keeper run"
        lines = [
            f"{a.symbol}: APY {a.apy:.2f}% → {self._describe(a)}"
            + (f" ({a.tx_hash})" if a.tx_hash else "")
            for a in actions
        ]
        return (
            f"{title}\n"
            f"\n"
            f"Deposit above {self._thresholds.deposit_apy:.2f}% · "
            f"withdraw below {self._thresholds.withdraw_apy:.2f}%\n"
            f"\n"
            + "\n".join(lines)
            + f"\n\n{self._now_str()} UTC"
        )

    # ------------------------------------------------------------------
    # Notification dispatch
    # ------------------------------------------------------------------

    async def _send_log(self, message: str) -> None:
        for notifier in self._notifiers:
            try:
                await notifier.send_log(message, silent=True)
            except Exception as e:
                logger.error("Notifier send_log failed: %s", e)

    # ------------------------------------------------------------------
    # Core workflows
    # ------------------------------------------------------------------

    def _decide(self, apy: float) -> Action:
        if apy > self._thresholds.deposit_apy:
            return Action.DEPOSIT
        if apy < self._thresholds.withdraw_apy:
            return Action.WITHDRAW
        return Action.HOLD

    async def _evaluate(self, asset: AssetConfig, execute: bool) -> AssetAction:
        snapshot = await self._farm.get_position_info(asset.address)
        apy = estimate_apy(snapshot)
        logger.info("Current APY for %s: %s%%", asset.symbol, apy)

        action = self._decide(apy)

        if action is Action.DEPOSIT:
            amount = parse_units(self._strategy.deposit_amount, asset.decimals)
            tx_hash = ""
            if execute:
                tx_hash = await self._farm.deposit(
                    asset.address, amount, self._strategy.leverage
                )
                logger.info(
                    "Deposited %d %s with %dx leverage",
                    amount, asset.symbol, self._strategy.leverage,
                )
            return AssetAction(asset.symbol, asset.address, apy, action, amount, tx_hash)

        if action is Action.WITHDRAW:
            tx_hash = ""
            if execute:
                current = await self._farm.get_position_info(asset.address)
                amount = current.supplied // 2
                tx_hash = await self._farm.withdraw(asset.address, amount)
                logger.info("Withdrawn %d %s", amount, asset.symbol)
            else:
                amount = snapshot.supplied // 2
            return AssetAction(asset.symbol, asset.address, apy, action, amount, tx_hash)

        return AssetAction(asset.symbol, asset.address, apy, action)

    async def check_and_execute(self) -> list[AssetAction]:
        """Evaluate each asset in configured order, submitting transactions.

        The first failure propagates; later assets are not evaluated.
        """
        actions: list[AssetAction] = []
        for asset in self._config.assets:
            actions.append(await self._evaluate(asset, execute=True))

        await self._send_log(self._build_summary(actions, dry_run=False))
        return actions

    async def report(self) -> list[AssetAction]:
        """Evaluate each asset and report the decision without submitting."""
        actions: list[AssetAction] = []
        for asset in self._config.assets:
            action = await self._evaluate(asset, execute=False)
            logger.info(
                "%s would %s", asset.symbol, self._describe(action)
            )
            actions.append(action)

        await self._send_log(self._build_summary(actions, dry_run=True))
        return actions
