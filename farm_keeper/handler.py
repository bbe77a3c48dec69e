"""Invocation entry points — one keeper pass per scheduled trigger."""
from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import Any

from .config import AppConfig, load_config
from .interfaces.notifier import Notifier
from .interfaces.secret_provider import SecretProvider
from .logging_setup import configure_logging
from .models import RunResult
from .notifications import TelegramNotifier
from .secret_providers import build_secret_provider
from .services import Keeper
from .session import open_session

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Execution completed successfully"
FAILURE_MESSAGE = "Error during execution"


def build_notifiers(config: AppConfig) -> list[Notifier]:
    """Return the notifiers enabled in ``config``."""
    notifiers: list[Notifier] = []
    if config.notifications.telegram.enabled:
        notifiers.append(TelegramNotifier(config.notifications.telegram))
    return notifiers


async def _send_failure_alert(notifiers: list[Notifier], error: Exception) -> None:
    message = f"{type(error).__name__}: {error}"
    for notifier in notifiers:
        try:
            await notifier.send_alert(message, subject="🚨 Farm keeper run failed")
        except Exception as e:
            logger.error("Notifier send_alert failed: %s", e)


async def run_once(
    config: AppConfig,
    secrets: SecretProvider | None = None,
    dry_run: bool = False,
) -> RunResult:
    """Run a single keeper pass and capture its outcome.

    Any exception raised while resolving secrets, connecting, reading or
    submitting ends the pass and is returned in ``RunResult.error``.
    """
    notifiers = build_notifiers(config)
    try:
        if secrets is None:
            secrets = build_secret_provider(config.secrets)
        async with open_session(config, secrets) as farm:
            keeper = Keeper(config, farm, notifiers)
            if dry_run:
                actions = await keeper.report()
            else:
                actions = await keeper.check_and_execute()
    except Exception as e:
        logger.exception("Keeper run failed")
        await _send_failure_alert(notifiers, e)
        return RunResult(error=e)

    return RunResult(actions=tuple(actions))


def to_response(result: RunResult) -> dict[str, Any]:
    """Map a run outcome to the scheduler's status/body response."""
    if result.ok:
        return {"statusCode": 200, "body": json.dumps(SUCCESS_MESSAGE)}
    return {"statusCode": 500, "body": json.dumps(FAILURE_MESSAGE)}


def handler(event: Any, context: Any) -> dict[str, Any]:
    """Serverless entry point. ``event`` and ``context`` are not inspected."""
    configure_logging(os.environ.get("LOG_LEVEL", "INFO"))
    try:
        config = load_config()
    except Exception as e:
        logger.error("Invalid configuration: %s", e)
        return to_response(RunResult(error=e))

    return to_response(asyncio.run(run_once(config)))
