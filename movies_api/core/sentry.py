import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.httpx import HttpxIntegration
from sentry_sdk.integrations.logging import LoggingIntegration


def init_sentry(dsn: str,
                environment: str = "dev",
                traces_sample_rate: float = 0.2) -> bool:
    """Включить Sentry; без DSN ничего не делает и возвращает False."""
    if not dsn:
        return False
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        integrations=[
            # ошибки уровня ERROR из логов (internal) уходят событиями
            LoggingIntegration(level=None, event_level="ERROR"),
            FastApiIntegration(),
            HttpxIntegration(),
        ],
        traces_sample_rate=traces_sample_rate,
        send_default_pii=False,
    )
    return True
