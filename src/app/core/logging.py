"""structlog setup and the per-request log context.

Events are key-value pairs: ``logger.info("Seller approved", seller_id=...)``.
The request id and the authenticated account are merged into every event
from context variables.
"""

import logging
import sys
from typing import Any
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Event keys whose values are bearer secrets and must never be written out
SECRET_KEYS = frozenset({"authorization", "identity_token", "invitation_token", "token"})

# Libraries that log every request or query at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "stripe", "httpx", "httpcore", "uvicorn.access")


def redact_secrets(
    _logger: Any, _method_name: str, event_dict: structlog.typing.EventDict
) -> structlog.typing.EventDict:
    for key in SECRET_KEYS & event_dict.keys():
        event_dict[key] = "[redacted]"
    return event_dict


def setup_logging(debug: bool = False) -> None:
    """Route stdlib logging to stdout and configure structlog.

    Debug mode renders colored console lines; otherwise each event is one
    JSON object.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    renderer: structlog.typing.Processor = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            redact_secrets,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_account_context(
    account_id: UUID,
    persona: str,
    profile_kind: str | None = None,
    email: str | None = None,
) -> None:
    """Attach the authenticated account to every later event of this request.

    The email is bound only when ``LOG_USER_EMAILS`` is enabled.
    """
    from src.app.core.config import get_settings

    bind_contextvars(account_id=str(account_id), persona=persona, profile_kind=profile_kind)
    if email and get_settings().log_user_emails:
        bind_contextvars(account_email=email)


def clear_request_context() -> None:
    clear_contextvars()
