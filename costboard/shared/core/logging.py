import sys
import structlog
import logging
from costboard.shared.core.config import get_settings

SENSITIVE_FIELDS = {
    "email", "owner", "owner_email", "user_email", "phone", "contact",
    "api_key", "token", "secret", "password"
}


def tag_redactor(logger, method_name, event_dict):
    """
    Mask sensitive values before rendering.
    Resource tags often carry owner e-mails and contacts, so the "tags"
    container is scrubbed as well as top-level fields.
    """
    for field in SENSITIVE_FIELDS:
        if field in event_dict:
            event_dict[field] = "[REDACTED]"

    for container in ["tags", "details", "extra"]:
        value = event_dict.get(container)
        if isinstance(value, dict):
            # Copy so the caller's mapping is never touched
            scrubbed = dict(value)
            for key in scrubbed:
                if key.lower() in SENSITIVE_FIELDS:
                    scrubbed[key] = "[REDACTED]"
            event_dict[container] = scrubbed

    return event_dict


def setup_logging():
    settings = get_settings()

    # Renderer follows the environment
    if settings.DEBUG:
        renderer = structlog.dev.ConsoleRenderer()
        min_level = logging.DEBUG
    else:
        renderer = structlog.processors.JSONRenderer()
        min_level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if not isinstance(min_level, int):
            min_level = logging.INFO

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        tag_redactor,
        renderer
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Library logs go through the same stream
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=min_level,
    )
