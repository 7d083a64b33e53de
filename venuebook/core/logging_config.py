import logging

# Extra keys the booking code passes via `extra=`, rendered as key=value.
CONTEXT_KEYS = (
    "workflow_id",
    "venue_id",
    "reservation_id",
    "stage",
    "previous_stage",
    "reason",
    "status",
    "error_category",
    "error",
    "method",
    "endpoint",
    "occupied_days",
    "level_name",
    "text",
)


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


def configure_logging(level_name: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
