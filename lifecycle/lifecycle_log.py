import logging
from typing import Any, Dict

log = logging.getLogger("lifecycle")

def lifecycle(event: str, *, component: str = "registry", **fields: Any) -> None:
    payload: Dict[str, Any] = {"event": event, "component": component}
    payload.update(fields)
    log.info(event, extra=payload)
