# agent/__main__.py
import logging
import sys

from observability.logging_config import configure_logging

from .loop import EXIT_BAD_SETTINGS, AgentSettings, run_agent
from .power import SimulatedPowerController, SystemPowerController

log = logging.getLogger("agent")


def main() -> None:
    configure_logging()

    try:
        settings = AgentSettings.from_env()
    except ValueError as e:
        log.error(str(e))
        sys.exit(EXIT_BAD_SETTINGS)

    power = SimulatedPowerController() if settings.simulate_power else SystemPowerController()
    log.info(
        "agent started",
        extra={
            "group": settings.group_name,
            "computer": settings.computer_name,
            "interval_s": settings.heartbeat_interval_s,
            "simulate_power": settings.simulate_power,
        },
    )
    sys.exit(run_agent(settings, power))


if __name__ == "__main__":
    main()
