import sys

import uvicorn

from deploy_dashboard.config.manager import ConfigurationManager
from deploy_dashboard.config.rules import PORT_MAX, PORT_MIN, parse_port
from deploy_dashboard.config.settings import get_settings
from deploy_dashboard.logging_config import get_logger
from deploy_dashboard.main import create_app

logger = get_logger(__name__)


def main() -> int:
    """Serve the dashboard on the configured HOST and PORT."""
    settings = get_settings()
    manager = ConfigurationManager()
    config = manager.get_config()

    port = parse_port(config["PORT"])
    if port is None or not PORT_MIN <= port <= PORT_MAX:
        logger.critical(f"Cannot serve on invalid PORT {config['PORT']!r}")
        return 1

    app = create_app(settings=settings, manager=manager)
    uvicorn.run(app, host=config["HOST"], port=port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
