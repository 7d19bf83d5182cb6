"""File logging setup for onboarding-check runs."""
import logging
import os

# Libraries whose DEBUG output would echo request URLs and headers
QUIET_LOGGERS = ('urllib3', 'requests')


def setup_logging(config, worker_name="onboarding-check"):
    """Send log records to the file named in the logging config section.

    Args:
        config: Full configuration, or just its 'logging' section
        worker_name: Label prefixed to every record together with the pid

    Returns:
        Path of the log file
    """
    logging_config = config.get('logging', config) if isinstance(config, dict) else {}

    log_file = logging_config.get('file', 'logs/app.log')
    level = getattr(logging, str(logging_config.get('level', 'INFO')).upper(), logging.INFO)

    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logging.basicConfig(
        filename=log_file,
        level=level,
        datefmt="%Y-%m-%d %H:%M:%S",
        format=f"[{worker_name}.{os.getpid()}] %(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return log_file
