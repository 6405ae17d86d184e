import sys
import logging
import logging.handlers
from pathlib import Path


class SessionFilter(logging.Filter):
    def __init__(self, session):
        super().__init__()
        self.session = session

    def filter(self, record):
        record.session = self.session
        return True


def setup_logging(settings: dict, session_id: str) -> logging.Logger:
    """Configure the root logger for one run.

    Console output goes to stderr so it never mixes with the progress lines
    on stdout. A rotating file log is only added when ``log_file`` is set.
    """
    log_level = logging.DEBUG if settings.get("debug") else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)
        h.close()

    sess_filter = SessionFilter(session_id)

    console_fmt = logging.Formatter("[%(levelname)s] %(message)s")
    file_fmt = logging.Formatter("%(asctime)s [%(levelname)s] [%(name)s] %(module)s:%(lineno)d | %(message)s | session=%(session)s")

    # Console
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(log_level)
    sh.setFormatter(console_fmt)
    sh.addFilter(sess_filter)
    root_logger.addHandler(sh)

    # Optional rotating file
    log_file = settings.get("log_file")
    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        rh = logging.handlers.RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=5, encoding='utf-8')
        rh.setLevel(logging.DEBUG)
        rh.setFormatter(file_fmt)
        rh.addFilter(sess_filter)
        root_logger.addHandler(rh)

    logging.captureWarnings(True)

    app_logger = logging.getLogger("musicsorter")
    app_logger.setLevel(log_level)
    app_logger.debug("Logger initialized | debug=%s | session=%s", settings.get("debug"), session_id)
    return app_logger
