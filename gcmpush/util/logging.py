import logging
import logging.handlers
import os
from typing import Optional, Union

import coloredlogs

# Rotating file handler based on Klipper and Moonraker's implementation


class GcmPushLoggingHandler(logging.handlers.RotatingFileHandler):
    def __init__(self, filename, **kwargs):
        super(GcmPushLoggingHandler, self).__init__(filename, **kwargs)
        self.rollover_info = {
            'header': f"{'-' * 20}GcmPush Log Start{'-' * 20}",
        }
        self._write_rollover_info()

    def set_rollover_info(self, name, item):
        self.rollover_info[name] = item

    def doRollover(self):
        super(GcmPushLoggingHandler, self).doRollover()
        self._write_rollover_info()

    def _write_rollover_info(self):
        lines = [line for line in self.rollover_info.values() if line]
        if self.stream is not None:
            self.stream.write("\n".join(lines) + "\n")


def setup_logging(log_file: Optional[str] = None, level: Union[int, str] = logging.INFO) -> Optional[GcmPushLoggingHandler]:
    """
    Opt-in logging setup for applications embedding gcmpush.

    Installs coloredlogs on the root logger and, if a log file (or a directory to place
    gcmpush.log in) is given, a rotating file handler next to it.

    Returns:
        Optional[GcmPushLoggingHandler]: The file handler that was added, if any.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    coloredlogs.install(
        level=level, logger=root_logger, fmt='%(asctime)s %(name)s %(levelname)s %(message)s')
    logging.captureWarnings(True)

    if log_file is None:
        return None

    if os.path.isdir(log_file):
        log_file = os.path.join(log_file, "gcmpush.log")

    fh = GcmPushLoggingHandler(log_file, maxBytes=4194304, backupCount=3)
    fh.setFormatter(logging.Formatter(
        '%(asctime)s %(name)s %(levelname)s - %(message)s'))
    root_logger.addHandler(fh)
    logging.getLogger('gcmpush').info("Logging to file: %s",
                                      os.path.normpath(log_file))
    return fh
