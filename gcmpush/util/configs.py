import configparser
import logging
import os
from typing import Optional

from gcmpush.util.constants import DEFAULT_TIMEOUT, SERVER_URI

home_dir = os.path.expanduser("~/")
working_dir = os.getcwd()

logger = logging.getLogger('gcmpush.config')


class GcmClientConfig:
    """
    Settings for embedding applications, read from an ini file.

        [gcm]
        api_key = AIza...
        server_uri = https://fcm.googleapis.com/fcm/send
        timeout = 30

        [logging]
        log_file = /var/log/gcm.log
        level = INFO
    """
    default_file_name: str = "gcm.conf"

    def __init__(self, passed_config_file: Optional[str] = None) -> None:
        self.config: configparser.ConfigParser = configparser.ConfigParser()

        config_file_path = self.get_config_file_location(passed_config_file)
        if config_file_path:
            self.config.read(config_file_path)

        api_key = self.config.get('gcm', 'api_key', fallback=None)
        self.api_key: Optional[str] = None if api_key == 'False' or not api_key else api_key
        self.server_uri: str = self.config.get(
            'gcm', 'server_uri', fallback=SERVER_URI)
        self.timeout: float = self.config.getfloat(
            'gcm', 'timeout', fallback=DEFAULT_TIMEOUT)

        log_file = self.config.get('logging', 'log_file', fallback=None)
        self.log_file: Optional[str] = log_file if log_file else None
        self.log_level: str = self.config.get(
            'logging', 'level', fallback='INFO').upper()

        logger.info('Config read, server_uri:"%s", timeout:"%s", api_key set:"%s"',
                    self.server_uri, self.timeout, self.api_key is not None)

    def get_config_file_location(self, passed_config: Optional[str]) -> Optional[str]:
        found_file = self.__check_passed_config(passed_config) or self.__check_working_dir() \
            or self.__check_user_dir()

        if found_file:
            logger.info("Found configuration file at: %s",
                        os.path.abspath(found_file))
        else:
            logger.warning(
                "No config file was found, using default fallback values!")
        return found_file

    # Check if file exists, ignoring if it starts capitalized or lowercase
    def __check_file_exists(self, path: str, filename: str) -> Optional[str]:
        if not os.path.isdir(path):
            return None
        entries = os.listdir(path)
        for candidate in (filename, filename.lower(), filename.capitalize()):
            if candidate in entries:
                return os.path.join(path, candidate)
        return None

    def __check_passed_config(self, passed_config: Optional[str]) -> Optional[str]:
        if passed_config is None:
            return None
        logger.info("Checking if passed config exists: %s", passed_config)
        if os.path.isfile(passed_config):
            return passed_config
        return None

    def __check_working_dir(self) -> Optional[str]:
        return self.__check_file_exists(working_dir, self.default_file_name)

    # ~/gcm.conf
    def __check_user_dir(self) -> Optional[str]:
        return self.__check_file_exists(home_dir, self.default_file_name)
