import math
from collections.abc import Iterable as IterableABC
from collections.abc import Mapping as MappingABC
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from gcmpush.util.constants import DEFAULT_PRIORITY, DEFAULT_TIME_TO_LIVE
from gcmpush.util.exceptions import InvalidArgumentError, KeyConflictError

JsonValue = Union[None, bool, int, float, str,
                  List['JsonValue'], Dict[str, 'JsonValue']]


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def _is_json_value(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    if value is None or isinstance(value, (bool, int, str)):
        return True
    if isinstance(value, (list, tuple)):
        return all(_is_json_value(v) for v in value)
    if isinstance(value, dict):
        return all(isinstance(k, str) and _is_json_value(v) for k, v in value.items())
    return False


class GcmMessage:
    """
    A single push request to the gateway.

    The recipient order is significant: the gateway answers with one result per
    recipient in the same order, and GcmResponse uses it to pair them back up.

    Every mutator validates its input right away and returns the message, so calls can be chained:

        message = GcmMessage().set_recipients(['token-a', 'token-b']).add_data('kind', 'ping')

    Attributes:
        recipients (List[str]): Registration ids of the devices to deliver to.
        collapse_key (Optional[str]): Lets the gateway replace pending messages with the same key.
        priority (Optional[str]): Delivery priority, 'normal' unless changed.
        data (Dict[str, JsonValue]): Payload handed to the app.
        notification (Dict[str, JsonValue]): Payload displayed by the device.
        delay_while_idle (bool): Hold the message until the device is active.
        time_to_live (int): Seconds the gateway keeps the message while the device is offline.
        restricted_package_name (Optional[str]): Only deliver to apps with this package name.
        dry_run (bool): Validate the request without delivering it.
    """

    def __init__(self) -> None:
        self.recipients: List[str] = []
        self.collapse_key: Optional[str] = None
        self.priority: Optional[str] = DEFAULT_PRIORITY
        self.data: Dict[str, JsonValue] = {}
        self.notification: Dict[str, JsonValue] = {}
        self.delay_while_idle: bool = False
        self.time_to_live: int = DEFAULT_TIME_TO_LIVE
        self.restricted_package_name: Optional[str] = None
        self.dry_run: bool = False

    # Recipients

    def get_recipients(self) -> List[str]:
        return list(self.recipients)

    def add_recipient(self, recipient: str) -> 'GcmMessage':
        if not _is_non_empty_str(recipient):
            raise InvalidArgumentError('recipient must be a non-empty string')
        if recipient not in self.recipients:
            self.recipients.append(recipient)
        return self

    def set_recipients(self, recipients: Iterable[str]) -> 'GcmMessage':
        if isinstance(recipients, (str, bytes)) or not isinstance(recipients, IterableABC):
            raise InvalidArgumentError('recipients must be a list of non-empty strings')
        self.clear_recipients()
        for recipient in recipients:
            self.add_recipient(recipient)
        return self

    def clear_recipients(self) -> 'GcmMessage':
        self.recipients = []
        return self

    # Options

    def get_collapse_key(self) -> Optional[str]:
        return self.collapse_key

    def set_collapse_key(self, key: Optional[str]) -> 'GcmMessage':
        if key is not None and not _is_non_empty_str(key):
            raise InvalidArgumentError('collapse key must be None or a non-empty string')
        self.collapse_key = key
        return self

    def get_priority(self) -> Optional[str]:
        return self.priority

    def set_priority(self, priority: Optional[str]) -> 'GcmMessage':
        if priority is not None and not _is_non_empty_str(priority):
            raise InvalidArgumentError('priority must be None or a non-empty string')
        self.priority = priority
        return self

    def get_delay_while_idle(self) -> bool:
        return self.delay_while_idle

    def set_delay_while_idle(self, delay: bool) -> 'GcmMessage':
        self.delay_while_idle = bool(delay)
        return self

    def get_time_to_live(self) -> int:
        return self.time_to_live

    def set_time_to_live(self, seconds: Union[int, float, str]) -> 'GcmMessage':
        # No range check, the gateway decides what it accepts
        try:
            self.time_to_live = int(seconds)
        except (TypeError, ValueError, OverflowError) as err:
            raise InvalidArgumentError(f'time to live must be an integer: {seconds!r}') from err
        return self

    def get_restricted_package_name(self) -> Optional[str]:
        return self.restricted_package_name

    def set_restricted_package_name(self, name: Optional[str]) -> 'GcmMessage':
        if name is not None and not _is_non_empty_str(name):
            raise InvalidArgumentError('restricted package name must be None or a non-empty string')
        self.restricted_package_name = name
        return self

    def get_dry_run(self) -> bool:
        return self.dry_run

    def set_dry_run(self, dry_run: bool) -> 'GcmMessage':
        self.dry_run = bool(dry_run)
        return self

    # Payloads

    def get_data(self) -> Dict[str, JsonValue]:
        return dict(self.data)

    def add_data(self, key: str, value: JsonValue) -> 'GcmMessage':
        self._add_entry(self.data, key, value)
        return self

    def set_data(self, data: Mapping[str, JsonValue]) -> 'GcmMessage':
        if not isinstance(data, MappingABC):
            raise InvalidArgumentError('data must be a mapping')
        self.clear_data()
        for key, value in data.items():
            self.add_data(key, value)
        return self

    def clear_data(self) -> 'GcmMessage':
        self.data = {}
        return self

    def get_notification(self) -> Dict[str, JsonValue]:
        return dict(self.notification)

    def add_notification(self, key: str, value: JsonValue) -> 'GcmMessage':
        self._add_entry(self.notification, key, value)
        return self

    def set_notification(self, notification: Mapping[str, JsonValue]) -> 'GcmMessage':
        if not isinstance(notification, MappingABC):
            raise InvalidArgumentError('notification must be a mapping')
        self.clear_notification()
        for key, value in notification.items():
            self.add_notification(key, value)
        return self

    def clear_notification(self) -> 'GcmMessage':
        self.notification = {}
        return self

    def _add_entry(self, target: Dict[str, JsonValue], key: str, value: JsonValue) -> None:
        if not _is_non_empty_str(key):
            raise InvalidArgumentError('key must be a non-empty string')
        if key in target:
            raise KeyConflictError(f'key "{key}" conflicts with the data already set')
        if not _is_json_value(value):
            raise InvalidArgumentError(
                f'value for key "{key}" is not JSON serializable: {type(value).__name__}')
        target[key] = value

    def toJSON(self) -> Dict[str, Any]:
        """
        Build the request body sent to the gateway.

        Only fields that differ from their defaults are included, so a fresh message yields an empty dict.

        Returns:
            Dict[str, Any]: The minimal wire representation of this message.
        """
        json: Dict[str, Any] = {}
        if self.recipients:
            json['registration_ids'] = list(self.recipients)
        if self.collapse_key:
            json['collapse_key'] = self.collapse_key
        if self.priority and self.priority != DEFAULT_PRIORITY:
            json['priority'] = self.priority
        if self.data:
            json['data'] = dict(self.data)
        if self.notification:
            json['notification'] = dict(self.notification)
        if self.delay_while_idle:
            json['delay_while_idle'] = True
        if self.time_to_live != DEFAULT_TIME_TO_LIVE:
            json['time_to_live'] = self.time_to_live
        if self.restricted_package_name:
            json['restricted_package_name'] = self.restricted_package_name
        if self.dry_run:
            json['dry_run'] = True

        return json

    def __str__(self):
        return '%s(%s)' % (
            type(self).__name__,
            ', '.join('%s=%s' % item for item in vars(self).items())
        )
