import json
import logging
from copy import deepcopy
from typing import Any, Dict, Optional

import requests

from gcmpush.data.dtos.gcm.message import GcmMessage
from gcmpush.data.dtos.gcm.response import GcmResponse
from gcmpush.util.configs import GcmClientConfig
from gcmpush.util.constants import DEFAULT_TIMEOUT, SERVER_URI
from gcmpush.util.exceptions import (AuthenticationError, InvalidArgumentError,
                                     InvalidMessageError,
                                     MalformedResponseError, ServerError,
                                     ServiceUnavailableError, TransportError)


def mask_api_key(api_key: Optional[str]) -> str:
    if not api_key:
        return '<NO API KEY>'
    return api_key[:6] + '##########'


class GcmClient:
    """
    A client to submit push messages to the cloud messaging gateway.

    Attributes:
        server_uri (str): The endpoint messages are posted to.
        timeout (float): Seconds to wait for the gateway before giving up.
        codec: Object providing ``dumps``/``loads`` used to encode the request and decode the reply.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        server_uri: str = SERVER_URI,
        timeout: float = DEFAULT_TIMEOUT,
        codec: Any = json,
    ) -> None:
        """
        Initialize the GcmClient.

        Args:
            api_key (Optional[str]): The server key. Can also be set later, it is only required by send.
            session (Optional[requests.Session]): HTTP session used for the requests. Created on first use if omitted.
            server_uri (str): The gateway endpoint.
            timeout (float): Request timeout in seconds.
            codec: JSON codec, defaults to the json module.
        """
        self._api_key: Optional[str] = None
        self._session: Optional[requests.Session] = session
        self.server_uri: str = server_uri
        self.timeout: float = timeout
        self.codec = codec
        self.logger = logging.getLogger('gcmpush.client')

        if api_key is not None:
            self.set_api_key(api_key)

    @staticmethod
    def from_config(config: GcmClientConfig, session: Optional[requests.Session] = None) -> 'GcmClient':
        return GcmClient(
            api_key=config.api_key,
            session=session,
            server_uri=config.server_uri,
            timeout=config.timeout,
        )

    def get_api_key(self) -> Optional[str]:
        return self._api_key

    def set_api_key(self, api_key: str) -> 'GcmClient':
        if not isinstance(api_key, str) or not api_key:
            raise InvalidArgumentError('The api key must be a string and not empty')
        self._api_key = api_key
        return self

    def get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def set_session(self, session: requests.Session) -> 'GcmClient':
        self._session = session
        return self

    def send(self, message: GcmMessage) -> GcmResponse:
        """
        Send a message to the gateway.

        Args:
            message (GcmMessage): The message to deliver.

        Returns:
            GcmResponse: The decoded reply, correlated with a snapshot of the message taken at send time.

        Raises:
            InvalidArgumentError: If no api key was set.
            TransportError: If the request could not be completed.
            AuthenticationError: On status 401.
            InvalidMessageError: On status 400.
            ServerError: On status 500.
            ServiceUnavailableError: On status 503, carrying the Retry-After header if present.
            MalformedResponseError: On any other failing status or a reply that is not a valid response object.
        """
        if not self._api_key:
            raise InvalidArgumentError('An api key must be set before sending a message')

        sent_message = deepcopy(message)
        body: bytes = self.codec.dumps(sent_message.toJSON()).encode('utf-8')
        headers = {
            'Authorization': f'key={self._api_key}',
            'Content-Type': 'application/json',
            'Content-Length': str(len(body)),
        }

        self.logger.info("Submitting message to %i recipients",
                         len(sent_message.get_recipients()))
        self.logger.debug("Sending to gcm (%s) with api key %s: %s",
                          self.server_uri, mask_api_key(self._api_key), body)
        try:
            res = self.get_session().post(
                self.server_uri, data=body, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout as timeout_err:
            raise TransportError(
                f'Timeout while communicating with the gateway: {timeout_err}') from timeout_err
        except requests.exceptions.RequestException as err:
            raise TransportError(
                f'Error while communicating with the gateway: {err}') from err

        self.logger.debug("Gateway answered with status %s", res.status_code)
        self._raise_for_status(res)

        return GcmResponse(self._decode_body(res), sent_message)

    def _raise_for_status(self, res: requests.Response) -> None:
        status = res.status_code
        if status == 500:
            raise ServerError()
        if status == 503:
            raise ServiceUnavailableError(res.headers.get('Retry-After'))
        if status == 401:
            raise AuthenticationError()
        if status == 400:
            raise InvalidMessageError()
        if not 200 <= status < 300:
            raise MalformedResponseError(
                f'Unexpected status code {status} from the gateway', status)

    def _decode_body(self, res: requests.Response) -> Dict[str, Any]:
        try:
            decoded = self.codec.loads(res.content)
        except (TypeError, ValueError) as err:
            raise MalformedResponseError(
                'Response body did not contain a valid JSON response', res.status_code) from err

        if not isinstance(decoded, dict) or not decoded:
            raise MalformedResponseError(
                'Response body did not contain a valid JSON response', res.status_code)
        return decoded
