from copy import deepcopy
from typing import Any, Dict, List, Optional, Union

from gcmpush.data.dtos.gcm.message import GcmMessage
from gcmpush.util.constants import RESPONSE_FIELDS
from gcmpush.util.exceptions import MalformedResponseError

# {
#     "multicast_id": 216,
#     "success": 1,
#     "failure": 1,
#     "canonical_ids": 1,
#     "results": [
#         { "message_id": "1:0408", "registration_id": "32" },
#         { "error": "NotRegistered" }
#     ]
# }

ResultRecord = Dict[str, Any]
CorrelatedResults = Dict[Union[str, int], ResultRecord]


class GcmResponse:
    """
    A decoded gateway reply, optionally paired with the message that produced it.

    The gateway returns one result record per recipient, in request order. When the
    originating message is known the records are keyed by the recipient they belong to,
    otherwise they stay positional.

    Parameters:
        response (Optional[Dict[str, Any]]): The decoded reply. Must contain every field of RESPONSE_FIELDS.
        message (Optional[GcmMessage]): The message the reply answers.

    Raises:
        MalformedResponseError: If a required field is missing.
    """

    def __init__(self,
                 response: Optional[Dict[str, Any]] = None,
                 message: Optional[GcmMessage] = None,
                 ) -> None:
        self._response: Optional[Dict[str, Any]] = None
        self._results: List[ResultRecord] = []
        self._success_count: Optional[int] = None
        self._failure_count: Optional[int] = None
        self._canonical_count: Optional[int] = None
        self._multicast_id: Optional[int] = None
        self._message: Optional[GcmMessage] = message

        if response is not None:
            self._parse(response)

    def _parse(self, response: Dict[str, Any]) -> None:
        if not isinstance(response, dict):
            raise MalformedResponseError('Response must be a JSON object')
        missing = [f for f in RESPONSE_FIELDS if response.get(f) is None]
        if missing:
            raise MalformedResponseError(
                'Response did not contain the proper fields, missing: %s' % ', '.join(missing))
        if not isinstance(response['results'], list):
            raise MalformedResponseError('Response field "results" must be a list')

        try:
            self._success_count = int(response['success'])
            self._failure_count = int(response['failure'])
            self._canonical_count = int(response['canonical_ids'])
            self._multicast_id = int(response['multicast_id'])
        except (TypeError, ValueError) as err:
            raise MalformedResponseError(f'Response counters are not integers: {err}') from err

        self._response = deepcopy(response)
        self._results = self._response['results']

    def get_response(self) -> Optional[Dict[str, Any]]:
        return deepcopy(self._response)

    def get_message(self) -> Optional[GcmMessage]:
        return self._message

    def set_message(self, message: Optional[GcmMessage]) -> 'GcmResponse':
        self._message = message
        return self

    def get_success_count(self) -> Optional[int]:
        return self._success_count

    def get_failure_count(self) -> Optional[int]:
        return self._failure_count

    def get_canonical_count(self) -> Optional[int]:
        return self._canonical_count

    def get_multicast_id(self) -> Optional[int]:
        return self._multicast_id

    def get_results(self) -> Union[CorrelatedResults, List[ResultRecord]]:
        """
        Returns the per-recipient result records.

        Returns:
            Union[CorrelatedResults, List[ResultRecord]]: recipient -> record when a message is attached,
            otherwise the plain list of records as sent by the gateway.
            Records are copies, changing them does not affect the stored response.

            Results beyond the last recipient are keyed by their index in the gateway's
            list, not renumbered from 0, and come after the recipient keys.
        """
        return self._correlate()

    def get_result(self, field: str) -> Dict[Union[str, int], Any]:
        """
        Projects every result record onto a single field.

        Records that lack the field are left out instead of being mapped to None.

        Args:
            field (str): One of RESULT_MESSAGE_ID, RESULT_ERROR or RESULT_CANONICAL.

        Returns:
            Dict[Union[str, int], Any]: recipient (or position) -> value of the field.
        """
        correlated = self._correlate()
        items = correlated.items() if isinstance(correlated, dict) else enumerate(correlated)
        return {k: v[field] for k, v in items
                if isinstance(v, dict) and v.get(field) is not None}

    def _correlate(self) -> Union[CorrelatedResults, List[ResultRecord]]:
        results = deepcopy(self._results)
        if self._message is None or not results:
            return list(results)

        recipients = self._message.get_recipients()
        paired = min(len(recipients), len(results))

        correlated: CorrelatedResults = {}
        for i in range(paired):
            correlated[recipients[i]] = results[i]
        # Results without a recipient stay reachable by their position
        for i in range(paired, len(results)):
            correlated[i] = results[i]
        return correlated

    def __str__(self):
        return '%s(%s)' % (
            type(self).__name__,
            ', '.join('%s=%s' % item for item in vars(self).items())
        )
