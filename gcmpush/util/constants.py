# Gateway endpoint and message defaults
SERVER_URI = 'https://fcm.googleapis.com/fcm/send'
DEFAULT_TIME_TO_LIVE = 2419200  # 28 days
DEFAULT_PRIORITY = 'normal'
DEFAULT_TIMEOUT = 30.0

# Fields of a single per-recipient result record
RESULT_MESSAGE_ID = 'message_id'
RESULT_ERROR = 'error'
RESULT_CANONICAL = 'registration_id'

# Fields every gateway reply must carry
RESPONSE_FIELDS = ('results', 'success', 'failure',
                   'canonical_ids', 'multicast_id')

# https://developers.google.com/cloud-messaging/http-server-ref#error-codes
ERROR_MISSING_REGISTRATION = 'MissingRegistration'
ERROR_INVALID_REGISTRATION = 'InvalidRegistration'
ERROR_NOT_REGISTERED = 'NotRegistered'
ERROR_INVALID_PACKAGE_NAME = 'InvalidPackageName'
ERROR_MISMATCH_SENDER_ID = 'MismatchSenderId'
ERROR_MESSAGE_TOO_BIG = 'MessageTooBig'
ERROR_INVALID_DATA_KEY = 'InvalidDataKey'
ERROR_INVALID_TTL = 'InvalidTtl'
ERROR_UNAVAILABLE = 'Unavailable'
ERROR_INTERNAL_SERVER_ERROR = 'InternalServerError'
ERROR_DEVICE_MESSAGE_RATE_EXCEEDED = 'DeviceMessageRateExceeded'
ERROR_TOPICS_MESSAGE_RATE_EXCEEDED = 'TopicsMessageRateExceeded'
