import unittest

from gcmpush.data.dtos.gcm.message import GcmMessage
from gcmpush.util.exceptions import InvalidArgumentError, KeyConflictError


class TestGcmMessage(unittest.TestCase):

    def setUp(self):
        self.message = GcmMessage()

    def test_defaults(self):
        self.assertEqual(self.message.get_recipients(), [])
        self.assertIsNone(self.message.get_collapse_key())
        self.assertEqual(self.message.get_priority(), 'normal')
        self.assertEqual(self.message.get_data(), {})
        self.assertEqual(self.message.get_notification(), {})
        self.assertFalse(self.message.get_delay_while_idle())
        self.assertEqual(self.message.get_time_to_live(), 2419200)
        self.assertIsNone(self.message.get_restricted_package_name())
        self.assertFalse(self.message.get_dry_run())

    def test_set_recipients_keeps_order(self):
        ids = ['c', 'a', 'b']
        self.message.set_recipients(ids)
        self.assertEqual(self.message.get_recipients(), ids)

    def test_set_recipients_replaces_previous(self):
        self.message.add_recipient('old')
        self.message.set_recipients(['new'])
        self.assertEqual(self.message.get_recipients(), ['new'])

    def test_add_duplicate_recipient_is_noop(self):
        self.message.set_recipients(['a', 'b'])
        self.message.add_recipient('a')
        self.assertEqual(self.message.get_recipients(), ['a', 'b'])

    def test_invalid_recipients(self):
        for bad in ['', None, 1, ['a']]:
            with self.assertRaises(InvalidArgumentError):
                self.message.add_recipient(bad)
        with self.assertRaises(InvalidArgumentError):
            self.message.set_recipients(['a', ''])

    def test_clear_recipients(self):
        self.message.set_recipients(['a'])
        self.message.clear_recipients()
        self.assertEqual(self.message.get_recipients(), [])

    def test_get_recipients_returns_copy(self):
        self.message.add_recipient('a')
        self.message.get_recipients().append('b')
        self.assertEqual(self.message.get_recipients(), ['a'])

    def test_fluent_chaining(self):
        result = self.message.add_recipient('a').set_collapse_key('k').set_dry_run(True)
        self.assertIs(result, self.message)

    def test_collapse_key(self):
        self.message.set_collapse_key('key')
        self.assertEqual(self.message.get_collapse_key(), 'key')
        self.message.set_collapse_key(None)
        self.assertIsNone(self.message.get_collapse_key())
        for bad in ['', 5, True]:
            with self.assertRaises(InvalidArgumentError):
                self.message.set_collapse_key(bad)

    def test_priority(self):
        self.message.set_priority('high')
        self.assertEqual(self.message.get_priority(), 'high')
        self.message.set_priority(None)
        self.assertIsNone(self.message.get_priority())
        with self.assertRaises(InvalidArgumentError):
            self.message.set_priority('')

    def test_restricted_package_name(self):
        self.message.set_restricted_package_name('com.example.app')
        self.assertEqual(
            self.message.get_restricted_package_name(), 'com.example.app')
        with self.assertRaises(InvalidArgumentError):
            self.message.set_restricted_package_name('')

    def test_time_to_live_is_coerced_to_int(self):
        self.message.set_time_to_live('60')
        self.assertEqual(self.message.get_time_to_live(), 60)
        self.message.set_time_to_live(12.7)
        self.assertEqual(self.message.get_time_to_live(), 12)
        # No bounds check
        self.message.set_time_to_live(-1)
        self.assertEqual(self.message.get_time_to_live(), -1)

    def test_booleans_are_coerced(self):
        self.message.set_delay_while_idle(1)
        self.assertIs(self.message.get_delay_while_idle(), True)
        self.message.set_dry_run(0)
        self.assertIs(self.message.get_dry_run(), False)

    def test_add_data(self):
        self.message.add_data('key', 'value').add_data('nested', {'a': [1, 2.5, None, True]})
        self.assertEqual(self.message.get_data(), {
            'key': 'value', 'nested': {'a': [1, 2.5, None, True]}})

    def test_add_data_conflict_keeps_value(self):
        self.message.add_data('key', 'value')
        with self.assertRaises(KeyConflictError):
            self.message.add_data('key', 'other')
        self.assertEqual(self.message.get_data(), {'key': 'value'})

    def test_add_data_invalid_key(self):
        for bad in ['', None, 3]:
            with self.assertRaises(InvalidArgumentError):
                self.message.add_data(bad, 'value')

    def test_set_recipients_rejects_plain_string(self):
        self.message.set_recipients(['a'])
        for bad in ['token', b'token', 5, None]:
            with self.assertRaises(InvalidArgumentError):
                self.message.set_recipients(bad)
        self.assertEqual(self.message.get_recipients(), ['a'])

    def test_set_data_and_notification_require_mapping(self):
        self.message.add_data('key', 1).add_notification('title', 't')
        for bad in [[('key', 2)], 'key', None]:
            with self.assertRaises(InvalidArgumentError):
                self.message.set_data(bad)
            with self.assertRaises(InvalidArgumentError):
                self.message.set_notification(bad)
        self.assertEqual(self.message.get_data(), {'key': 1})
        self.assertEqual(self.message.get_notification(), {'title': 't'})

    def test_time_to_live_rejects_non_numbers(self):
        for bad in ['abc', None, [1], float('inf')]:
            with self.assertRaises(InvalidArgumentError):
                self.message.set_time_to_live(bad)
        self.assertEqual(self.message.get_time_to_live(), 2419200)

    def test_add_data_rejects_non_finite_floats(self):
        for bad in [float('nan'), float('inf'), [1.0, float('-inf')]]:
            with self.assertRaises(InvalidArgumentError):
                self.message.add_data('key', bad)
        self.message.add_data('key', 1.5)
        self.assertEqual(self.message.get_data(), {'key': 1.5})

    def test_add_data_rejects_non_json_values(self):
        with self.assertRaises(InvalidArgumentError):
            self.message.add_data('key', object())
        with self.assertRaises(InvalidArgumentError):
            self.message.add_data('key', {1: 'int keys are not JSON'})
        self.assertEqual(self.message.get_data(), {})

    def test_set_data_clears_first(self):
        self.message.add_data('old', 1)
        self.message.set_data({'new': 2})
        self.assertEqual(self.message.get_data(), {'new': 2})
        self.message.clear_data()
        self.assertEqual(self.message.get_data(), {})

    def test_notification_is_separate_from_data(self):
        self.message.add_data('title', 'data title')
        self.message.add_notification('title', 'shown title')
        self.assertEqual(self.message.get_data(), {'title': 'data title'})
        self.assertEqual(self.message.get_notification(), {'title': 'shown title'})
        with self.assertRaises(KeyConflictError):
            self.message.add_notification('title', 'again')

    def test_set_notification(self):
        self.message.set_notification({'title': 't', 'body': 'b'})
        self.assertEqual(self.message.get_notification(), {'title': 't', 'body': 'b'})
        self.message.clear_notification()
        self.assertEqual(self.message.get_notification(), {})
        with self.assertRaises(InvalidArgumentError):
            self.message.set_notification({'': 'x'})

    def test_fresh_message_serializes_empty(self):
        self.assertEqual(self.message.toJSON(), {})

    def test_dry_run_serialized(self):
        self.message.set_dry_run(True)
        self.assertEqual(self.message.toJSON(), {'dry_run': True})

    def test_full_serialization(self):
        self.message.set_recipients(['a', 'b']) \
            .set_collapse_key('ck') \
            .set_priority('high') \
            .add_data('d', 1) \
            .add_notification('n', 'x') \
            .set_delay_while_idle(True) \
            .set_time_to_live(600) \
            .set_restricted_package_name('com.example') \
            .set_dry_run(True)

        self.assertEqual(self.message.toJSON(), {
            'registration_ids': ['a', 'b'],
            'collapse_key': 'ck',
            'priority': 'high',
            'data': {'d': 1},
            'notification': {'n': 'x'},
            'delay_while_idle': True,
            'time_to_live': 600,
            'restricted_package_name': 'com.example',
            'dry_run': True,
        })

    def test_defaults_are_omitted_after_reset(self):
        self.message.set_time_to_live(600).set_time_to_live(2419200)
        self.message.set_priority(None).set_collapse_key(None)
        self.assertEqual(self.message.toJSON(), {})


if __name__ == '__main__':
    unittest.main()
