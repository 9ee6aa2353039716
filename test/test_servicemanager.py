import logging
import sys
import types
import unittest
from unittest import mock

from hellofixture import servicemanager


def fake_systemd(**journal):
    systemd = types.ModuleType('systemd')
    systemd.daemon = types.ModuleType('systemd.daemon')
    systemd.daemon.notify = mock.Mock()
    systemd.journal = types.ModuleType('systemd.journal')
    for name, value in journal.items():
        setattr(systemd.journal, name, value)
    return {'systemd': systemd,
            'systemd.daemon': systemd.daemon,
            'systemd.journal': systemd.journal}


class TestServiceManager(unittest.TestCase):

    def test_no_journal_outside_linux(self):
        with mock.patch('platform.system', return_value='Darwin'):
            self.assertIsInstance(servicemanager.log_handler(), logging.StreamHandler)
            servicemanager.notify_ready()

    @mock.patch('platform.system', return_value='Linux')
    def test_official_bindings(self, _):
        modules = fake_systemd(JournalHandler=mock.Mock(return_value='journal'))
        with mock.patch.dict(sys.modules, modules):
            self.assertEqual(servicemanager.log_handler(), 'journal')
            servicemanager.notify_ready()
        modules['systemd.journal'].JournalHandler.assert_called_once_with(
            SYSLOG_IDENTIFIER='hellofixture')
        modules['systemd.daemon'].notify.assert_called_once_with("READY=1")

    @mock.patch('platform.system', return_value='Linux')
    def test_mosquito_bindings(self, _):
        modules = fake_systemd(JournaldLogHandler=mock.Mock(return_value='journal'))
        modules['systemd.daemon'].Notification = types.SimpleNamespace(READY='ready')
        with mock.patch.dict(sys.modules, modules):
            self.assertEqual(servicemanager.log_handler(), 'journal')
            servicemanager.notify_ready()
        modules['systemd.daemon'].notify.assert_called_once_with('ready')


if __name__ == '__main__':
    unittest.main()
