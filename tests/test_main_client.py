#!/usr/bin/env python3
"""
Unit tests for main_client.py

Covers configuration from arguments and environment, and the command-line
front end with the presence controller mocked out.
"""

import io
import os
import unittest
from typing import Optional, get_type_hints
from unittest.mock import Mock, patch

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import main_client
from client.network.group_transport import FatalSetupError


class TestBuildConfig(unittest.TestCase):
    """Argument and environment handling."""

    def parse(self, argv):
        args = Mock(group=None, port=None, username=None, interface='0.0.0.0')
        for key, value in argv.items():
            setattr(args, key, value)
        return args

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        config = main_client.build_config(self.parse({}))
        self.assertEqual(config.get_group_address().as_tuple(), ('230.0.0.0', 4446))

    @patch.dict(os.environ, {'MULTICAST_GROUP': '239.1.1.1', 'MULTICAST_PORT': '5000'}, clear=True)
    def test_environment_overrides(self):
        config = main_client.build_config(self.parse({}))
        self.assertEqual(config.get_group_address().as_tuple(), ('239.1.1.1', 5000))

    @patch('main_client.logger')
    @patch.dict(os.environ, {'MULTICAST_PORT': 'not-a-port'}, clear=True)
    def test_invalid_environment_port_falls_back(self, mock_logger):
        config = main_client.build_config(self.parse({}))
        self.assertEqual(config.port, 4446)
        mock_logger.warning.assert_called_once()

    @patch.dict(os.environ, {'MULTICAST_GROUP': '239.1.1.1'}, clear=True)
    def test_arguments_win_over_environment(self):
        config = main_client.build_config(self.parse({'group': '239.9.9.9', 'port': 6000,
                                                      'username': 'alice'}))
        self.assertEqual(config.get_connection_info(), {
            'group': '239.9.9.9', 'port': 6000, 'interface': '0.0.0.0', 'username': 'alice'
        })


@patch('main_client.atexit')
@patch('main_client.PresenceController')
class TestCliClient(unittest.TestCase):
    """run_cli_client() with a mocked controller."""

    def test_lines_are_sent_as_chat(self, mock_controller_cls, mock_atexit):
        controller = mock_controller_cls.return_value
        stream = io.StringIO("hello\n\n  spaced  \n/quit\nnot sent\n")

        result = main_client.run_cli_client(main_client.ClientConfig(), "alice", stream)

        self.assertEqual(result, 0)
        controller.start.assert_called_once_with("alice")
        self.assertEqual([c.args[0] for c in controller.send_chat.call_args_list],
                         ["hello", "spaced"])
        controller.stop.assert_called_once()
        mock_atexit.register.assert_called_once_with(controller.stop)

    def test_users_command_lists_directory(self, mock_controller_cls, mock_atexit):
        controller = mock_controller_cls.return_value
        controller.users.return_value = frozenset({"bob", "alice"})

        with patch('builtins.print') as mock_print:
            main_client.run_cli_client(main_client.ClientConfig(), "alice", io.StringIO("/users\n"))

        mock_print.assert_any_call("[USERS] alice, bob")
        controller.send_chat.assert_not_called()

    def test_username_read_from_stream(self, mock_controller_cls, mock_atexit):
        controller = mock_controller_cls.return_value
        main_client.run_cli_client(main_client.ClientConfig(), None, io.StringIO("carol\n/quit\n"))
        controller.start.assert_called_once_with("carol")

    def test_blank_username_exits(self, mock_controller_cls, mock_atexit):
        result = main_client.run_cli_client(main_client.ClientConfig(), None, io.StringIO("\n"))
        self.assertEqual(result, 0)
        mock_controller_cls.assert_not_called()

    def test_setup_failure_exits_with_error(self, mock_controller_cls, mock_atexit):
        controller = mock_controller_cls.return_value
        controller.start.side_effect = FatalSetupError("no interface")

        result = main_client.run_cli_client(main_client.ClientConfig(), "alice", io.StringIO(""))

        self.assertEqual(result, 1)
        mock_atexit.register.assert_not_called()


class TestSignatures(unittest.TestCase):
    """Username is optional everywhere it can be asked for interactively."""

    def test_username_annotated_optional(self):
        for func in (main_client.run_cli_client, main_client.run_gui_client,
                     main_client.ClientConfig.__init__):
            with self.subTest(func=func.__qualname__):
                self.assertEqual(get_type_hints(func)["username"], Optional[str])


class TestConsoleObserver(unittest.TestCase):
    """Console output of observer callbacks."""

    def test_prints_lines_and_users(self):
        observer = main_client.ConsoleObserver()
        with patch('builtins.print') as mock_print:
            observer.on_chat_line("bob: hi")
            observer.on_directory_changed(frozenset({"bob", "alice"}))
        mock_print.assert_any_call("bob: hi", flush=True)
        mock_print.assert_any_call("[USERS] alice, bob", flush=True)


if __name__ == '__main__':
    unittest.main()
