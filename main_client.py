#!/usr/bin/env python3
"""
LAN Multicast Chat - Main Entry Point

Serverless group chat: every peer joins the same multicast group and
exchanges text datagrams with the others.

Usage:
    python main_client.py [--username NAME] [--group ADDR] [--port N] [--cli]

Modes:
    (default)    Launch the PyQt6 window
    --cli        Launch the command-line interface
"""

import argparse
import atexit
import logging
import os
import sys
from typing import FrozenSet, Optional

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from client.chat.presence_controller import PresenceController
from client.chat.receiver_loop import PresenceObserver
from client.network.group_transport import FatalSetupError
from client.utils.config import ClientConfig
from client.utils.logger import logger
from common.constants import DEFAULT_MULTICAST_GROUP, DEFAULT_PORT, DEFAULT_INTERFACE


class ConsoleObserver(PresenceObserver):
    """Prints chat lines and member list changes to stdout."""

    def on_chat_line(self, text: str):
        print(text, flush=True)

    def on_directory_changed(self, peers: FrozenSet[str]):
        print(f"[USERS] {', '.join(sorted(peers))}", flush=True)


def run_gui_client(config: ClientConfig, username: Optional[str] = None) -> int:
    """Run the GUI client."""
    try:
        from client.ui.chat_window import run_chat_window
    except ImportError:
        print("[ERROR] PyQt6 not installed. Install with: pip install PyQt6")
        return 1
    return run_chat_window(config, username)


def run_cli_client(config: ClientConfig, username: Optional[str] = None, stream=None) -> int:
    """Run the CLI client."""
    stream = stream or sys.stdin
    if not username:
        print("Enter your username: ", end='', flush=True)
        username = stream.readline().strip()
    if not username:
        print("No username entered, exiting.")
        return 0

    controller = PresenceController(config, observer=ConsoleObserver())
    try:
        controller.start(username)
    except FatalSetupError as e:
        logger.log_error("starting chat client", e)
        return 1
    atexit.register(controller.stop)

    print("[INFO] Type messages to chat. Commands: /users /quit")
    try:
        for line in stream:
            text = line.strip()
            if not text:
                continue
            if text == '/quit':
                break
            if text == '/users':
                print(f"[USERS] {', '.join(sorted(controller.users()))}")
                continue
            controller.send_chat(text)
    except KeyboardInterrupt:
        print("\n[INFO] Interrupted by user")
    finally:
        controller.stop()
    return 0


def build_config(args) -> ClientConfig:
    """Build the client configuration from arguments and environment."""
    group = args.group or os.environ.get('MULTICAST_GROUP', DEFAULT_MULTICAST_GROUP)
    port = args.port
    if not port:
        env_port = os.environ.get('MULTICAST_PORT', DEFAULT_PORT)
        try:
            port = int(env_port)
        except ValueError:
            logger.warning(f"Invalid MULTICAST_PORT {env_port!r}, using {DEFAULT_PORT}")
            port = DEFAULT_PORT
    return ClientConfig(group_host=group, port=port, username=args.username,
                        interface=args.interface)


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description='LAN Multicast Chat')
    parser.add_argument('--username', type=str, default=None,
                        help='Username for chat (default: will be asked)')
    parser.add_argument('--group', type=str, default=None,
                        help=f'Multicast group address (default: {DEFAULT_MULTICAST_GROUP})')
    parser.add_argument('--port', type=int, default=None,
                        help=f'Multicast port (default: {DEFAULT_PORT})')
    parser.add_argument('--interface', type=str, default=DEFAULT_INTERFACE,
                        help='Local interface address used for the group (default: any)')
    parser.add_argument('--cli', action='store_true',
                        help='Run in command-line mode (GUI is default)')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')

    args = parser.parse_args(argv)
    if args.debug:
        logger.set_level(logging.DEBUG)

    config = build_config(args)
    if args.cli:
        return run_cli_client(config, args.username)
    return run_gui_client(config, args.username)


if __name__ == "__main__":
    sys.exit(main())
