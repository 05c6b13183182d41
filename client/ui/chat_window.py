#!/usr/bin/env python3
"""
Chat window - PyQt6 front end for the multicast chat.

Features:
- Transcript of chat lines and join/leave notices
- List of users believed present
- Input line with Send button
- Disconnect button

Network callbacks arrive on the receiver thread; they are turned into Qt
signals so every widget update runs on the GUI thread.
"""

import atexit
import sys
from typing import FrozenSet, Iterable, Optional

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QSplitter,
    QPushButton, QTextEdit, QLineEdit, QListWidget, QInputDialog, QMessageBox
)
from PyQt6.QtCore import Qt, QObject, pyqtSignal

from client.chat.presence_controller import PresenceController
from client.network.group_transport import FatalSetupError
from client.utils.config import ClientConfig
from client.utils.logger import logger


class PresenceSignals(QObject):
    """Observer that marshals chat core callbacks to the GUI thread."""

    chat_line = pyqtSignal(str)
    directory_changed = pyqtSignal(object)  # frozenset of peer ids

    def on_chat_line(self, text: str):
        self.chat_line.emit(text)

    def on_directory_changed(self, peers: FrozenSet[str]):
        self.directory_changed.emit(peers)


class ChatWidget(QWidget):
    """Chat transcript with text input."""

    message_sent = pyqtSignal(str)  # message text

    def __init__(self):
        super().__init__()
        self.setup_ui()

    def setup_ui(self):
        """Setup chat interface UI."""
        layout = QVBoxLayout()
        layout.setContentsMargins(5, 5, 5, 5)

        self.chat_text = QTextEdit()
        self.chat_text.setReadOnly(True)
        layout.addWidget(self.chat_text)

        input_layout = QHBoxLayout()
        self.input_field = QLineEdit()
        self.input_field.setPlaceholderText("Type a message...")
        self.input_field.returnPressed.connect(self.send_message)
        input_layout.addWidget(self.input_field)

        self.send_button = QPushButton("Send")
        self.send_button.setMinimumWidth(180)
        self.send_button.clicked.connect(self.send_message)
        input_layout.addWidget(self.send_button)

        layout.addLayout(input_layout)
        self.setLayout(layout)

    def send_message(self):
        """Send chat message."""
        text = self.input_field.text().strip()
        if text:
            self.message_sent.emit(text)
            self.input_field.clear()

    def add_line(self, text: str):
        """Append a line to the transcript."""
        self.chat_text.append(text)
        scrollbar = self.chat_text.verticalScrollBar()
        scrollbar.setValue(scrollbar.maximum())


class UserListWidget(QListWidget):
    """Users believed present."""

    def update_users(self, users: Iterable[str]):
        self.clear()
        for user in sorted(users):
            self.addItem(user)

    def users(self):
        return [self.item(i).text() for i in range(self.count())]


class ChatWindow(QMainWindow):
    """Main application window."""

    def __init__(self, username: str, controller: PresenceController, signals: PresenceSignals):
        super().__init__()
        self.username = username
        self.controller = controller
        self.signals = signals
        self.setup_ui()
        self.setup_connections()

    def setup_ui(self):
        """Setup main window UI."""
        self.setWindowTitle(f"Chat Client - {self.username}")
        self.resize(600, 500)

        central = QWidget()
        layout = QVBoxLayout()

        self.disconnect_button = QPushButton("Disconnect")
        layout.addWidget(self.disconnect_button)

        self.chat_widget = ChatWidget()
        self.user_list = UserListWidget()
        self.user_list.setMinimumWidth(200)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.chat_widget)
        splitter.addWidget(self.user_list)
        splitter.setStretchFactor(0, 4)
        splitter.setStretchFactor(1, 1)
        layout.addWidget(splitter)

        central.setLayout(layout)
        self.setCentralWidget(central)

    def setup_connections(self):
        """Wire widgets and network signals."""
        self.chat_widget.message_sent.connect(self.on_send_message)
        self.disconnect_button.clicked.connect(self.close)
        self.signals.chat_line.connect(self.chat_widget.add_line)
        self.signals.directory_changed.connect(self.user_list.update_users)

    def on_send_message(self, text: str):
        self.controller.send_chat(text)

    def closeEvent(self, event):
        """Leave the chat when the window closes."""
        try:
            self.controller.stop()
        except Exception as e:
            logger.log_error("leaving chat", e)
        event.accept()


def run_chat_window(config: ClientConfig, username: Optional[str] = None) -> int:
    """Ask for a username, join the group and run the Qt event loop."""
    app = QApplication.instance() or QApplication(sys.argv)

    if not username:
        text, ok = QInputDialog.getText(None, 'Chat Client', 'Enter your username:')
        username = text.strip() if ok else ''
    if not username:
        logger.info("No username entered, exiting")
        return 0

    signals = PresenceSignals()
    controller = PresenceController(config, observer=signals)
    window = ChatWindow(username, controller, signals)

    try:
        controller.start(username)
    except FatalSetupError as e:
        logger.log_error("starting chat client", e)
        QMessageBox.critical(None, 'Chat Client', f"Cannot join the chat group:\n{e}")
        return 1

    atexit.register(controller.stop)
    window.show()
    return app.exec()
