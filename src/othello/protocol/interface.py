from abc import ABC, abstractmethod
from typing import Callable, Optional


class EngineInterface(ABC):
    """
    Abstract base class for the Othello engine interface.
    Hosts (GUI, tests) speak to an engine in text commands and receive
    text responses through a callback, so they never touch game state.
    """

    def __init__(self):
        self.on_message: Optional[Callable[[str], None]] = None

    def set_callback(self, callback: Callable[[str], None]):
        """Set the callback function to handle messages from the engine."""
        self.on_message = callback

    @abstractmethod
    def start(self):
        pass

    @abstractmethod
    def send_command(self, command: str):
        """Send a text command to the engine."""
        pass

    @abstractmethod
    def stop(self):
        pass

    def _emit(self, message: str):
        if self.on_message:
            self.on_message(message)
