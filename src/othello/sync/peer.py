from __future__ import annotations

import asyncio
import logging
from typing import Optional

from othello.sync.messages import Message, MessageError, decode, encode

logger = logging.getLogger(__name__)

DEFAULT_PORT = 5150


class Peer:
    """
    One end of a two-player connection.

    Either side may listen; a connector that is refused becomes the
    listener instead. Inbound messages land on ``inbox``; a ``None`` entry
    means the other side went away.
    """

    def __init__(self, port: int = DEFAULT_PORT):
        self.port = port
        self.hosting = False
        self.inbox: asyncio.Queue[Optional[Message]] = asyncio.Queue()
        self._connected = asyncio.Event()
        self._server: asyncio.AbstractServer | None = None
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._read_task: asyncio.Task | None = None

    @property
    def connected(self) -> bool:
        return self._connected.is_set()

    async def listen(self, host: str = "0.0.0.0"):
        self._server = await asyncio.start_server(self._on_client, host, self.port)
        self.hosting = True
        if self.port == 0:
            self.port = self._server.sockets[0].getsockname()[1]
        logger.info("You are the host. Waiting for client on port %d...", self.port)

    async def connect(self, host: str):
        try:
            reader, writer = await asyncio.open_connection(host, self.port)
        except ConnectionRefusedError:
            logger.warning("Could not connect to host %s. Becoming host instead...", host)
            await self.listen()
            return
        logger.info("Connected to host %s.", host)
        self._attach(reader, writer)

    async def wait_connected(self):
        await self._connected.wait()

    async def send(self, message: Message):
        if self._writer is None:
            raise ConnectionError("No peer connected")
        self._writer.write(encode(message))
        await self._writer.drain()

    async def receive(self) -> Optional[Message]:
        return await self.inbox.get()

    async def close(self):
        if self._read_task is not None:
            self._read_task.cancel()
        if self._writer is not None:
            self._writer.close()
            try:
                await self._writer.wait_closed()
            except ConnectionError:
                pass
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()

    async def _on_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        if self._writer is not None:
            # Only one opponent per game
            writer.close()
            return
        logger.info("Client connected.")
        self._attach(reader, writer)

    def _attach(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        self._reader = reader
        self._writer = writer
        self._connected.set()
        self._read_task = asyncio.create_task(self._read_loop(reader))

    async def _read_loop(self, reader: asyncio.StreamReader):
        try:
            while True:
                line = await reader.readline()
                if not line:
                    break
                try:
                    message = decode(line)
                except MessageError as exc:
                    logger.warning("Dropping message from peer: %s", exc)
                    continue
                await self.inbox.put(message)
        except ConnectionError as exc:
            logger.warning("Connection lost: %s", exc)
        finally:
            await self.inbox.put(None)
