from __future__ import annotations

import asyncio
import logging
import random
from typing import Callable, Optional

from othello.cli.console import QUIT, ConsoleGame
from othello.engine import game
from othello.engine.board import Board, BoardOutOfBoundsError, Color
from othello.engine.game import GameOverError
from othello.engine.rules import InvalidMoveError
from othello.sync.messages import BoardSnapshot, Message, MoveSubmission, TurnAnnouncement
from othello.sync.peer import Peer

logger = logging.getLogger(__name__)


class NetworkGame:
    """Console game where the opponent's moves arrive from a Peer."""

    def __init__(
        self,
        peer: Peer,
        size: int = 8,
        rng: random.Random | None = None,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ):
        self.peer = peer
        self.size = size
        self.rng = rng or random.Random()
        self.read = input_func
        self.write = output_func
        self.console: Optional[ConsoleGame] = None
        self.local_color: Optional[Color] = None
        # Moves this side has submitted, and opponent moves it has processed
        self.sent = 0
        self.received = 0

    async def run(self):
        await self.peer.wait_connected()
        if self.peer.hosting:
            await self._start_as_host()
        elif not await self._start_as_client():
            return

        console = self.console
        while not game.is_terminal(console.state):
            console.draw_board_and_scores()
            if console.state.active is self.local_color:
                if not await self._local_turn():
                    return
            else:
                self.write(f"Waiting for {console.state.active}...")
                message = await self.peer.receive()
                if message is None:
                    self.write("Opponent disconnected.")
                    return
                await self._handle_remote(message)

        console.announce_result()

    async def _start_as_host(self):
        state = game.new_game(self.size, self.rng)
        self.console = self._console(state)
        # The host plays whichever color moves first
        self.local_color = state.active
        await self._send_snapshot()
        await self.peer.send(TurnAnnouncement(active=state.active, host_color=self.local_color))

    async def _start_as_client(self) -> bool:
        snapshot: Optional[BoardSnapshot] = None
        while True:
            message = await self.peer.receive()
            if message is None:
                self.write("Host disconnected before the game started.")
                return False
            if isinstance(message, BoardSnapshot):
                snapshot = message
            elif isinstance(message, TurnAnnouncement) and snapshot is not None:
                self.local_color = message.host_color.opponent
                self._adopt(snapshot)
                self.write(f"You are playing {self.local_color}.")
                return True
            else:
                logger.warning("Ignoring %s before game setup", type(message).__name__)

    async def _local_turn(self) -> bool:
        color = self.local_color
        command = await asyncio.to_thread(self.read, f"Enter move for {color}: ")
        command = command.strip()
        if command.lower() == QUIT:
            return False
        coord = self.console.take_turn(command, color)
        if coord is None:
            return True
        self.sent += 1
        await self.peer.send(MoveSubmission(color=color, coord=coord))
        return True

    async def _handle_remote(self, message: Message):
        if isinstance(message, MoveSubmission):
            self.received += 1
            try:
                result = game.apply_move(self.console.state, message.coord, message.color)
            except (InvalidMoveError, GameOverError, BoardOutOfBoundsError) as exc:
                logger.warning("Rejected move %s from opponent: %s", message.coord, exc)
                if self.peer.hosting:
                    await self._send_snapshot()
                return
            self.write(f"{message.color} plays {message.coord}")
            self.console.report(result)
            # Host echoes the board after each remote move only
            if self.peer.hosting:
                await self._send_snapshot()
        elif isinstance(message, BoardSnapshot) and not self.peer.hosting:
            if message.acked < self.sent:
                # Predates a move we already sent; a newer snapshot follows
                logger.debug("Dropping snapshot acking %d of %d moves", message.acked, self.sent)
                return
            self._adopt(message)
            logger.debug("Board updated from host.")
        else:
            logger.debug("Ignoring %s", type(message).__name__)

    def _adopt(self, snapshot: BoardSnapshot):
        board = Board.from_state_string(snapshot.size, snapshot.board)
        state = game.restore_game(board, snapshot.active)
        if self.console is None:
            self.console = self._console(state)
        else:
            self.console.state = state

    async def _send_snapshot(self):
        state = self.console.state
        await self.peer.send(
            BoardSnapshot(
                size=state.size,
                board=state.board.to_state_string(),
                active=state.active,
                acked=self.received,
            )
        )

    def _console(self, state) -> ConsoleGame:
        return ConsoleGame(state, rng=self.rng, input_func=self.read, output_func=self.write)


async def play_networked(size: int, host: str | None, port: int, seed: int | None = None):
    peer = Peer(port=port)
    if host:
        await peer.connect(host)
    else:
        await peer.listen()
    try:
        await NetworkGame(peer, size=size, rng=random.Random(seed)).run()
    finally:
        await peer.close()
