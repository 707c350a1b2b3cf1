import asyncio
import random
import socket

from othello.engine import game
from othello.engine.board import Color, Coordinate
from othello.sync.messages import BoardSnapshot, MoveSubmission, TurnAnnouncement
from othello.sync.netplay import NetworkGame
from othello.sync.peer import Peer

from helpers import board_from_rows


def free_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_peers_exchange_messages():
    async def scenario():
        host = Peer(port=0)
        await host.listen("127.0.0.1")
        client = Peer(port=host.port)
        await client.connect("127.0.0.1")
        await asyncio.wait_for(host.wait_connected(), 5)

        move = MoveSubmission(color=Color.BLACK, coord=Coordinate(2, 3))
        await client.send(move)
        received = await asyncio.wait_for(host.receive(), 5)

        await client.close()
        gone = await asyncio.wait_for(host.receive(), 5)
        await host.close()
        return received, gone, host.hosting, client.hosting

    received, gone, host_hosting, client_hosting = asyncio.run(scenario())

    assert received == MoveSubmission(color=Color.BLACK, coord=Coordinate(2, 3))
    assert gone is None
    assert host_hosting and not client_hosting


def test_refused_connection_becomes_host():
    async def scenario():
        peer = Peer(port=free_port())
        await peer.connect("127.0.0.1")
        hosting = peer.hosting
        await peer.close()
        return hosting

    assert asyncio.run(scenario())


def test_networked_auto_game_stays_in_sync():
    async def scenario():
        host_peer = Peer(port=0)
        await host_peer.listen("127.0.0.1")
        client_peer = Peer(port=host_peer.port)
        await client_peer.connect("127.0.0.1")

        host = NetworkGame(host_peer, size=4, rng=random.Random(1), input_func=lambda _: "-", output_func=lambda _: None)
        client = NetworkGame(client_peer, size=4, rng=random.Random(2), input_func=lambda _: "-", output_func=lambda _: None)
        try:
            await asyncio.wait_for(asyncio.gather(host.run(), client.run()), 20)
        finally:
            await client_peer.close()
            await host_peer.close()
        return host, client

    host, client = asyncio.run(scenario())

    assert game.is_terminal(host.console.state)
    assert game.is_terminal(client.console.state)
    assert host.console.state.board.to_state_string() == client.console.state.board.to_state_string()
    assert host.local_color is client.local_color.opponent


class ScriptedPeer:
    """Client-side stand-in that replays queued host messages, then disconnects."""

    hosting = False

    def __init__(self, inbox):
        self.inbox = list(inbox)
        self.outbox = []

    async def wait_connected(self):
        pass

    async def send(self, message):
        self.outbox.append(message)

    async def receive(self):
        return self.inbox.pop(0) if self.inbox else None


def test_client_keeps_its_move_made_after_the_host_was_skipped():
    start = board_from_rows(
        ".BW.W.",
        "....W.",
        "....W.",
        "....W.",
        "....B.",
        "...B..",
    )
    # What the host echoes after applying a1: black has no reply, white moves again
    after_a1 = board_from_rows(
        "WWW.W.",
        "....W.",
        "....W.",
        "....W.",
        "....B.",
        "...B..",
    )
    peer = ScriptedPeer(
        [
            BoardSnapshot(size=6, board=start.to_state_string(), active=Color.WHITE),
            TurnAnnouncement(active=Color.WHITE, host_color=Color.BLACK),
            BoardSnapshot(size=6, board=after_a1.to_state_string(), active=Color.WHITE, acked=1),
        ]
    )
    inputs = ["a1", "e6", "quit"]
    output = []
    client = NetworkGame(peer, size=6, input_func=lambda _: inputs.pop(0), output_func=output.append)

    asyncio.run(client.run())

    state = client.console.state
    assert client.local_color is Color.WHITE
    assert [message.coord for message in peer.outbox] == [Coordinate(0, 0), Coordinate(5, 4)]
    assert state.board.get(Coordinate(5, 4)) is Color.WHITE
    assert state.board.get(Coordinate(4, 4)) is Color.WHITE
    assert state.active is Color.BLACK
    assert inputs == ["quit"]
    assert "Opponent disconnected." in output


def test_client_adopts_snapshot_that_acks_its_moves():
    start = board_from_rows(
        "....",
        ".BW.",
        ".WB.",
        "....",
    )
    # Host rejected the client's move and resent the unchanged board
    peer = ScriptedPeer(
        [
            BoardSnapshot(size=4, board=start.to_state_string(), active=Color.BLACK),
            TurnAnnouncement(active=Color.BLACK, host_color=Color.BLACK),
            BoardSnapshot(size=4, board=start.to_state_string(), active=Color.WHITE, acked=1),
        ]
    )
    client = NetworkGame(peer, size=4, input_func=lambda _: "quit", output_func=lambda _: None)
    client.sent = 1

    asyncio.run(client.run())

    assert client.console.state.board.to_state_string() == start.to_state_string()
    assert client.console.state.active is Color.WHITE
