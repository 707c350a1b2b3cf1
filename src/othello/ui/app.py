import asyncio
import flet as ft

from othello.cli.console import AUTOPILOT_DELAY
from othello.protocol.interface import EngineInterface
from othello.protocol.constants import Command, Response
from othello.ui.components.board import BoardComponent
from othello.ui.components.controls import GameControlsComponent
from othello.ui.components.scoreboard import ScoreboardComponent


class OthelloApp:
    def __init__(self, engine: EngineInterface, board_size: int = 8):
        self.engine = engine
        self.board_size = board_size
        self.engine.set_callback(self.handle_engine_message)
        self.page: ft.Page | None = None

        self.board_component = BoardComponent(
            board_size=board_size,
            on_click_callback=self.on_board_click
        )
        self.scoreboard_component = ScoreboardComponent()
        self.controls_component = GameControlsComponent(
            on_new_game=self.on_new_game,
            on_auto_move=self.on_auto_move,
            on_autopilot_change=self.on_autopilot_change,
        )

        # UI State
        self.log_view = ft.ListView(expand=True, spacing=4, padding=0, auto_scroll=True)
        self.current_turn = "BLACK"
        self.game_over = False
        self.autopilot = False
        self._autopilot_pending = False
        self._pending_status_message: str | None = None

    def main(self, page: ft.Page):
        self.page = page
        page.title = "Othello"
        page.theme_mode = ft.ThemeMode.LIGHT
        page.padding = 20

        sidebar = self.controls_component.create_sidebar(self.log_view)
        board_grid = self.board_component.create_board()
        scoreboard = self.scoreboard_component.create()

        board_wrapper = ft.Container(
            content=board_grid,
            padding=24,
            alignment=ft.alignment.center,
            border_radius=24,
            gradient=ft.LinearGradient(
                begin=ft.alignment.top_left,
                end=ft.alignment.bottom_right,
                colors=["#0f3d14", "#145a1e"]
            ),
        )
        board_area = ft.Container(
            content=ft.Column(
                [scoreboard, ft.Container(content=board_wrapper, alignment=ft.alignment.center, expand=True)],
                spacing=16,
                horizontal_alignment=ft.CrossAxisAlignment.STRETCH,
                expand=True,
            ),
            expand=True,
            padding=16,
            bgcolor="grey200"
        )

        page.add(
            ft.Row(
                [sidebar, ft.VerticalDivider(width=1), board_area],
                expand=True,
                vertical_alignment=ft.CrossAxisAlignment.STRETCH
            )
        )
        page.update()

        self.engine.start()
        self.log("System: Engine started")
        self.on_new_game(None)

    def log(self, message: str):
        self.log_view.controls.append(
            ft.Text(message, font_family="monospace", size=10, selectable=True)
        )
        if self.log_view.page:
            self.log_view.update()

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    def on_new_game(self, e):
        self.game_over = False
        self.log("GUI: New game")
        self.engine.send_command(f"{Command.NEWGAME} {self.board_size}")

    def on_board_click(self, coord: str):
        if self.game_over or self.autopilot:
            return
        if not self.board_component.is_valid_move(coord):
            self.log(f"GUI: {coord} is not a valid move for {self.current_turn}")
            return
        self.engine.send_command(f"{Command.PLAY} {coord}")

    def on_auto_move(self, e):
        if self.game_over:
            return
        self.engine.send_command(Command.GENMOVE)

    def on_autopilot_change(self, enabled: bool):
        self.autopilot = enabled
        self.controls_component.set_auto_disabled(enabled)
        self.log(f"GUI: Autopilot {'on' if enabled else 'off'}")
        if enabled:
            self._schedule_autopilot()

    def _schedule_autopilot(self):
        if not self.autopilot or self.game_over or self._autopilot_pending or not self.page:
            return
        self._autopilot_pending = True
        self.page.run_task(self._autopilot_step)

    async def _autopilot_step(self):
        # Delay for dramatic effect
        await asyncio.sleep(AUTOPILOT_DELAY)
        self._autopilot_pending = False
        if self.autopilot and not self.game_over:
            self.engine.send_command(Command.GENMOVE)

    # ------------------------------------------------------------------
    # Engine responses
    # ------------------------------------------------------------------
    def handle_engine_message(self, message: str):
        self.log(f"Engine: {message}")

        parts = message.split()
        cmd = parts[0]

        if cmd == Response.BOARD:
            # BOARD <size> <active> <state_string>
            if len(parts) > 3:
                self.current_turn = parts[2]
                state_str = parts[3]
                self.board_component.update_from_state(state_str)
                self.scoreboard_component.update_scores(state_str.count("B"), state_str.count("W"))
                status = self._pending_status_message or f"{self.current_turn.capitalize()} to move"
                self._pending_status_message = None
                self.scoreboard_component.set_status(status)
                self.engine.send_command(Command.VALID_MOVES)
                self._schedule_autopilot()

        elif cmd == Response.VALID_MOVES:
            self.board_component.highlight_valid_moves(parts[1:])

        elif cmd == Response.PASS:
            if len(parts) > 1:
                self._pending_status_message = f"No valid moves for {parts[1].capitalize()}, turn skipped"

        elif cmd == Response.RESULT:
            self.game_over = True
            self.board_component.highlight_valid_moves([])
            if len(parts) > 2:
                status = f"{parts[1].capitalize()} wins with {parts[2]}% of the board!"
            else:
                status = "Tie game!"
            self.scoreboard_component.set_status(status, color="#1B5E20")

        elif cmd == Response.ERROR:
            self.scoreboard_component.set_status(" ".join(parts[1:]), color="#B71C1C")
