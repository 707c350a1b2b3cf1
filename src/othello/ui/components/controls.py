import flet as ft
from typing import Callable


class GameControlsComponent:
    def __init__(self,
                 on_new_game: Callable,
                 on_auto_move: Callable,
                 on_autopilot_change: Callable[[bool], None]):
        self.on_new_game = on_new_game
        self.on_auto_move = on_auto_move
        self.on_autopilot_change = on_autopilot_change

        self.auto_button: ft.ElevatedButton | None = None
        self.autopilot_switch: ft.Switch | None = None
        self.container: ft.Container | None = None

    def create_sidebar(self, log_view: ft.Control) -> ft.Container:
        log_container = ft.Container(
            content=log_view,
            border=ft.border.all(1, "grey400"),
            border_radius=5,
            padding=5,
            expand=True,
            bgcolor="grey100"
        )

        self.auto_button = ft.ElevatedButton("Auto Move", on_click=self.on_auto_move, expand=1)
        self.autopilot_switch = ft.Switch(
            label="Autopilot",
            value=False,
            on_change=lambda e: self.on_autopilot_change(bool(e.control.value)),
        )

        self.container = ft.Container(
            content=ft.Column(
                [
                    ft.Text("Othello", size=30, weight=ft.FontWeight.BOLD),
                    ft.Divider(),
                    ft.ElevatedButton("Start New Game", on_click=self.on_new_game, width=200),
                    ft.Divider(),
                    ft.Text("Controls", size=20, weight=ft.FontWeight.BOLD),
                    ft.Row([self.auto_button], spacing=10),
                    self.autopilot_switch,
                    ft.Divider(),
                    ft.Text("Engine Log", size=16, weight=ft.FontWeight.BOLD),
                    log_container
                ],
                spacing=10,
                expand=True,
            ),
            width=300,
            padding=10,
            bgcolor="grey50"
        )
        return self.container

    def set_auto_disabled(self, disabled: bool):
        if self.auto_button:
            self.auto_button.disabled = disabled
            if self.auto_button.page:
                self.auto_button.update()
