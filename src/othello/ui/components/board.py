import flet as ft

from othello.engine.board import Coordinate


class BoardComponent:
    def __init__(self, board_size: int, on_click_callback, cell_size: float = 56):
        self.board_size = board_size
        self.on_click = on_click_callback
        self.cell_size = cell_size

        # State
        self.board_cells = {}  # Map coord -> Piece Container
        self.highlight_markers = {}
        self.board_grid = None
        self._current_valid_moves = []

    def create_board(self) -> ft.Column:
        rows = []
        piece_size = int(self.cell_size * 0.72)
        marker_size = max(12, int(self.cell_size * 0.3))
        for r in range(self.board_size):
            row_controls = []
            for c in range(self.board_size):
                coord = str(Coordinate(r, c))
                base_color = "#1B5E20" if (r + c) % 2 == 0 else "#215732"

                piece = ft.Container(
                    width=piece_size,
                    height=piece_size,
                    border_radius=piece_size / 2,
                    bgcolor=None,
                )
                marker = ft.Container(
                    width=marker_size,
                    height=marker_size,
                    border_radius=marker_size / 2,
                    bgcolor="rgba(235,235,235,0.88)",
                    opacity=0,
                    animate_opacity=300,
                )
                cell = ft.Container(
                    content=ft.Stack([piece, marker], alignment=ft.alignment.center),
                    width=self.cell_size,
                    height=self.cell_size,
                    bgcolor=base_color,
                    border=ft.border.all(1, "black"),
                    on_click=lambda e, coord=coord: self.on_click(coord),
                    alignment=ft.alignment.center,
                    data=coord,
                )

                self.board_cells[coord] = piece
                self.highlight_markers[coord] = marker
                row_controls.append(cell)
            rows.append(ft.Row(row_controls, spacing=0, tight=True))

        self.board_grid = ft.Column(rows, spacing=0)
        return self.board_grid

    def update_from_state(self, state_str: str):
        """Repaint every piece from a row-major B/W/. board string."""
        for idx, piece in enumerate(state_str):
            r, c = divmod(idx, self.board_size)
            color = {"B": "BLACK", "W": "WHITE"}.get(piece)
            self._paint(str(Coordinate(r, c)), color)
        if self.board_grid and self.board_grid.page:
            self.board_grid.update()

    def _paint(self, coord: str, color: str | None):
        piece = self.board_cells.get(coord)
        if piece is None:
            return
        if color == "BLACK":
            piece.bgcolor = "#0f0f0f"
            piece.gradient = ft.RadialGradient(radius=1.2, colors=["#2f2f2f", "#060606"])
            piece.border = ft.border.all(1, "#4f4f4f")
        elif color == "WHITE":
            piece.bgcolor = "#f4f4f4"
            piece.gradient = ft.RadialGradient(radius=1.2, colors=["#ffffff", "#d5d5d5"])
            piece.border = ft.border.all(1, "#c5c5c5")
        else:
            piece.bgcolor = None
            piece.gradient = None
            piece.border = None

    def highlight_valid_moves(self, moves: list[str]):
        self._current_valid_moves = list(moves)
        move_set = set(moves)
        for coord, marker in self.highlight_markers.items():
            marker.opacity = 1 if coord in move_set else 0
        if self.board_grid and self.board_grid.page:
            self.board_grid.update()

    def is_valid_move(self, coord: str) -> bool:
        return coord in self._current_valid_moves
