import math
import tkinter as tk
from tkinter import ttk

from PIL import Image, ImageDraw, ImageTk

from interaction import (
    Direction,
    KeyPress,
    PointerButton,
    PointerMove,
    PointerPress,
    PointerRelease,
)
from utilities import hex_to_rgb, rgb_to_hex


KEY_DIRECTIONS = {
    "<Up>": Direction.UP,
    "<Down>": Direction.DOWN,
    "<Left>": Direction.LEFT,
    "<Right>": Direction.RIGHT,
}


class PixelCanvas(ttk.Frame):
    FRAME_INTERVAL_MS = 16

    def __init__(self, master, app_instance, grid_canvas):
        super().__init__(master)
        self.app = app_instance
        self.grid_canvas = grid_canvas

        self.pending_events = []
        self.art_sprite_image, self.art_sprite_canvas_item = None, None
        self.grid_lines_image, self.grid_lines_canvas_item = None, None
        self._after_id_frame = None
        self._force_full_redraw = True
        self._last_frame_key = None

        self._setup_widgets()
        self._bind_events()

    def _setup_widgets(self):
        self.canvas = tk.Canvas(self, bg="#C0C0C0", highlightthickness=0)
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self.art_sprite_canvas_item = self.canvas.create_image(
            0, 0, anchor="nw", tags="art_sprite"
        )
        self.grid_lines_canvas_item = self.canvas.create_image(
            0, 0, anchor="nw", tags="grid_lines"
        )
        self.canvas.tag_raise("grid_lines", "art_sprite")

    def _bind_events(self):
        self.canvas.bind("<Button-1>", self.on_press_1)
        self.canvas.bind("<B1-Motion>", self.on_motion)
        self.canvas.bind("<ButtonRelease-1>", self.on_release_1)
        self.canvas.bind("<Button-3>", self.on_press_3)
        self.canvas.bind("<ButtonRelease-3>", self.on_release_3)
        self.canvas.bind("<Configure>", lambda e: self.force_redraw())
        for sequence, direction in KEY_DIRECTIONS.items():
            self.app.root.bind(
                sequence, lambda e, d=direction: self.queue_event(KeyPress(d))
            )

    def queue_event(self, event):
        self.pending_events.append(event)

    def on_press_1(self, event):
        self.canvas.focus_set()
        self.queue_event(PointerPress((event.x, event.y), PointerButton.PRIMARY))

    def on_motion(self, event):
        self.queue_event(PointerMove((event.x, event.y)))

    def on_release_1(self, event):
        self.queue_event(PointerRelease((event.x, event.y), PointerButton.PRIMARY))

    def on_press_3(self, event):
        self.queue_event(PointerPress((event.x, event.y), PointerButton.SECONDARY))

    def on_release_3(self, event):
        self.queue_event(PointerRelease((event.x, event.y), PointerButton.SECONDARY))

    def force_redraw(self):
        self._force_full_redraw = True

    def start(self):
        if self._after_id_frame is None:
            self._after_id_frame = self.app.root.after(
                self.FRAME_INTERVAL_MS, self._run_frame
            )

    def stop(self):
        if self._after_id_frame:
            self.app.root.after_cancel(self._after_id_frame)
        self._after_id_frame = None

    def _run_frame(self):
        self._after_id_frame = None

        events, self.pending_events = self.pending_events, []
        self.grid_canvas.apply_options(self.app._get_canvas_options())
        self.grid_canvas.handle_events(events)

        frame_key = (self.grid_canvas.options(), self.grid_canvas.anchor)
        if events or self._force_full_redraw or frame_key != self._last_frame_key:
            self._last_frame_key = frame_key
            self._force_full_redraw = False
            self._update_visible_canvas_image()

        self.start()

    def _update_visible_canvas_image(self):
        viewport_w, viewport_h = self.canvas.winfo_width(), self.canvas.winfo_height()
        if viewport_w <= 1 or viewport_h <= 1:
            self._force_full_redraw = True
            return

        grid = self.grid_canvas.grid
        ax, ay = grid.anchor
        cw, ch = grid.cell_width, grid.cell_height

        px_start = max(0, math.floor(-ax / cw))
        py_start = max(0, math.floor(-ay / ch))
        px_end = min(grid.visible_cols, math.ceil((viewport_w - ax) / cw))
        py_end = min(grid.visible_rows, math.ceil((viewport_h - ay) / ch))

        if px_start >= px_end or py_start >= py_end:
            self.canvas.itemconfig(self.art_sprite_canvas_item, image="")
            self.art_sprite_image = None
        else:
            art_image_cropped = self.grid_canvas.to_image().crop(
                (px_start, py_start, px_end, py_end)
            )
            x0, y0 = grid.cell_origin(py_start, px_start)
            x1, y1 = grid.cell_origin(py_end, px_end)
            final_w, final_h = max(1, round(x1 - x0)), max(1, round(y1 - y0))

            self.art_sprite_image = ImageTk.PhotoImage(
                art_image_cropped.resize((final_w, final_h), Image.NEAREST)
            )
            self.canvas.itemconfig(
                self.art_sprite_canvas_item, image=self.art_sprite_image
            )
            self.canvas.coords(self.art_sprite_canvas_item, round(x0), round(y0))

        self._update_grid_lines_image(viewport_w, viewport_h)

    def _update_grid_lines_image(self, viewport_w, viewport_h):
        overlay = Image.new("RGBA", (viewport_w, viewport_h), (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        for line in self.grid_canvas.grid_lines():
            if line.width <= 0:
                continue
            draw.line(
                [line.start, line.end],
                fill=line.color,
                width=max(1, round(line.width)),
            )
        self.grid_lines_image = ImageTk.PhotoImage(overlay)
        self.canvas.itemconfig(self.grid_lines_canvas_item, image=self.grid_lines_image)

    def set_workarea_color(self, hex_color):
        self.canvas.config(bg=rgb_to_hex(*hex_to_rgb(hex_color)))
