import logging
import tkinter as tk
from tkinter import ttk, colorchooser

from grid_canvas import CanvasOptions, GridCanvas, DEFAULT_PAN_STEP
from interaction import SubMode
from logging_config import setup_logging
from pixel_canvas import PixelCanvas
from pixel_grid import GridStroke
from utilities import (
    rgb_to_hex,
    to_rgba,
    handle_slider_click,
    sanitize_int_input,
    validate_int_entry,
)

logger = logging.getLogger(__name__)

THEMES = {
    True: {"workarea": "#1E1E1E", "ttk": "clam"},
    False: {"workarea": "#F0F0F0", "ttk": "default"},
}


class PixelGridApp:
    def __init__(self, root):
        self.root = root
        self.root.title("Pixel Grid")
        self.root.geometry("1260x720")

        self.grid_canvas = GridCanvas()
        grid = self.grid_canvas.grid

        self.dark_mode = True
        self.primary_color = self.grid_canvas.primary_color
        self.secondary_color = self.grid_canvas.secondary_color
        self.stroke_color = self.grid_canvas.grid_stroke.color

        self.sub_mode_var = tk.StringVar(value=SubMode.DRAW.value)
        self.cell_size_var = tk.DoubleVar(value=grid.cell_width)
        self.rows_var = tk.IntVar(value=grid.visible_rows)
        self.cols_var = tk.IntVar(value=grid.visible_cols)
        self.stroke_width_var = tk.DoubleVar(value=self.grid_canvas.grid_stroke.width)
        self.pan_step_var = tk.StringVar(value=str(int(DEFAULT_PAN_STEP)))
        self.show_ui_var = tk.BooleanVar(value=True)

        self.setup_ui()
        self._apply_theme()
        self.pixel_canvas.start()
        logger.info(
            "Canvas ready: %dx%d cells (capacity %dx%d)",
            grid.visible_rows,
            grid.visible_cols,
            grid.max_rows,
            grid.max_cols,
        )

    def setup_ui(self):
        toggle_frame = ttk.Frame(self.root)
        toggle_frame.pack(fill=tk.X, padx=10, pady=(10, 0))
        ttk.Checkbutton(
            toggle_frame,
            text="Show UI",
            variable=self.show_ui_var,
            command=self.toggle_ui,
        ).pack(side=tk.LEFT)

        self.top_panel = ttk.Frame(self.root)
        self.top_panel.pack(fill=tk.X, padx=10, pady=(5, 0))
        ttk.Button(
            self.top_panel, text="Change theme", command=self.toggle_theme
        ).pack(side=tk.LEFT, padx=(0, 5))
        ttk.Button(
            self.top_panel, text="Clear canvas", command=self.clear_canvas
        ).pack(side=tk.LEFT, padx=(0, 10))
        help_frame = ttk.Frame(self.top_panel)
        help_frame.pack(side=tk.LEFT, fill=tk.X)
        for text in (
            "- Choose the size of the canvas and the color you want to draw",
            "- Then click on the canvas to draw",
            "- You can move the canvas with the arrow keys or with Pan mode",
        ):
            ttk.Label(help_frame, text=text).pack(anchor=tk.W)

        self.main_frame = ttk.Frame(self.root)
        self.main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)
        self.left_panel = ttk.Frame(self.main_frame, width=250)
        self.left_panel.pack(side=tk.LEFT, fill=tk.Y, padx=(0, 10))
        self.left_panel.pack_propagate(False)

        color_frame = ttk.LabelFrame(self.left_panel, text="Color", padding=10)
        color_frame.pack(fill=tk.X, pady=(0, 10))
        self.primary_swatch = self._add_color_row(
            color_frame, "Left click", self.primary_color, self.choose_primary_color
        )
        self.secondary_swatch = self._add_color_row(
            color_frame,
            "Right click",
            self.secondary_color,
            self.choose_secondary_color,
        )

        stroke_frame = ttk.LabelFrame(self.left_panel, text="Stroke canvas", padding=10)
        stroke_frame.pack(fill=tk.X, pady=(0, 10))
        self.stroke_swatch = self._add_color_row(
            stroke_frame, "Color", self.stroke_color, self.choose_stroke_color
        )
        self._add_slider(stroke_frame, "Width", self.stroke_width_var, 0, 10, 0.5)

        grid = self.grid_canvas.grid
        size_frame = ttk.LabelFrame(self.left_panel, text="Grid", padding=10)
        size_frame.pack(fill=tk.X, pady=(0, 10))
        self._add_slider(
            size_frame, "Width and height of a pixel", self.cell_size_var, 1, 100, 1
        )
        self._add_slider(size_frame, "Number of lines", self.rows_var, 1, grid.max_rows, 1)
        self._add_slider(
            size_frame, "Number of columns", self.cols_var, 1, grid.max_cols, 1
        )

        state_frame = ttk.LabelFrame(self.left_panel, text="State canvas", padding=10)
        state_frame.pack(fill=tk.X, pady=(0, 10))
        for mode, label in ((SubMode.PAN, "Drag"), (SubMode.DRAW, "Draw")):
            ttk.Radiobutton(
                state_frame, text=label, variable=self.sub_mode_var, value=mode.value
            ).pack(anchor=tk.W)

        pan_frame = ttk.Frame(state_frame)
        pan_frame.pack(fill=tk.X, pady=(5, 0))
        ttk.Label(pan_frame, text="Arrow key step").pack(side=tk.LEFT)
        vcmd = (self.root.register(validate_int_entry), "%P")
        pan_entry = ttk.Entry(
            pan_frame,
            textvariable=self.pan_step_var,
            width=5,
            validate="key",
            validatecommand=vcmd,
        )
        pan_entry.pack(side=tk.RIGHT)
        pan_entry.bind("<FocusOut>", self._on_pan_step_entry)
        pan_entry.bind("<Return>", self._on_pan_step_entry)

        canvas_frame = ttk.Frame(self.main_frame)
        canvas_frame.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self.pixel_canvas = PixelCanvas(canvas_frame, self, self.grid_canvas)
        self.pixel_canvas.pack(fill=tk.BOTH, expand=True)

    def _add_color_row(self, parent, text, color, command):
        row = ttk.Frame(parent)
        row.pack(fill=tk.X, pady=2)
        ttk.Label(row, text=text).pack(side=tk.LEFT)
        swatch = tk.Label(row, width=4, relief=tk.SUNKEN, bg=self._swatch_hex(color))
        swatch.pack(side=tk.RIGHT)
        ttk.Button(row, text="...", width=3, command=command).pack(
            side=tk.RIGHT, padx=(0, 5)
        )
        return swatch

    def _add_slider(self, parent, text, variable, from_, to, resolution):
        ttk.Label(parent, text=text).pack(anchor=tk.W)
        slider = tk.Scale(
            parent,
            from_=from_,
            to=to,
            resolution=resolution,
            orient=tk.HORIZONTAL,
            variable=variable,
            highlightthickness=0,
            bd=0,
        )
        slider.pack(fill=tk.X)
        slider.bind("<Button-1>", lambda e: handle_slider_click(e, slider))
        return slider

    @staticmethod
    def _swatch_hex(color):
        r, g, b, _ = to_rgba(color)
        return rgb_to_hex(r, g, b)

    def _ask_color(self, color, title):
        rgb, _ = colorchooser.askcolor(
            initialcolor=self._swatch_hex(color), title=title, parent=self.root
        )
        if rgb is None:
            return None
        return to_rgba(rgb)

    def choose_primary_color(self):
        if (color := self._ask_color(self.primary_color, "Left click color")):
            self.primary_color = color
            self.primary_swatch.config(bg=self._swatch_hex(color))

    def choose_secondary_color(self):
        if (color := self._ask_color(self.secondary_color, "Right click color")):
            self.secondary_color = color
            self.secondary_swatch.config(bg=self._swatch_hex(color))

    def choose_stroke_color(self):
        if (color := self._ask_color(self.stroke_color, "Grid line color")):
            self.stroke_color = color
            self.stroke_swatch.config(bg=self._swatch_hex(color))

    def _on_pan_step_entry(self, event=None):
        value = self.pan_step_var.get()
        if (clamped := sanitize_int_input(value, min_val=1, max_val=100)) is not None:
            self.pan_step_var.set(clamped)
        elif not value:
            self.pan_step_var.set(str(int(DEFAULT_PAN_STEP)))

    def _pan_step(self):
        try:
            return max(1, int(self.pan_step_var.get()))
        except ValueError:
            return DEFAULT_PAN_STEP

    def _get_canvas_options(self):
        cell_size = self.cell_size_var.get()
        return CanvasOptions(
            primary_color=self.primary_color,
            secondary_color=self.secondary_color,
            sub_mode=SubMode(self.sub_mode_var.get()),
            visible_rows=self.rows_var.get(),
            visible_cols=self.cols_var.get(),
            cell_width=cell_size,
            cell_height=cell_size,
            grid_stroke=GridStroke(self.stroke_width_var.get(), self.stroke_color),
            pan_step=self._pan_step(),
        )

    def clear_canvas(self):
        self.grid_canvas.clear()
        self.pixel_canvas.force_redraw()

    def toggle_theme(self):
        self.dark_mode = not self.dark_mode
        self._apply_theme()

    def _apply_theme(self):
        theme = THEMES[self.dark_mode]
        style = ttk.Style()
        if theme["ttk"] in style.theme_names():
            style.theme_use(theme["ttk"])
        self.pixel_canvas.set_workarea_color(theme["workarea"])

    def toggle_ui(self):
        if self.show_ui_var.get():
            self.top_panel.pack(fill=tk.X, padx=10, pady=(5, 0), before=self.main_frame)
            self.left_panel.pack(
                side=tk.LEFT, fill=tk.Y, padx=(0, 10), before=self.pixel_canvas.master
            )
        else:
            self.top_panel.pack_forget()
            self.left_panel.pack_forget()


def main():
    setup_logging()
    root = tk.Tk()
    PixelGridApp(root)
    root.mainloop()


if __name__ == "__main__":
    main()
