WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def hex_to_rgb(hex_color_str):

    h = hex_color_str.lstrip("#")
    if len(h) != 6:
        return (0, 0, 0)
    try:
        return tuple(int(h[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return (0, 0, 0)


def rgb_to_hex(r, g, b):

    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


def clamp_channel(value):

    return max(0, min(255, int(value)))


def to_rgba(color):
    """Normalize a color to an (r, g, b, a) tuple of ints in [0, 255].

    Accepts "#RRGGBB", "#RRGGBBAA", (r, g, b) and (r, g, b, a). Anything
    else is read as opaque black.
    """
    if isinstance(color, str):
        h = color.strip().lstrip("#")
        if len(h) == 8:
            try:
                return tuple(int(h[i : i + 2], 16) for i in (0, 2, 4, 6))
            except ValueError:
                return BLACK
        return hex_to_rgb(h) + (255,)

    try:
        channels = [clamp_channel(c) for c in color]
    except (TypeError, ValueError, OverflowError):
        return BLACK

    if len(channels) == 3:
        return tuple(channels) + (255,)
    if len(channels) == 4:
        return tuple(channels)
    return BLACK


def handle_slider_click(event, slider):

    if slider.identify(event.x, event.y) in ("trough1", "trough2"):
        if (widget_size := slider.winfo_width()) > 0:
            from_, to = float(slider.cget("from")), float(slider.cget("to"))
            fraction = max(0.0, min(1.0, event.x / widget_size))
            slider.set(from_ + (fraction * (to - from_)))


def sanitize_int_input(value_str, min_val=0, max_val=255):

    if not value_str:
        return None

    try:
        num = int(value_str)
        if num > max_val:
            return str(max_val)
        if num < min_val:
            return str(min_val)
    except ValueError:
        pass
    return None


def validate_int_entry(value):

    return value == "" or value.isdigit()
