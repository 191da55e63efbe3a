from typing import Optional

# assigned by board creation order when no `color` is given
AUTO_COLORS = (
    "#c9a05a", "#b8864a", "#d4b87a", "#a07040",
    "#e8c99a", "#8b6035", "#daa060", "#c08040",
    "#7a6050", "#d4a080", "#b09070", "#9a7055",
)


def auto_color(index: int) -> str:
    return AUTO_COLORS[index % len(AUTO_COLORS)]


def darken(hex_color: Optional[str], factor: float = 0.5) -> str:
    """Scale each RGB channel by `factor`; '#333' for missing or short input."""
    if not hex_color:
        return "#333"
    if len(hex_color) == 4:
        hex_color = "#" + "".join(ch * 2 for ch in hex_color[1:])
    if len(hex_color) < 7:
        return "#333"
    channels = [int(int(hex_color[i:i + 2], 16) * factor) for i in (1, 3, 5)]
    return "#" + "".join(f"{c:02x}" for c in channels)
