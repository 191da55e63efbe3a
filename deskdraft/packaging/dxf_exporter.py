"""
DXF exporter (AC1018) for board cut outlines.

- Writes one DXF file per call.
- Units: $INSUNITS from ExportOptions.units (4 = mm, 1 = in, 0 = unitless).
- Geometry: each board's cut polygon as a closed LWPOLYLINE, boards laid out
  left to right in parse order, `spacing` apart.
- Layers: CUT (outline) and TEXT (board name), renameable via options.

Requires: ezdxf
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

import ezdxf

from ..config import ExportOptions
from ..geometry.shapes import cut_polygon

if TYPE_CHECKING:
    from ..dsl.dsl_parser import Board

INSUNITS = {"mm": 4, "in": 1, "unitless": 0}
DEFAULT_LAYERS = {"CUT": 7, "TEXT": 8}


def layout_outlines(boards: Iterable["Board"], spacing: float) -> List[Tuple["Board", List[Tuple[float, float]]]]:
    """Cut polygons shifted so they sit side by side along +X."""
    placed = []
    x_off = 0.0
    for board in boards:
        pts = cut_polygon(board)
        placed.append((board, [(x + x_off, y) for x, y in pts]))
        x_off += max(x for x, _ in pts) + spacing
    return placed


def export_dxf(boards: Iterable["Board"], out_path: str, options: Optional[ExportOptions] = None) -> str:
    opts = options or ExportOptions()
    doc = ezdxf.new(dxfversion="AC1018")
    msp = doc.modelspace()
    doc.header["$INSUNITS"] = INSUNITS.get(opts.units, 0)

    for name, color in DEFAULT_LAYERS.items():
        lname = opts.layer(name)
        if lname not in doc.layers:
            doc.layers.add(lname, color=color)
    layer_cut, layer_text = opts.layer("CUT"), opts.layer("TEXT")

    for board, pts in layout_outlines(boards, opts.spacing):
        msp.add_lwpolyline(pts, format="xy", close=True, dxfattribs={"layer": layer_cut})
        label = msp.add_text(board.name, dxfattribs={"height": opts.label_height, "layer": layer_text})
        label.set_placement((pts[0][0], -2 * opts.label_height))

    doc.saveas(out_path)
    return out_path
