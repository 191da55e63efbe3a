import ezdxf
import pytest

from deskdraft.config import ExportOptions, load_options
from deskdraft.dsl.dsl_parser import parse_dsl
from deskdraft.packaging.dxf_exporter import export_dxf, layout_outlines

DSL = 'board[a] 100 x 200 x 18 "A"\nboard[b] 500 x 400 x 18 "B" cut left 300 right 200'


def test_layout_places_outlines_side_by_side():
    placed = layout_outlines(parse_dsl(DSL).boards, spacing=50)
    assert placed[0][1][0] == (0, 0)
    assert placed[1][1] == [(150, 0), (650, 0), (650, 200), (150, 300)]


def test_export_writes_outlines(tmp_path):
    out = tmp_path / "cut.dxf"
    export_dxf(parse_dsl(DSL).boards, str(out))
    doc = ezdxf.readfile(str(out))
    msp = doc.modelspace()
    polys = list(msp.query("LWPOLYLINE"))
    assert len(polys) == 2
    assert all(p.closed for p in polys)
    assert all(p.dxf.layer == "CUT" for p in polys)
    assert sorted(t.dxf.text for t in msp.query("TEXT")) == ["A", "B"]
    assert doc.header["$INSUNITS"] == 4


def test_export_honours_options(tmp_path):
    out = tmp_path / "cut.dxf"
    opts = ExportOptions(units="in", layers={"CUT": "OUTLINE"})
    export_dxf(parse_dsl(DSL).boards, str(out), opts)
    doc = ezdxf.readfile(str(out))
    assert doc.header["$INSUNITS"] == 1
    assert "OUTLINE" in doc.layers
    assert {p.dxf.layer for p in doc.modelspace().query("LWPOLYLINE")} == {"OUTLINE"}


def test_load_options_defaults():
    assert load_options(None) == ExportOptions()


def test_load_options_yaml(tmp_path):
    path = tmp_path / "options.yml"
    path.write_text("units: IN\nspacing: 10\nlayers:\n  TEXT: LABELS\nunused: 1\n")
    opts = load_options(path)
    assert (opts.units, opts.spacing, opts.label_height) == ("in", 10.0, 20.0)
    assert opts.layer("TEXT") == "LABELS"
    assert opts.layer("CUT") == "CUT"


@pytest.mark.parametrize("content", ["units: furlong\n", "- 1\n- 2\n"])
def test_load_options_rejects(tmp_path, content):
    path = tmp_path / "options.yml"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_options(path)
