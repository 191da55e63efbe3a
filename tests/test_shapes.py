import pytest

from deskdraft.dsl.dsl_parser import Board, Cuts, parse_dsl
from deskdraft.dsl.palette import AUTO_COLORS, auto_color, darken
from deskdraft.geometry.shapes import (PROJECTIONS, FaceView, Projection, auto_detect_views, cut_polygon,
                                       has_cuts, list_view_dims, list_view_dims_multi, proj_axis_labels,
                                       project_all, project_board)


def make(w=100, h=200, d=50, **kw):
    return Board(id="a", name="A", w=w, h=h, d=d, **kw)


class TestCutPolygon:
    def test_no_cuts_is_rectangle(self):
        assert cut_polygon(make()) == [(0, 0), (100, 0), (100, 200), (0, 200)]

    def test_left_right(self):
        board = parse_dsl('board[a] 500 x 400 x 50 "Test" cut left 300 right 200').boards[0]
        assert cut_polygon(board) == [(0, 0), (500, 0), (500, 200), (0, 300)]

    def test_top_bottom(self):
        assert cut_polygon(make(500, 400, cuts=Cuts(top=100, bottom=150))) == [
            (0, 0), (150, 0), (100, 400), (0, 400)]

    def test_all_four(self):
        assert cut_polygon(make(500, 400, cuts=Cuts(300, 200, 100, 150))) == [
            (0, 0), (150, 0), (100, 200), (0, 300)]

    def test_has_cuts(self):
        assert not has_cuts(make())
        assert not has_cuts(make(cuts=Cuts()))
        assert has_cuts(make(cuts=Cuts(left=100)))


class TestListViews:
    @pytest.mark.parametrize("view, dims", [("f", (100, 200)), ("s", (50, 200)), ("t", (100, 50)),
                                            (None, (100, 200)), ("tf", (100, 50))])
    def test_single(self, view, dims):
        assert list_view_dims(make(view=view)) == dims

    def test_multi_explicit(self):
        assert list_view_dims_multi(make(view="ft")) == [
            FaceView(100, 200, "f", "front"), FaceView(100, 50, "t", "top")]
        assert [f.label for f in list_view_dims_multi(make(view="fst"))] == ["front", "side", "top"]

    def test_multi_auto(self):
        faces = list_view_dims_multi(make(800, 18, 400))
        assert [f.view for f in faces] == ["t", "f"]
        assert (faces[0].dw, faces[0].dh) == (800, 400)

    @pytest.mark.parametrize("dims, expected", [
        ((800, 18, 400), "tf"),
        ((50, 60, 2000), "st"),
        ((100, 100, 100), "fs"),
        ((100, 50, 100), "tf"),
        ((50, 100, 100), "sf"),
    ])
    def test_auto_detect(self, dims, expected):
        assert auto_detect_views(make(*dims)) == expected


class TestProjection:
    board = make(x=10, y=20, z=30)

    @pytest.mark.parametrize("direction, expected", [
        ("front", (10, 20, 100, 200)),
        ("back", (-110, 20, 100, 200)),
        ("left", (30, 20, 50, 200)),
        ("right", (-80, 20, 50, 200)),
        ("top", (10, 30, 100, 50)),
        ("bottom", (10, -80, 100, 50)),
    ])
    def test_directions(self, direction, expected):
        assert project_board(self.board, direction) == Projection(*expected)

    def test_unpositioned(self):
        assert project_board(make(), "front") == (0, 0, 100, 200)

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            project_board(self.board, "diagonal")

    def test_axis_labels(self):
        assert [proj_axis_labels(p) for p in PROJECTIONS] == [
            ("X", "Y"), ("X", "Y"), ("Z", "Y"), ("Z", "Y"), ("X", "Z"), ("X", "Z")]

    def test_project_all(self):
        boards = parse_dsl('board 1 x 2 x 3 "A" at 1,1,1\nboard 4 x 5 x 6 "B"').boards
        assert project_all(boards, "top") == [(1, 1, 1, 3), (0, 0, 4, 6)]


class TestPalette:
    def test_palette(self):
        assert len(AUTO_COLORS) == 12
        assert auto_color(13) == AUTO_COLORS[1]

    def test_darken(self):
        assert darken("#ffffff", 0.5) == "#7f7f7f"
        assert darken("#fff") == "#7f7f7f"
        assert darken("#000000") == "#000000"

    @pytest.mark.parametrize("value", [None, "", "#ab"])
    def test_darken_fallback(self, value):
        assert darken(value) == "#333"
