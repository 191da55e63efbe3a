from deskdraft.dsl.dsl_parser import Board, Cuts, parse_dsl
from deskdraft.validators.intersections import has_self_intersections, shape_issues


def test_has_self_intersections():
    assert has_self_intersections([(0, 0), (1, 1), (1, 0), (0, 1)])
    assert not has_self_intersections([(0, 0), (1, 0), (1, 1), (0, 1)])


def test_clean_boards_have_no_issues(cabinet_dsl):
    boards = parse_dsl(cabinet_dsl + '\nboard[tr] 500 x 400 x 18 "Trap" cut left 300 right 200').boards
    assert [msg for b in boards for msg in shape_issues(b)] == []


def test_negative_top_cut_crosses():
    board = Board(id="a", name="A", w=500, h=400, d=18, cuts=Cuts(top=-100))
    issues = shape_issues(board)
    assert "[a] cut top must be positive, got -100" in issues
    assert "[a] cut outline crosses itself" in issues


def test_non_positive_dimension():
    issues = shape_issues(Board(id="a", name="A", w=0, h=10, d=10))
    assert issues == ["[a] width must be positive, got 0"]
