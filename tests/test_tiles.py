from cavewalk.tiles import CellState, CARDINALS, DIRECTIONS, UP, DOWN, LEFT, RIGHT, glyph_for, is_filled

def test_cardinals_come_first():
    assert CARDINALS == (UP, DOWN, LEFT, RIGHT)
    assert len(DIRECTIONS) == 8
    assert len(set(DIRECTIONS)) == 8
    # diagonals only after the cardinals
    assert all(dx != 0 and dy != 0 for dx, dy in DIRECTIONS[4:])

def test_filled_and_glyphs():
    assert not is_filled(CellState.EMPTY)
    assert is_filled(CellState.FLOOR) and is_filled(CellState.WALL)
    assert glyph_for(CellState.EMPTY) == " "
    assert glyph_for(CellState.FLOOR) == "."
    assert glyph_for(CellState.WALL) == "#"
