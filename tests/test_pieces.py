from falling_block_rl.game import Piece, PieceKind, SHAPE_TABLE, offsets, shape_mask


def test_every_orientation_has_four_distinct_cells():
    assert len(SHAPE_TABLE) == 7
    for kind in PieceKind:
        assert len(SHAPE_TABLE[kind]) == 4
        for rotation in range(4):
            cells = offsets(kind, rotation)
            assert len(cells) == 4
            assert len(set(cells)) == 4


def test_o_piece_does_not_change_with_rotation():
    assert len({offsets(PieceKind.O, r) for r in range(4)}) == 1


def test_rotation_index_is_reduced_mod_four():
    assert Piece(PieceKind.T, rotation=5).rotation == 1
    assert Piece(PieceKind.T).rotated(-1).rotation == 3
    assert offsets(PieceKind.L, 6) == offsets(PieceKind.L, 2)


def test_cells_are_offsets_from_origin():
    piece = Piece(PieceKind.I, 11, 0)
    assert piece.cells() == [(11, 1), (12, 1), (13, 1), (14, 1)]
    assert piece.moved(-2, 3).cells() == [(9, 4), (10, 4), (11, 4), (12, 4)]


def test_moved_and_rotated_return_new_pieces():
    piece = Piece(PieceKind.S, 3, 4, 0)
    assert piece.moved(1, 0) is not piece
    assert piece.x == 3
    assert piece.rotated(1).rotation == 1
    assert piece.rotation == 0


def test_shape_mask():
    mask = shape_mask(PieceKind.T)
    assert mask.shape == (4, 4)
    assert int(mask.sum()) == 4
    assert mask[0, 1] == 1
    assert mask[1, 0] == 1 and mask[1, 1] == 1 and mask[1, 2] == 1
