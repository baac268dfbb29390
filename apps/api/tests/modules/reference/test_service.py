"""
Unit tests for the education catalogue lookups.
"""

from app.modules.reference import service
from app.modules.reference.schemas import BoardType, EducationType, Province


class TestBoards:
    """Tests for board lookups."""

    def test_board_ids_are_unique(self):
        ids = [board.id for board in service.list_boards()]
        assert len(ids) == len(set(ids))

    def test_boards_by_type_includes_both(self):
        boards = service.boards_by_type(BoardType.O_LEVEL)
        ids = {board.id for board in boards}

        assert "cambridge-o-levels" in ids
        assert "fbise" in ids  # examines both tracks
        assert "bise-lahore" not in ids

    def test_boards_by_province_is_case_insensitive(self):
        boards = service.boards_by_province("punjab")
        assert boards
        assert all(board.province == Province.PUNJAB for board in boards)

    def test_get_board(self):
        board = service.get_board("fbise")
        assert board is not None
        assert board.type == BoardType.BOTH

    def test_get_unknown_board(self):
        assert service.get_board("nope") is None


class TestSubjects:
    """Tests for subject groups and names."""

    def test_subject_names_are_sorted_and_unique(self):
        names = service.subject_names(EducationType.MATRIC)
        assert names == sorted(set(names))
        assert "Physics" in names

    def test_matric_compulsory_subjects_are_shared_core(self):
        assert service.compulsory_subjects(EducationType.MATRIC) == {
            "Urdu",
            "English",
            "Islamiyat",
            "Pakistan Studies",
        }

    def test_o_level_compulsory_subjects_come_from_core_group(self):
        compulsory = service.compulsory_subjects(EducationType.O_LEVEL)
        assert "English Language" in compulsory
        assert "Physics" not in compulsory

    def test_grade_levels(self):
        levels = service.grade_levels(EducationType.O_LEVEL)
        assert [level.id for level in levels] == ["o1", "o2", "o3"]


class TestSubjectRows:
    """Tests for the rows seeded into the subjects table."""

    def test_board_examining_both_tracks_gets_both(self):
        rows = service.subject_rows(service.get_board("fbise"))
        assert {row.education_type for row in rows} == {
            EducationType.MATRIC,
            EducationType.O_LEVEL,
        }

    def test_rows_are_stable(self):
        board = service.get_board("bise-lahore")
        assert service.subject_rows(board) == service.subject_rows(board)

    def test_row_ids_and_codes_are_unique(self):
        rows = [row for board in service.list_boards() for row in service.subject_rows(board)]
        assert len({row.id for row in rows}) == len(rows)
        assert len({row.code for row in rows}) == len(rows)

    def test_row_shape(self):
        rows = service.subject_rows(service.get_board("bise-lahore"))
        physics = next(row for row in rows if row.name == "Physics")

        assert physics.id == "bise-lahore:matric:physics"
        assert physics.code == "BISE-LAHORE-MATRIC-PHYSICS"
        assert physics.is_compulsory is False
