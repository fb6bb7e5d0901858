import pytest

from regdiff.core.diff import build_diff, diff_summary, merge_parts
from regdiff.core.types import DiffPart, PartKind


def _texts(diff, kind: PartKind) -> list[str]:
    return [part.text for part in diff.parts if part.kind is kind]


def _assert_well_formed(diff, old: str, new: str) -> None:
    assert diff.old_text() == old
    assert diff.new_text() == new
    for left, right in zip(diff.parts, diff.parts[1:]):
        assert left.kind is not right.kind
    assert diff.has_changes == (diff.added_count > 0 or diff.deleted_count > 0)


def test_build_diff_simple_modification():
    old = "Setiap orang wajib membayar iuran."
    new = "Setiap warga negara wajib membayar iuran bulanan."

    diff = build_diff(old, new)

    _assert_well_formed(diff, old, new)
    assert _texts(diff, PartKind.DELETE) == ["orang"]
    inserted = "".join(_texts(diff, PartKind.INSERT))
    assert "warga" in inserted
    assert "negara" in inserted
    assert "bulanan" in inserted
    assert diff.parts[0] == DiffPart(PartKind.EQUAL, "Setiap ")
    assert diff.parts[-1] == DiffPart(PartKind.EQUAL, ".")
    assert diff.deleted_count == 1
    assert diff.added_count == 5
    assert diff.has_changes


def test_build_diff_identical_texts_give_single_equal_part():
    text = "Ketentuan dalam Pasal 5 tetap berlaku."

    diff = build_diff(text, text)

    assert diff.parts == [DiffPart(PartKind.EQUAL, text)]
    assert not diff.has_changes
    assert diff.added_count == 0
    assert diff.deleted_count == 0


def test_build_diff_of_empty_texts_has_no_parts():
    diff = build_diff("", "")

    assert diff.parts == []
    assert not diff.has_changes


def test_build_diff_against_empty_side():
    added = build_diff("", "Pasal baru.")
    assert added.parts == [DiffPart(PartKind.INSERT, "Pasal baru.")]
    assert added.added_count == 4

    removed = build_diff("a.b", "")
    assert removed.parts == [DiffPart(PartKind.DELETE, "a.b")]
    assert removed.deleted_count == 3


def test_build_diff_trailing_runs():
    old = "Pasal ini berlaku sejak diundangkan"
    new = "Pasal ini dicabut"

    diff = build_diff(old, new)

    _assert_well_formed(diff, old, new)
    assert diff.parts[0] == DiffPart(PartKind.EQUAL, "Pasal ini ")
    assert diff.parts[-1].kind is PartKind.INSERT
    assert diff.parts[-2].kind is PartKind.DELETE


@pytest.mark.parametrize(
    "old,new",
    [
        ("a b c", "c b a"),
        ("(1) Setiap pekerja berhak.", "(1) Setiap pekerja/buruh berhak; dan\n(2) wajib."),
        ("the The the", "The the"),
        ("x", "y"),
        ("  ", " "),
    ],
)
def test_build_diff_reconstructs_both_sides(old, new):
    _assert_well_formed(build_diff(old, new), old, new)


def test_build_diff_rejects_none():
    with pytest.raises(TypeError, match="old_text"):
        build_diff(None, "a")
    with pytest.raises(TypeError, match="new_text"):
        build_diff("a", None)


def test_merge_parts_joins_neighbours_of_same_kind():
    parts = [
        DiffPart(PartKind.EQUAL, "a"),
        DiffPart(PartKind.EQUAL, " "),
        DiffPart(PartKind.DELETE, "b"),
        DiffPart(PartKind.INSERT, "c"),
        DiffPart(PartKind.INSERT, "d"),
    ]

    assert merge_parts(parts) == [
        DiffPart(PartKind.EQUAL, "a "),
        DiffPart(PartKind.DELETE, "b"),
        DiffPart(PartKind.INSERT, "cd"),
    ]
    assert merge_parts([]) == []


def test_diff_summary():
    assert diff_summary(build_diff("a", "a")) == "No changes"
    assert diff_summary(build_diff("a", "a b")) == "+2 words added"
    assert diff_summary(build_diff("a b", "a")) == "-2 words deleted"
    assert diff_summary(build_diff("a", "b")) == "+1 words added, -1 words deleted"
