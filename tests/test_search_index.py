"""Tests for full-text search."""

from sqlalchemy import text

from levelnotes.repositories.note_repository import NoteRepository
from levelnotes.repositories.search_index import build_match_expression, tags_text
from levelnotes.schemas.note import NoteFields


def _set_created_at(session, note_id: str, ts: str) -> None:
    session.execute(
        text("UPDATE notes SET created_at = :ts WHERE id = :id"), {"ts": ts, "id": note_id}
    )
    session.commit()


def test_build_match_expression():
    assert build_match_expression("   ") is None
    assert build_match_expression("( - )") is None
    assert build_match_expression("hello world") == '"hello" "world"'
    assert build_match_expression('say "hi"') == '"say" """hi"""'


def test_tags_text():
    assert tags_text('["ai", "ml"]') == "ai ml"
    assert tags_text(None) == ""
    assert tags_text("not json") == ""


def test_search_no_match(repository: NoteRepository):
    """Test Example 4: unrelated notes do not match."""
    repository.create(NoteFields(text="Recipes for sourdough bread"))
    repository.create(NoteFields(text="Notes on the French revolution"))

    assert repository.search("nonexistent-term") == []


def test_search_matches_text_title_html_and_tags(repository: NoteRepository):
    note_id = repository.create(
        NoteFields(
            text="Gradient descent converges slowly",
            html="<em>optimizer</em>",
            tags=["calculus"],
        )
    )

    for query in ["gradient", "DESCENT", "optimizer", "calculus"]:
        assert [n.id for n in repository.search(query)] == [note_id], query


def test_search_requires_all_terms(repository: NoteRepository):
    both = repository.create(NoteFields(text="apple banana"))
    repository.create(NoteFields(text="apple cherry"))

    assert [n.id for n in repository.search("apple banana")] == [both]


def test_search_tolerates_fts_syntax(repository: NoteRepository):
    repository.create(NoteFields(text="plain words"))
    assert repository.search('"unbalanced AND (') == []
    assert repository.search("NEAR(") == []


def test_search_sees_appended_text(repository: NoteRepository):
    note_id = repository.create(NoteFields(text="first capture"))
    assert repository.search("zeppelin") == []

    repository.append(note_id, NoteFields(text="zeppelin airship", tags=["aviation"]))

    assert [n.id for n in repository.search("zeppelin")] == [note_id]
    assert [n.id for n in repository.search("aviation")] == [note_id]


def test_search_forgets_old_title(repository: NoteRepository):
    note_id = repository.create(NoteFields(html="<p>body</p>"))
    repository.update_metadata(note_id, title="Quarterly planning")
    assert [n.id for n in repository.search("quarterly")] == [note_id]

    repository.update_metadata(note_id, title="Roadmap")

    assert repository.search("quarterly") == []
    assert [n.id for n in repository.search("roadmap")] == [note_id]


def test_search_ties_newest_first(repository: NoteRepository, session):
    older = repository.create(NoteFields(text="kiwi"))
    newer = repository.create(NoteFields(text="kiwi"))
    _set_created_at(session, older, "2024-01-01T00:00:00+00:00")
    _set_created_at(session, newer, "2024-06-01T00:00:00+00:00")

    assert [n.id for n in repository.search("kiwi")] == [newer, older]


def test_blank_search_lists_recent(repository: NoteRepository, session):
    first = repository.create(NoteFields(text="one"))
    second = repository.create(NoteFields(text="two"))
    _set_created_at(session, first, "2024-01-01T00:00:00+00:00")
    _set_created_at(session, second, "2024-01-02T00:00:00+00:00")

    assert [n.id for n in repository.search("   ")] == [second, first]
    assert [n.id for n in repository.search("")] == [second, first]


def test_search_limit(repository: NoteRepository):
    for i in range(5):
        repository.create(NoteFields(text=f"lemon {i}"))
    assert len(repository.search("lemon", limit=2)) == 2


def test_index_mirrors_notes(repository: NoteRepository, session):
    ids = [repository.create(NoteFields(text=f"mirror {i}")) for i in range(3)]
    repository.delete(ids[1])

    indexed = session.execute(text("SELECT count(*) FROM notes_fts")).scalar_one()
    assert indexed == repository.count() == 2
