"""Unit tests for the vocabulary registry and the position chain."""

import pytest

from chainbpe import Sequence, SequenceError, TextUnit, Vocabulary, VocabularyError
from chainbpe.errors import ConfigError


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def vocab():
    return Vocabulary()


@pytest.fixture
def abca(vocab):
    """Return the chain for "abca"."""
    return Sequence.build_from_text("abca", vocab)


# Vocabulary
# ---------------------------------------------------------------------------


def test_get_or_create_reuses_tokens(vocab):
    """Equal values map to one token; new values get increasing ids."""
    a = vocab.get_or_create("a")
    b = vocab.get_or_create("b")
    assert vocab.get_or_create("a") is a
    assert (a.id, b.id) == (0, 1)
    assert len(vocab) == 2
    assert "a" in vocab and "c" not in vocab


def test_token_equality_is_by_id(vocab):
    """Tokens compare and hash by id only."""
    a = vocab.get_or_create("a")
    assert a == vocab[a.id]
    assert a != vocab.get_or_create("b")
    assert len({a, vocab[0]}) == 1


def test_empty_value_rejected(vocab):
    """Empty strings are never tokens."""
    with pytest.raises(VocabularyError):
        vocab.get_or_create("")


def test_unknown_token_id_raises(vocab):
    """Looking up an id that was never handed out raises."""
    with pytest.raises(VocabularyError) as exc:
        vocab[42]
    assert exc.value.token_id == 42


def test_lookup_by_value(vocab):
    tok = vocab.get_or_create("xy")
    assert vocab.lookup("xy") is tok
    assert vocab.lookup("z") is None


# Building the chain
# ---------------------------------------------------------------------------


def test_build_links_positions(abca, vocab):
    """Each character becomes one linked position."""
    assert len(abca) == 4
    assert len(vocab) == 3
    assert abca.values() == ["a", "b", "c", "a"]
    assert abca.token_ids() == [0, 1, 2, 0]

    first = abca[abca.head]
    assert first.prev is None
    assert abca.next_of(first).prev == first.id
    assert [pos.start for pos in abca] == [0, 1, 2, 3]


def test_build_registers_occurrences(abca, vocab):
    """A token's occurrence set holds every position referencing it."""
    assert vocab.lookup("a").occurrences == {0, 3}
    assert vocab.lookup("c").occurrences == {2}


def test_build_empty_text(vocab):
    """Empty text gives a chain without head."""
    seq = Sequence.build_from_text("", vocab)
    assert seq.head is None
    assert list(seq.iterate()) == []
    assert len(vocab) == 0


def test_build_by_grapheme(vocab):
    """Grapheme units keep a base letter and its combining mark together."""
    text = "e\u0301e\u0301x"
    seq = Sequence.build_from_text(text, vocab, unit="grapheme")
    assert seq.values() == ["e\u0301", "e\u0301", "x"]
    assert [pos.start for pos in seq] == [0, 2, 4]
    assert seq.text() == text


def test_build_by_char_splits_combining_marks(vocab):
    seq = Sequence.build_from_text("e\u0301", vocab, unit=TextUnit.CHAR)
    assert seq.values() == ["e", "\u0301"]


def test_unknown_unit_raises(vocab):
    with pytest.raises(ConfigError) as exc:
        Sequence.build_from_text("abc", vocab, unit="word")
    assert exc.value.invalid_name == "word"


# Iteration
# ---------------------------------------------------------------------------


def test_iterate_from_middle(abca):
    """Iteration can start from any live position and restarts freely."""
    assert [pos.token.value for pos in abca.iterate(2)] == ["c", "a"]
    assert [pos.token.value for pos in abca.iterate(2)] == ["c", "a"]
    assert [pos.token.value for pos in abca.iterate()] == ["a", "b", "c", "a"]


def test_iterate_from_dead_position_raises(abca):
    with pytest.raises(SequenceError):
        list(abca.iterate(99))


# Splicing
# ---------------------------------------------------------------------------


def test_splice_middle(abca, vocab):
    """Splicing replaces two adjacent positions and rewires both neighbours."""
    left, right = abca[1], abca[2]
    new = abca.new_position(vocab.get_or_create("bc"), left.start)
    abca.splice(left, new, right)

    assert abca.values() == ["a", "bc", "a"]
    assert new.prev == 0 and new.next == 3
    assert abca[0].next == new.id
    assert abca[3].prev == new.id
    assert 1 not in abca and 2 not in abca
    assert len(abca) == 3


def test_splice_at_head_moves_head(abca, vocab):
    """Replacing the first pair makes the new position the head."""
    new = abca.new_position(vocab.get_or_create("ab"), 0)
    abca.splice(abca[0], new, abca[1])
    assert abca.head == new.id
    assert new.prev is None
    assert abca.values() == ["ab", "c", "a"]


def test_splice_at_tail(abca, vocab):
    new = abca.new_position(vocab.get_or_create("ca"), 2)
    abca.splice(abca[2], new, abca[3])
    assert abca.values() == ["a", "b", "ca"]
    assert new.next is None


def test_splice_non_adjacent_raises(abca, vocab):
    new = abca.new_position(vocab.get_or_create("ac"), 0)
    with pytest.raises(SequenceError):
        abca.splice(abca[0], new, abca[2])


def test_splice_dead_position_raises(abca, vocab):
    """A position that was already spliced out cannot be spliced again."""
    left, right = abca[0], abca[1]
    abca.splice(left, abca.new_position(vocab.get_or_create("ab"), 0), right)
    with pytest.raises(SequenceError) as exc:
        abca.splice(left, abca.new_position(vocab.get_or_create("ab"), 0), right)
    assert exc.value.position_id == left.id


def test_compact_drops_stale_occurrences(abca, vocab):
    """Compaction leaves only the ids of live positions."""
    a = vocab.lookup("a")
    abca.splice(abca[2], abca.new_position(vocab.get_or_create("ca"), 2), abca[3])
    assert a.occurrences == {0, 3}
    assert vocab.compact(a, abca.__contains__) == 1
    assert a.occurrences == {0}
