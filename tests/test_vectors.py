from __future__ import annotations

import math

import pytest

from doccluster import DocumentVector, InvalidInputError, OutOfRangeError, WordFrequencyEntry


def make_vector(**weights: float) -> DocumentVector:
    return DocumentVector(weights)


class TestWordFrequencyEntry:
    def test_compares_on_word_only(self):
        assert WordFrequencyEntry("apple", 1.0) == WordFrequencyEntry("apple", 2.0)
        assert WordFrequencyEntry("apple", 9.0) < WordFrequencyEntry("banana", 0.1)
        assert hash(WordFrequencyEntry("apple", 1.0)) == hash(WordFrequencyEntry("apple", 3.0))

    def test_empty_word_is_rejected(self):
        with pytest.raises(InvalidInputError):
            WordFrequencyEntry("", 1.0)


class TestInsertAndLookup:
    def test_in_order_and_out_of_order_inserts_stay_sorted(self):
        vector = DocumentVector()
        vector.insert("test1", 3.5)
        vector.insert("test2", 2.6)
        vector.insert("test4", 1.1)
        vector.insert("test3", 5.1)
        vector.insert("a", 0.5)

        assert vector.words() == ["a", "test1", "test2", "test3", "test4"]
        assert len(vector) == 5

    def test_insert_existing_word_overwrites(self):
        vector = make_vector(a=1.0, b=2.0, c=3.0)
        vector.insert("b", 7.0)

        assert len(vector) == 3
        assert vector.value_of("b") == 7.0

    def test_value_of_absent_word_is_zero(self):
        vector = make_vector(test3=5.1)
        assert vector.value_of("test3") == 5.1
        assert vector.value_of("foobar") == 0.0

    def test_positional_access(self):
        vector = make_vector(test1=3.5, test2=2.6)
        entry = vector.at(1)
        assert entry.word == "test2"
        assert entry.weight == 2.6


class TestMutation:
    def test_scale_and_remove(self):
        vector = make_vector(test1=3.5, test2=2.6, test3=5.1, test4=1.1)
        vector.scale(1, -1.1)
        assert vector.value_of("test2") == pytest.approx(-2.86)

        vector.remove_word("test2")
        vector.remove_word("foobar")
        vector.remove_at(0)
        assert vector.as_dict() == {"test3": 5.1, "test4": 1.1}

    @pytest.mark.parametrize("index", [-1, 2, 10])
    def test_bad_index_raises_out_of_range(self, index):
        vector = make_vector(a=1.0, b=2.0)
        with pytest.raises(OutOfRangeError):
            vector.at(index)
        with pytest.raises(OutOfRangeError):
            vector.scale(index, 2.0)
        with pytest.raises(OutOfRangeError):
            vector.remove_at(index)

    def test_out_of_range_is_an_index_error(self):
        with pytest.raises(IndexError):
            DocumentVector().at(0)


class TestDotAndNormalize:
    def test_dot_of_normalized_vectors(self):
        first = make_vector(test1=0.6, test3=0.8)
        second = make_vector(test2=0.92307692, test3=0.38461538)
        assert first.dot(second) == pytest.approx(0.8 * 0.38461538)

    def test_dot_is_symmetric(self):
        first = make_vector(a=1.0, c=2.0, d=-1.5, z=4.0)
        second = make_vector(b=3.0, c=0.5, d=2.0)
        assert first.dot(second) == second.dot(first)
        assert first.dot(second) == pytest.approx(1.0 - 3.0)

    def test_disjoint_vectors_are_orthogonal(self):
        assert make_vector(a=1.0).dot(make_vector(b=1.0)) == 0.0

    def test_normalize(self):
        vector = make_vector(test6=3.0, test8=4.0)
        vector.normalize()

        assert vector.value_of("test6") == pytest.approx(0.6)
        assert vector.value_of("test8") == pytest.approx(0.8)
        assert vector.dot(vector) == pytest.approx(1.0)

    def test_normalize_twice_is_a_fixed_point(self):
        vector = make_vector(a=0.3, b=1.7, c=2.2, d=9.1)
        vector.normalize()
        before = vector.as_dict()
        vector.normalize()

        for word, weight in before.items():
            assert vector.value_of(word) == pytest.approx(weight)
        assert math.isclose(vector.dot(vector), 1.0)

    def test_normalize_empty_vector_fails(self):
        with pytest.raises(ZeroDivisionError):
            DocumentVector().normalize()

    def test_normalize_zero_vector_fails(self):
        with pytest.raises(ZeroDivisionError):
            make_vector(a=0.0, b=0.0).normalize()
