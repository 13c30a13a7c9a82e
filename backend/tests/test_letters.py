from wordstack.services.challenge.letters import CONSONANTS, VOWELS, can_form


def test_can_form_uses_each_tile_once():
    assert can_form('bee', ['B', 'E', 'E'])
    assert not can_form('bee', ['B', 'E'])


def test_empty_word_is_always_formable():
    assert can_form('', [])
    assert can_form('', ['A', 'B', 'C'])


def test_can_form_is_case_insensitive_on_the_word():
    assert can_form('CaT', ['T', 'A', 'C', 'X'])


def test_can_form_does_not_consume_callers_letters():
    letters = ['C', 'A', 'T']
    assert can_form('cat', letters)
    assert letters == ['C', 'A', 'T']


def test_alphabet_partition():
    assert len(VOWELS) == 5
    assert len(CONSONANTS) == 21
    assert not set(VOWELS) & set(CONSONANTS)
