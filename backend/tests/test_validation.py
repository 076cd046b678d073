import pytest
from pydantic import ValidationError

from app.schemas import Question, ViolationKind
from app.validation import validate_question


def _valid(**overrides):
    data = {
        'id': '1718000000000',
        'questionText': 'Which planet is largest?',
        'options': ['Mercury', 'Venus', 'Jupiter', 'Mars'],
        'correctAnswerIndex': 2,
    }
    data.update(overrides)
    return data


def _kinds(result):
    return {(v.field, v.kind) for v in result.violations}


def test_valid_question_round_trips_unchanged():
    data = _valid()
    res = validate_question(data)
    assert res.ok
    assert res.violations == []
    assert res.question.to_wire() == data


def test_validating_twice_gives_same_result():
    data = _valid()
    first = validate_question(data)
    second = validate_question(first.question.to_wire())
    assert first.ok and second.ok
    assert first.question == second.question


def test_id_is_optional():
    data = _valid()
    del data['id']
    res = validate_question(data)
    assert res.ok
    assert res.question.id is None
    assert res.question.to_wire() == data


def test_empty_id_is_rejected():
    res = validate_question(_valid(id=''))
    assert _kinds(res) == {('id', ViolationKind.EMPTY_FIELD)}


@pytest.mark.parametrize('options', [['A', 'B', 'C'], ['A', 'B', 'C', 'D', 'E'], [], 'ABCD'])
def test_wrong_option_count_does_not_hide_other_fields(options):
    res = validate_question(_valid(options=options, questionText='', correctAnswerIndex=7))
    kinds = _kinds(res)
    assert ('options', ViolationKind.WRONG_COUNT) in kinds
    assert ('questionText', ViolationKind.EMPTY_FIELD) in kinds
    assert ('correctAnswerIndex', ViolationKind.OUT_OF_RANGE) in kinds
    assert res.question is None


def test_each_empty_option_reported_separately():
    res = validate_question(_valid(options=['A', '', 'C', '']))
    assert _kinds(res) == {
        ('options.1', ViolationKind.EMPTY_OPTION),
        ('options.3', ViolationKind.EMPTY_OPTION),
    }


def test_empty_option_and_wrong_count_together():
    res = validate_question(_valid(options=['', 'B', 'C']))
    assert _kinds(res) == {
        ('options', ViolationKind.WRONG_COUNT),
        ('options.0', ViolationKind.EMPTY_OPTION),
    }


@pytest.mark.parametrize('index', [-1, 4])
def test_index_outside_range(index):
    res = validate_question(_valid(correctAnswerIndex=index))
    assert _kinds(res) == {('correctAnswerIndex', ViolationKind.OUT_OF_RANGE)}


@pytest.mark.parametrize('index', [0, 3])
def test_index_boundaries_accepted(index):
    res = validate_question(_valid(correctAnswerIndex=index))
    assert res.ok


@pytest.mark.parametrize('index', ['2', 2.0, True, None])
def test_index_must_be_an_integer(index):
    res = validate_question(_valid(correctAnswerIndex=index))
    assert _kinds(res) == {('correctAnswerIndex', ViolationKind.OUT_OF_RANGE)}


def test_missing_fields_and_non_mapping_input():
    for data in ({}, None, ['not', 'a', 'dict']):
        res = validate_question(data)
        assert _kinds(res) == {
            ('questionText', ViolationKind.EMPTY_FIELD),
            ('options', ViolationKind.WRONG_COUNT),
            ('correctAnswerIndex', ViolationKind.OUT_OF_RANGE),
        }


def test_violations_are_ordered_by_field():
    res = validate_question({'questionText': '', 'options': ['', 'B', '', 'D'], 'correctAnswerIndex': 9, 'id': ''})
    assert [v.field for v in res.violations] == ['id', 'questionText', 'options.0', 'options.2', 'correctAnswerIndex']
    assert all(v.message for v in res.violations)


@pytest.mark.parametrize('options', [('A', 'B', 'C'), ('A', 'B', 'C', 'D'), {'A', 'B'}, {'A', 'B', 'C', 'D'}])
def test_options_must_be_a_list(options):
    res = validate_question(_valid(options=options))
    assert not res.ok
    assert ('options', ViolationKind.WRONG_COUNT) in _kinds(res)


def test_question_model_enforces_option_count():
    with pytest.raises(ValidationError):
        Question(questionText='Q', options=['A'], correctAnswerIndex=3)
    with pytest.raises(ValidationError):
        Question(questionText='Q', options=['A', 'B', 'C', 'D', 'E'], correctAnswerIndex=0)


def test_snake_case_keys_are_not_accepted():
    res = validate_question({'question_text': 'Q', 'options': ['A', 'B', 'C', 'D'], 'correct_answer_index': 1})
    assert _kinds(res) == {
        ('questionText', ViolationKind.EMPTY_FIELD),
        ('correctAnswerIndex', ViolationKind.OUT_OF_RANGE),
    }
