from unittest.mock import MagicMock

from utils.summary import (
    EMPTY_RESPONSE_MESSAGE, FAILURE_MESSAGE, MISSING_KEY_MESSAGE,
    build_prompt, generate_class_summary
)

from conftest import make_registration


def test_prompt_lists_students_and_payment_status():
    regs = [make_registration('Amy', is_paid=True, last5='12345'), make_registration('Ben')]
    prompt = build_prompt(regs, 'Yin', '2026-01-09', language='English')

    assert '- Amy (paid)' in prompt
    assert '- Ben (unpaid)' in prompt
    assert 'Total students: 2' in prompt
    assert '2026/1/9' in prompt
    assert 'English' in prompt


def test_missing_api_key():
    assert generate_class_summary([make_registration()], 'Yin', '2026-01-09') == MISSING_KEY_MESSAGE


def test_generates_with_gemini(mocker):
    mock_client_cls = mocker.patch('utils.summary.genai.Client')
    mock_client_cls.return_value.models.generate_content.return_value = MagicMock(text='Hello teacher')

    text = generate_class_summary([make_registration()], 'Yin', '2026-01-09', api_key='key', model='m')

    assert text == 'Hello teacher'
    mock_client_cls.assert_called_once_with(api_key='key')
    assert mock_client_cls.return_value.models.generate_content.call_args.kwargs['model'] == 'm'


def test_empty_response(mocker):
    mock_client_cls = mocker.patch('utils.summary.genai.Client')
    mock_client_cls.return_value.models.generate_content.return_value = MagicMock(text=None)

    assert generate_class_summary([make_registration()], 'Yin', '2026-01-09', api_key='key') == EMPTY_RESPONSE_MESSAGE


def test_api_error_is_not_raised(mocker):
    mock_client_cls = mocker.patch('utils.summary.genai.Client')
    mock_client_cls.return_value.models.generate_content.side_effect = RuntimeError('quota')

    assert generate_class_summary([make_registration()], 'Yin', '2026-01-09', api_key='key') == FAILURE_MESSAGE
