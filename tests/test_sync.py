import requests

from utils.endpoint_config import EndpointSettings
from utils.local_cache import LocalCache
from utils.remote_client import SCRIPT_OUTDATED_MESSAGE
from utils.sync import (
    SyncCoordinator, SOURCE_CLOUD, SOURCE_LOCAL, UPLOAD_FAILED_WARNING, DELETE_FAILED_MESSAGE
)

from conftest import SCRIPT_URL, make_registration, make_response


def local_only():
    return SyncCoordinator(EndpointSettings(api_url=''))


def with_endpoint():
    return SyncCoordinator(EndpointSettings(api_url=SCRIPT_URL, timeout=5))


def test_writes_without_endpoint_read_back_newest_first(app):
    coordinator = local_only()
    batches = [[make_registration('Amy')], [make_registration('Ben'), make_registration('Cat')]]
    for batch in batches:
        assert coordinator.write(batch) is None

    result = coordinator.read()
    assert result.source == SOURCE_LOCAL
    assert result.error is None
    assert [r.student_name for r in result.registrations] == ['Ben', 'Cat', 'Amy']


def test_write_keeps_local_copy_when_remote_fails(app, mocker):
    mock_post = mocker.patch('requests.post', side_effect=requests.exceptions.ConnectionError('down'))
    reg = make_registration()

    warning = with_endpoint().write([reg])

    assert warning == UPLOAD_FAILED_WARNING
    assert LocalCache().load() == [reg]
    mock_post.assert_called_once()


def test_write_pushes_to_remote(app, mocker):
    mock_post = mocker.patch('requests.post', return_value=make_response(body={'status': 'success', 'count': 1}))
    reg = make_registration()

    assert with_endpoint().write([reg]) is None
    assert mock_post.call_args.args[0] == SCRIPT_URL


def test_read_success_overwrites_cache(app, mocker):
    LocalCache().append([make_registration('Stale')])
    remote = make_registration('Fresh')
    mocker.patch('requests.get', return_value=make_response(body=[remote.to_dict()]))

    result = with_endpoint().read()

    assert result.source == SOURCE_CLOUD
    assert result.connected
    assert result.registrations == [remote]
    assert LocalCache().load() == [remote]


def test_read_falls_back_to_cache(app, mocker):
    cached = make_registration('Cached')
    LocalCache().append([cached])
    mocker.patch('requests.get', return_value=make_response(status_code=500, text='oops'))

    result = with_endpoint().read()

    assert result.source == SOURCE_LOCAL
    assert result.registrations == [cached]
    assert result.error == 'HTTP 500'
    assert result.status_dict() == {'connected': False, 'source': 'local', 'error': 'HTTP 500'}


def test_read_falls_back_on_html_login_page(app, mocker):
    LocalCache().append([make_registration()])
    page = '<!DOCTYPE html><html><head><title>Sign in</title></head><body></body></html>'
    mocker.patch('requests.get', return_value=make_response(text=page))

    result = with_endpoint().read()

    assert result.source == SOURCE_LOCAL
    assert len(result.registrations) == 1
    assert 'Sign in' in result.error


def test_clear_all_reports_outdated_script(app, mocker):
    LocalCache().append([make_registration()])
    mocker.patch('requests.post', return_value=make_response(body={'status': 'success', 'count': 1}))

    success, error = with_endpoint().clear_all()

    assert success is False
    assert error == SCRIPT_OUTDATED_MESSAGE
    assert LocalCache().load() == []


def test_clear_all_success(app, mocker):
    mocker.patch('requests.post', return_value=make_response(
        body={'status': 'success', 'message': 'All data cleared'}))

    assert with_endpoint().clear_all() == (True, None)


def test_clear_all_network_failure(app, mocker):
    mocker.patch('requests.post', side_effect=requests.exceptions.Timeout())

    assert with_endpoint().clear_all() == (False, DELETE_FAILED_MESSAGE)


def test_clear_all_without_endpoint(app):
    LocalCache().append([make_registration()])
    assert local_only().clear_all() == (True, None)
    assert LocalCache().load() == []


def test_read_skips_malformed_remote_rows(app, mocker):
    LocalCache().append([make_registration('Cached')])
    remote = make_registration('Fresh')
    mocker.patch('requests.get', return_value=make_response(
        body=[{'id': 'x', 'timestamp': {}}, remote.to_dict()]))

    result = with_endpoint().read()

    assert result.source == SOURCE_CLOUD
    assert result.registrations == [remote]
    assert LocalCache().load() == [remote]
