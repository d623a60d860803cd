from sfwkt.lib.pydantic_settings_integration import pydantic_settings_integration

GREETING: str = 'hello'
LIMIT: int = 1
_PRIVATE: str = 'unchanged'


def test_pydantic_settings_integration(monkeypatch):
    monkeypatch.setitem(globals(), 'GREETING', 'hello')
    monkeypatch.setitem(globals(), 'LIMIT', 1)
    monkeypatch.setenv('SETTINGSTEST_GREETING', 'hi')
    monkeypatch.setenv('SETTINGSTEST_LIMIT', '5')
    monkeypatch.setenv('SETTINGSTEST__PRIVATE', 'changed')

    pydantic_settings_integration(__name__, globals(), env_prefix='SETTINGSTEST_', env_file=None)

    assert GREETING == 'hi'
    assert LIMIT == 5
    assert _PRIVATE == 'unchanged'


def test_pydantic_settings_integration_defaults(monkeypatch):
    monkeypatch.setitem(globals(), 'GREETING', 'hello')
    monkeypatch.setitem(globals(), 'LIMIT', 1)

    pydantic_settings_integration(__name__, globals(), env_prefix='SETTINGSTEST_', env_file=None)

    assert GREETING == 'hello'
    assert LIMIT == 1
