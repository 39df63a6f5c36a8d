"""
Integration Tests for the command-line front end
"""

import io
from datetime import timedelta
from unittest.mock import patch

import pytest

import main
from engine import Engine, EngineConfig
from logger import set_verbose
from pipeline.events import DiscoveryEvent


class FakeEngine(Engine):
    """In-memory engine that replays a fixed set of discoveries"""

    def __init__(self, events=None, error=None, related=None):
        self.events = events if events is not None else [
            DiscoveryEvent(name='www.example.com', address='1.1.1.1', source='dns',
                           asn=100, isp='ISP-100', netblock='1.1.1.0/24'),
            DiscoveryEvent(name='mail.example.com', address='1.1.1.2', source='brute',
                           asn=100, isp='ISP-100', netblock='1.1.1.0/24'),
            DiscoveryEvent(name='api.example.com', address='2.2.2.2', source='brute',
                           asn=200, isp='ISP-200', netblock='2.2.2.0/24'),
        ]
        self.error = error
        self.related = related or []
        self.config = None

    def default_config(self):
        return EngineConfig(frequency=timedelta(milliseconds=10))

    def run(self, config):
        self.config = config
        for event in self.events:
            config.output.put(event)
        if self.error:
            raise self.error

    def reverse_whois(self, domain):
        return self.related


@pytest.fixture(autouse=True)
def reset_log_level():
    yield
    set_verbose(False)


@pytest.fixture
def fake_engine():
    engine = FakeEngine()
    with patch('main.load_engine', return_value=engine):
        yield engine


class TestMain:
    """Test suite for main()"""

    def test_no_domains_prints_usage(self, capsys):
        assert main.main([]) == 0
        assert 'usage: subcast' in capsys.readouterr().out

    def test_streams_names(self, fake_engine, capsys):
        assert main.main(['example.com']) == 0

        out = capsys.readouterr().out
        assert out == 'www.example.com\nmail.example.com\napi.example.com\n'
        assert fake_engine.config.domains == ['example.com']

    def test_verbose_summary_and_output_file(self, fake_engine, capsys, tmp_path):
        out_file = tmp_path / 'results.txt'

        assert main.main(['example.com', '-ip', '-v', '-o', str(out_file)]) == 0

        out = capsys.readouterr().out
        assert '\n3 names discovered - dns: 1, brute: 2\n' in out
        assert 'ASN: 100 - ISP-100\n' in out
        assert out_file.read_text() == (
            'www.example.com,1.1.1.1\nmail.example.com,1.1.1.2\napi.example.com,2.2.2.2\n'
        )

    def test_extra_verbose_prints_sources(self, fake_engine, capsys):
        main.main(['example.com', '-vv'])

        out = capsys.readouterr().out
        assert '[dns]' + ' ' * 9 + 'www.example.com\n' in out
        assert 'names discovered' in out

    def test_domains_file_and_list_mode(self, fake_engine, capsys, tmp_path):
        domains_file = tmp_path / 'domains.txt'
        domains_file.write_text('example.org\n\nexample.net\n')

        assert main.main(['example.com', '-domains', str(domains_file), '-l']) == 0

        assert capsys.readouterr().out == 'example.com\nexample.org\nexample.net\n'
        assert fake_engine.config is None

    def test_whois_adds_unique_domains(self, fake_engine, capsys):
        fake_engine.related = ['example.org', 'example.com']

        main.main(['example.com', '-whois', '-l'])

        assert capsys.readouterr().out == 'example.com\nexample.org\n'

    def test_freq_translated_to_delay(self, fake_engine):
        main.main(['example.com', '-freq', '120'])
        assert fake_engine.config.frequency == timedelta(milliseconds=500)

    def test_default_freq_uses_engine_default(self, fake_engine):
        main.main(['example.com'])
        assert fake_engine.config.frequency == timedelta(milliseconds=10)

    def test_brute_loads_wordlist(self, fake_engine):
        with patch('main.get_wordlist', return_value=['www', 'mail']) as mock_wordlist:
            main.main(['example.com', '-brute', '-w', 'names.txt', '-norecursive'])

        mock_wordlist.assert_called_once_with('names.txt')
        assert fake_engine.config.brute_forcing is True
        assert fake_engine.config.recursive is False
        assert fake_engine.config.wordlist == ['www', 'mail']

    def test_wordlist_skipped_without_brute(self, fake_engine):
        with patch('main.get_wordlist') as mock_wordlist:
            main.main(['example.com'])

        mock_wordlist.assert_not_called()
        assert fake_engine.config.recursive is True
        assert fake_engine.config.wordlist == []

    def test_engine_failure_still_flushes(self, capsys, caplog, tmp_path):
        out_file = tmp_path / 'results.txt'
        engine = FakeEngine(error=RuntimeError('resolver crashed'))

        with patch('main.load_engine', return_value=engine):
            assert main.main(['example.com', '-o', str(out_file)]) == 0

        assert out_file.read_text().count('\n') == 3
        assert 'resolver crashed' in caplog.text

    def test_bad_engine_setting(self, capsys):
        with patch('main.config.ENGINE', 'no_such_module:Engine'):
            assert main.main(['example.com']) == 1


class TestRunEnumeration:
    """Test suite for run_enumeration"""

    def test_returns_frozen_aggregator(self, tmp_path):
        stream = io.StringIO()
        engine = FakeEngine()
        aggregator = main.run_enumeration(engine, ['example.com'], [], install_signals=False,
                                          verbose=True, stream=stream)

        assert aggregator.total == 3
        assert aggregator.tags == {'dns': 1, 'brute': 2}
        assert aggregator.asns[100].netblocks == {'1.1.1.0/24': 2}
        assert stream.getvalue().startswith('www.example.com\n')
