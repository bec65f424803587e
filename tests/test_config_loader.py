"""Tests for configuration loading, merging and validation."""

import argparse
import copy

import pytest
import yaml

from config_loader import DEFAULT_CONFIG, ConfigLoader, get_nested


def write_config(path, data):
    path.write_text(yaml.safe_dump(data), encoding='utf-8')
    return str(path)


def valid_config():
    return copy.deepcopy(DEFAULT_CONFIG)


class TestLoad:
    """Test loading configuration files."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ConfigLoader.load(str(tmp_path / 'docs_build.yaml'))

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_missing_required_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load(str(tmp_path / 'missing.yaml'), required=True)

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / 'docs_build.yaml'
        path.write_text('', encoding='utf-8')

        assert ConfigLoader.load(str(path)) == DEFAULT_CONFIG

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / 'docs_build.yaml'
        path.write_text('- just\n- a list\n', encoding='utf-8')

        with pytest.raises(ValueError):
            ConfigLoader.load(str(path))

    def test_partial_override_merges(self, tmp_path):
        path = write_config(tmp_path / 'docs_build.yaml', {
            'repository': {'base_url': 'https://example.com/repo/'}
        })

        config = ConfigLoader.load(path)

        assert config['repository']['base_url'] == 'https://example.com/repo/'
        assert config['repository']['modules_path'] == 'libs/'
        assert config['documents'] == DEFAULT_CONFIG['documents']

    def test_documents_list_replaced(self, tmp_path):
        documents = [{'key': 'only', 'source': 'a.html', 'output': 'a.md'}]
        path = write_config(tmp_path / 'docs_build.yaml', {'documents': documents})

        config = ConfigLoader.load(path)

        assert config['documents'] == documents

    def test_dollar_references_kept_literal(self, tmp_path, monkeypatch):
        monkeypatch.setenv('DOCS_NAMESPACE', 'other')
        path = write_config(tmp_path / 'docs_build.yaml', {
            'repository': {'top_namespace': '${DOCS_NAMESPACE}'}
        })

        config = ConfigLoader.load(path)

        assert config['repository']['top_namespace'] == '${DOCS_NAMESPACE}'
        ConfigLoader.validate(config)


class TestValidate:
    """Test configuration validation."""

    def test_defaults_valid(self):
        ConfigLoader.validate(valid_config())

    @pytest.mark.parametrize('base_url', [
        'ftp://example.com/',
        'https:///path/',
        'https://example.com/repo',
        '',
    ])
    def test_bad_base_url(self, base_url):
        config = valid_config()
        config['repository']['base_url'] = base_url

        with pytest.raises(ValueError):
            ConfigLoader.validate(config)

    @pytest.mark.parametrize('modules_path', ['/libs/', 'libs'])
    def test_bad_modules_path(self, modules_path):
        config = valid_config()
        config['repository']['modules_path'] = modules_path

        with pytest.raises(ValueError):
            ConfigLoader.validate(config)

    def test_empty_documents(self):
        config = valid_config()
        config['documents'] = []

        with pytest.raises(ValueError):
            ConfigLoader.validate(config)

    def test_document_missing_output(self):
        config = valid_config()
        config['documents'] = [{'key': 'global', 'source': 'a.html'}]

        with pytest.raises(ValueError, match='output'):
            ConfigLoader.validate(config)

    def test_absolute_document_path(self):
        config = valid_config()
        config['documents'] = [{'key': 'global', 'source': '/tmp/a.html', 'output': 'a.md'}]

        with pytest.raises(ValueError, match='relative'):
            ConfigLoader.validate(config)

    def test_invalid_document_key(self):
        config = valid_config()
        config['documents'] = [{'key': 'extract..API', 'source': 'a.html', 'output': 'a.md'}]

        with pytest.raises(ValueError, match='dotted name'):
            ConfigLoader.validate(config)

    @pytest.mark.parametrize('keys', [
        ('global', 'global'),
        ('extract', 'extract.API'),
    ])
    def test_overlapping_keys(self, keys):
        config = valid_config()
        config['documents'] = [
            {'key': key, 'source': f'{index}.html', 'output': f'{index}.md'}
            for index, key in enumerate(keys)
        ]

        with pytest.raises(ValueError, match='overlap'):
            ConfigLoader.validate(config)

    def test_bad_log_level(self):
        config = valid_config()
        config['logging']['level'] = 'LOUD'

        with pytest.raises(ValueError):
            ConfigLoader.validate(config)


class TestMergeWithArgs:
    """Test CLI arguments layered over configuration."""

    def make_args(self, **overrides):
        values = {'root': None, 'dry_run': None, 'verbose': 0}
        values.update(overrides)
        return argparse.Namespace(**values)

    def test_no_overrides(self):
        config = valid_config()

        assert ConfigLoader.merge_with_args(config, self.make_args()) == config

    def test_root_and_dry_run(self):
        merged = ConfigLoader.merge_with_args(valid_config(), self.make_args(root='/srv/docs', dry_run=True))

        assert merged['build']['root'] == '/srv/docs'
        assert merged['build']['dry_run'] is True

    def test_no_dry_run_overrides_file(self):
        config = valid_config()
        config['build']['dry_run'] = True

        merged = ConfigLoader.merge_with_args(config, self.make_args(dry_run=False))

        assert merged['build']['dry_run'] is False

    @pytest.mark.parametrize('verbose, level', [(1, 'INFO'), (2, 'DEBUG'), (3, 'DEBUG')])
    def test_verbosity_sets_level(self, verbose, level):
        merged = ConfigLoader.merge_with_args(valid_config(), self.make_args(verbose=verbose))

        assert merged['logging']['level'] == level

    def test_input_not_mutated(self):
        config = valid_config()

        ConfigLoader.merge_with_args(config, self.make_args(root='elsewhere'))

        assert config['build']['root'] == '.'


class TestGetNested:
    def test_existing_path(self):
        assert get_nested(DEFAULT_CONFIG, 'build.encoding') == 'utf-8'

    def test_missing_path_default(self):
        assert get_nested(DEFAULT_CONFIG, 'build.missing.value', 'x') == 'x'
