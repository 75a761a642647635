# SPDX-License-Identifier: GPL-3.0-or-later

import os
import subprocess
from unittest.mock import MagicMock, patch

import pytest

import hostmaint
from maint import cursor, docker, fs, git, services


def _git_repo(root, name):
    (root / name / '.git').mkdir(parents=True)


def test_pull_all_only_git_repositories(tmp_path, capsys):
    _git_repo(tmp_path, 'b-repo')
    _git_repo(tmp_path, 'a-repo')
    (tmp_path / 'plain').mkdir()
    (tmp_path / 'file.txt').write_text('')

    with patch('maint.subprocess.run') as run:
        assert git.pull_all(str(tmp_path)) == 2

    commands = [(c.args[0][1], os.path.basename(c.kwargs['cwd'])) for c in run.call_args_list]
    assert commands == [('status', 'a-repo'), ('fetch', 'a-repo'), ('pull', 'a-repo'),
                        ('status', 'b-repo'), ('fetch', 'b-repo'), ('pull', 'b-repo')]
    assert "Skipping: not a git repo" in capsys.readouterr().out


def test_pull_all_continues_after_failure(tmp_path, capsys):
    _git_repo(tmp_path, 'a')
    _git_repo(tmp_path, 'b')

    def fake_run(args, **kwargs):
        if args[1] == 'pull' and kwargs['cwd'].endswith('a'):
            raise subprocess.CalledProcessError(1, args)

    with patch('maint.subprocess.run', side_effect=fake_run):
        assert git.pull_all(str(tmp_path)) == 1
    assert "ERROR: git pull" in capsys.readouterr().out


def test_docker_cleanup():
    def fake_run(args, **kwargs):
        if args[:2] == ['docker', 'ps']:
            return MagicMock(stdout='c1\nc2\n')
        if args[:2] == ['docker', 'images']:
            return MagicMock(stdout='i1\ni1\ni2\n')
        return MagicMock()

    with patch('subprocess.run', side_effect=fake_run) as run:
        docker.cleanup()

    commands = [c.args[0] for c in run.call_args_list]
    assert ['docker', 'stop', 'c1', 'c2'] in commands
    assert ['docker', 'rm', '-f', 'c1', 'c2'] in commands
    assert ['docker', 'rmi', '-f', 'i1', 'i2'] in commands
    assert commands[-1] == ['docker', 'system', 'prune', '-a', '--volumes', '-f']


def test_docker_cleanup_nothing_to_remove(capsys):
    with patch('subprocess.run', return_value=MagicMock(stdout='')) as run:
        docker.cleanup()

    assert [c.args[0][1] for c in run.call_args_list] == ['ps', 'images', 'system']
    assert "No containers found" in capsys.readouterr().out


def test_disable_services_reports_failures():
    def fake_run(args, **kwargs):
        if args[2] == 'cups.service':
            raise subprocess.CalledProcessError(1, args)

    with patch('maint.subprocess.run', side_effect=fake_run) as run:
        assert services.disable(['bluetooth', 'cups', 'nginx.service']) == ['cups.service']

    assert [c.args[0][2] for c in run.call_args_list] == [
        'bluetooth.service', 'cups.service', 'nginx.service']


def test_rename_upper(tmp_path):
    (tmp_path / 'project').mkdir()

    new_path = fs.rename_upper(str(tmp_path / 'project') + os.sep)

    assert new_path == str(tmp_path / 'PROJECT')
    assert (tmp_path / 'PROJECT').is_dir()
    assert not (tmp_path / 'project').exists()


def test_rename_upper_refuses_existing_target(tmp_path):
    (tmp_path / 'project').mkdir()
    (tmp_path / 'PROJECT').mkdir()

    with pytest.raises(FileExistsError):
        fs.rename_upper(str(tmp_path / 'project'))


def test_rename_upper_requires_directory(tmp_path):
    with pytest.raises(NotADirectoryError):
        fs.rename_upper(str(tmp_path / 'missing'))


def _paths(tmp_path):
    config = tmp_path / 'config'
    (config / 'User').mkdir(parents=True)
    (config / 'User' / 'settings.json').write_text('{}')
    (config / 'CachedData').mkdir()
    extensions = tmp_path / 'extensions'
    (extensions / 'ms-python.python').mkdir(parents=True)
    return cursor.Paths(str(tmp_path / 'profiles'), str(config), str(extensions))


def test_create_cursor_profile(tmp_path):
    profile = cursor.create_profile('rust', _paths(tmp_path))

    assert profile == str(tmp_path / 'profiles' / 'rust')
    assert (tmp_path / 'profiles' / 'rust' / 'data' / 'User' / 'settings.json').is_file()
    assert (tmp_path / 'profiles' / 'rust' / 'data' / 'CachedData').is_dir()
    assert (tmp_path / 'profiles' / 'rust' / 'extensions' / 'ms-python.python').is_dir()


def test_create_cursor_profile_keeps_existing_unless_confirmed(tmp_path):
    paths = _paths(tmp_path)
    marker = tmp_path / 'profiles' / 'rust' / 'marker'
    marker.parent.mkdir(parents=True)
    marker.write_text('')

    cursor.create_profile('rust', paths, confirm=lambda d: False)
    assert marker.exists()

    cursor.create_profile('rust', paths, confirm=lambda d: True)
    assert not marker.exists()
    assert (tmp_path / 'profiles' / 'rust' / 'data' / 'User').is_dir()


def test_create_cursor_profile_rejects_slashes(tmp_path):
    with pytest.raises(ValueError):
        cursor.create_profile('a/b', _paths(tmp_path))


def test_hostmaint_rename_error_exit_code(tmp_path, capsys):
    assert hostmaint.main(['rename-upper', str(tmp_path / 'missing')]) == 1
    assert "ERROR:" in capsys.readouterr().out
