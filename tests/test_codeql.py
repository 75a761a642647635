# SPDX-License-Identifier: GPL-3.0-or-later

from unittest.mock import MagicMock

from ghadmin import codeql
from ghadmin.codeql import SetupResult


def test_detect_languages():
    assert codeql.detect_languages(['TypeScript', 'C++', 'Python', 'HTML', 'JavaScript']) == [
        'javascript-typescript', 'python', 'c-cpp']
    assert codeql.detect_languages(['Kotlin', 'C#', 'Go', 'Ruby']) == [
        'go', 'java-kotlin', 'ruby', 'csharp']
    assert codeql.detect_languages(['Shell', 'Dockerfile']) == []


def test_configure_skips_without_languages(ghc, repo):
    ghc.languages.return_value = ['Shell']

    assert codeql.configure(ghc, repo) == SetupResult.SKIPPED
    ghc.update_codeql_setup.assert_not_called()


def test_configure_polls_until_configured(ghc, repo):
    ghc.languages.return_value = ['Python']
    ghc.codeql_setup.side_effect = [{'state': 'not-configured'}, {'state': 'not-configured'},
                                    {'state': 'configured'}]
    sleep = MagicMock()

    assert codeql.configure(ghc, repo, sleep=sleep) == SetupResult.CONFIGURED

    ghc.update_codeql_setup.assert_called_once_with(repo, {
        'state': 'configured',
        'query_suite': 'default',
        'threat_model': 'remote',
        'languages': ['python'],
    })
    assert sleep.call_count == 2
    sleep.assert_called_with(codeql.POLL_INTERVAL)
    ghc.dispatch_workflow.assert_not_called()


def test_configure_timeout_dispatches_workflow(ghc, repo, capsys):
    ghc.languages.return_value = ['Go']
    ghc.codeql_setup.return_value = {'state': 'not-configured'}
    ghc.dispatch_workflow.return_value = True
    sleep = MagicMock()

    assert codeql.configure(ghc, repo, sleep=sleep) == SetupResult.TIMEOUT

    assert ghc.codeql_setup.call_count == codeql.POLL_ATTEMPTS
    ghc.dispatch_workflow.assert_called_once_with(repo, 'codeql-analysis.yml')
    out = capsys.readouterr().out
    assert "https://github.com/octo/app/actions" in out
    assert "Dispatched CodeQL workflow" in out


def test_configure_request_failure(ghc, repo, github_error, capsys):
    ghc.languages.return_value = ['Ruby']
    ghc.update_codeql_setup.side_effect = github_error(403, 'Advanced Security must be enabled')

    assert codeql.configure(ghc, repo, sleep=MagicMock()) == SetupResult.FAILED
    ghc.codeql_setup.assert_not_called()
    assert "WARNING: CodeQL default setup request failed" in capsys.readouterr().out


def test_disable_configured(ghc, repo):
    ghc.codeql_setup.return_value = {'state': 'configured'}

    assert codeql.disable(ghc, repo)
    ghc.update_codeql_setup.assert_called_once_with(repo, {'state': 'not-configured'})


def test_disable_already_disabled(ghc, repo, capsys):
    ghc.codeql_setup.return_value = None

    assert codeql.disable(ghc, repo)
    ghc.update_codeql_setup.assert_not_called()
    assert "already disabled" in capsys.readouterr().out


def test_disable_unknown_state(ghc, repo, github_error, capsys):
    ghc.codeql_setup.side_effect = github_error(403, 'Forbidden')

    assert not codeql.disable(ghc, repo)
    assert "Unable to query CodeQL state" in capsys.readouterr().out


def test_disable_deletes_workflow(ghc, repo):
    ghc.codeql_setup.return_value = {'state': 'not-configured'}
    contents = ghc.file_contents.return_value

    assert codeql.disable(ghc, repo, delete_workflow=True)

    ghc.file_contents.assert_called_once_with(repo, codeql.WORKFLOW_PATH)
    contents.delete.assert_called_once_with("chore: remove CodeQL workflow")


def test_disable_without_workflow(ghc, repo, capsys):
    ghc.codeql_setup.return_value = {'state': 'not-configured'}
    ghc.file_contents.return_value = None

    assert codeql.disable(ghc, repo, delete_workflow=True)
    assert "No custom CodeQL workflow file found" in capsys.readouterr().out
