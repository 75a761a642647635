# SPDX-License-Identifier: GPL-3.0-or-later

import enum
import time
from typing import Callable, Iterable, List

from github3.exceptions import GitHubError
from github3.repos.repo import Repository

from ghadmin import RepoFile
from ghadmin.hub import Client, web_url
from ghadmin.run import confirm

WORKFLOW_PATH = '.github/workflows/codeql-analysis.yml'
WORKFLOW = RepoFile(WORKFLOW_PATH, """\
name: "CodeQL"

on:
  push:
    branches: [ main, master, dev ]
  pull_request:
    # The branches below must be a subset of the branches above
    branches: [ main, master, dev ]
  schedule:
    - cron: '0 2 * * 1'

jobs:
  analyze:
    name: Analyze
    runs-on: ubuntu-latest
    steps:
      - name: Checkout repository
        uses: actions/checkout@v4

      - name: Initialize CodeQL
        uses: github/codeql-action/init@v2
        with:
          languages: javascript,python

      - name: Autobuild
        uses: github/codeql-action/autobuild@v2

      - name: Perform CodeQL Analysis
        uses: github/codeql-action/analyze@v2
""", 'CodeQL workflow')

# GitHub language name -> CodeQL default setup language
_LANGUAGES = [
    ({'JavaScript', 'TypeScript'}, 'javascript-typescript'),
    ({'Python'}, 'python'),
    ({'Go'}, 'go'),
    ({'Java', 'Kotlin'}, 'java-kotlin'),
    ({'Ruby'}, 'ruby'),
    ({'C', 'C++'}, 'c-cpp'),
    ({'C#'}, 'csharp'),
]

POLL_ATTEMPTS = 20
POLL_INTERVAL = 6


class SetupResult(enum.Enum):
    CONFIGURED = 'configured'
    TIMEOUT = 'timeout'
    FAILED = 'failed'
    SKIPPED = 'skipped'


def detect_languages(languages: Iterable[str]) -> List[str]:
    present = set(languages)
    return [codeql for names, codeql in _LANGUAGES if names & present]


def _state(ghc: Client, r: Repository) -> str:
    try:
        setup = ghc.codeql_setup(r)
    except GitHubError:
        return 'error'
    if setup is None:
        return 'not-configured'
    return setup.get('state') or 'not-configured'


def configure(ghc: Client, r: Repository, query_suite: str = 'default',
              threat_model: str = 'remote',
              sleep: Callable[[float], None] = time.sleep) -> SetupResult:
    languages = detect_languages(ghc.languages(r))
    if not languages:
        print(f"  -> No supported CodeQL languages detected in {r.full_name}; "
              "skipping CodeQL default setup.")
        return SetupResult.SKIPPED

    try:
        ghc.update_codeql_setup(r, {
            'state': 'configured',
            'query_suite': query_suite,
            'threat_model': threat_model,
            'languages': languages,
        })
    except GitHubError as e:
        print(f"  -> WARNING: CodeQL default setup request failed: {str(e)[:400]}")
        return SetupResult.FAILED

    print(f"  -> CodeQL default setup requested for {', '.join(languages)}. Polling status...")
    for attempt in range(POLL_ATTEMPTS):
        state = _state(ghc, r)
        print(f"    -> current state: {state}")
        if state == 'configured':
            print("  -> CodeQL default setup is now configured")
            return SetupResult.CONFIGURED
        if attempt < POLL_ATTEMPTS - 1:
            sleep(POLL_INTERVAL)

    print("  -> CodeQL default setup did not reach 'configured' within timeout. "
          f"Check the Actions logs at: {web_url(r.full_name, 'actions')}")

    print("  -> Attempting to dispatch CodeQL workflow to run now...")
    try:
        dispatched = ghc.dispatch_workflow(r, WORKFLOW_PATH.rsplit('/', 1)[1])
    except GitHubError:
        dispatched = False
    if dispatched:
        print("  -> Dispatched CodeQL workflow; check Actions in the repo.")
    else:
        print("  -> WARNING: Could not dispatch CodeQL workflow. Run it manually in the Actions UI.")
    return SetupResult.TIMEOUT


def disable(ghc: Client, r: Repository, delete_workflow: bool = False,
            prompt: bool = False) -> bool:
    ok = True
    state = _state(ghc, r)
    if state == 'configured':
        print("  -> CodeQL default setup is currently enabled. Disabling...")
        if not confirm(f"Disable CodeQL default setup in {r.full_name}?", prompt):
            print("  -> Skipped")
            return False
        try:
            ghc.update_codeql_setup(r, {'state': 'not-configured'})
            print("  -> CodeQL default setup disabled successfully")
        except GitHubError as e:
            print(f"  -> ERROR: Failed to disable CodeQL default setup: {e}")
            ok = False
    elif state == 'not-configured':
        print("  -> CodeQL default setup is already disabled")
    else:
        print("  -> Unable to query CodeQL state (API error or not eligible)")
        ok = False

    if delete_workflow:
        contents = ghc.file_contents(r, WORKFLOW_PATH)
        if contents is None:
            print("  -> No custom CodeQL workflow file found")
        else:
            print("  -> Custom CodeQL workflow file found. Deleting...")
            if not confirm(f"Delete {WORKFLOW_PATH} in {r.full_name}?", prompt):
                print("  -> Skipped")
                return ok
            try:
                contents.delete("chore: remove CodeQL workflow")
                print(f"  -> Deleted {WORKFLOW_PATH} successfully")
            except GitHubError as e:
                print(f"  -> WARNING: Failed to delete {WORKFLOW_PATH}: {e}")
                ok = False

    print(f"  -> Security page: {web_url(r.full_name, 'security')}")
    return ok
