# SPDX-License-Identifier: GPL-3.0-or-later

from typing import Callable, List

from github3.exceptions import GitHubError
from github3.repos.repo import Repository

from ghadmin import RepoFile
from ghadmin import codeql
from ghadmin.hub import Client
from ghadmin.run import confirm

DEPENDABOT = RepoFile('.github/dependabot.yml', """\
version: 2
updates:
  - package-ecosystem: "npm"
    directory: "/"
    schedule:
      interval: "weekly"
  - package-ecosystem: "pip"
    directory: "/"
    schedule:
      interval: "weekly"
  - package-ecosystem: "github-actions"
    directory: "/"
    schedule:
      interval: "weekly"
open-pull-requests-limit: 5
""", 'Dependabot config')

RENOVATE = RepoFile('.github/workflows/renovate.yml', """\
name: "Run Renovate"

on:
  workflow_dispatch:

jobs:
  renovate:
    runs-on: ubuntu-latest
    permissions:
      contents: write
      pull-requests: write
    steps:
      - name: Run Renovate
        uses: renovatebot/github-action@v36.46.2
        with:
          # uses GITHUB_TOKEN by default
          token: ${{ secrets.GITHUB_TOKEN }}
""", 'Renovate workflow')

FILES = [DEPENDABOT, codeql.WORKFLOW, RENOVATE]

# None of these is documented, GitHub may reject all of them
DEPENDENCY_SUBMISSION_ENDPOINTS = [
    ('dependabot', 'automated-dependency-submission'),
    ('dependabot', 'automated-dependency-updates'),
    ('automated-dependency-submission',),
    ('automated-dependency-updates',),
]


def write(ghc: Client, r: Repository, f: RepoFile, prompt: bool = False) -> bool:
    if not confirm(f"Create/update '{f.path}' in {r.full_name}?", prompt):
        print(f"  -> Skipped {f.path}")
        return False

    try:
        existed = ghc.write_file(r, f)
    except GitHubError as e:
        print(f"  -> WARNING: Failed to write {f.path}: {e}")
        return False

    print(f"  -> {'Updated' if existed else 'Created'} {f.path}")
    return True


def enable_org_dependency_submission(ghc: Client, owner: str, prompt: bool = False) -> bool:
    if not ghc.is_organization(owner):
        print(f"Owner '{owner}' is not an organization; "
              "skipping org-level automatic dependency submission.")
        return False

    print(f"Attempting to enable automatic dependency submission for organization '{owner}'...")
    for parts in DEPENDENCY_SUBMISSION_ENDPOINTS:
        endpoint = '/'.join(('orgs', owner) + parts)
        if not confirm(f"PUT '{endpoint}'?", prompt):
            print(f"  -> Skipped {endpoint}")
            continue

        try:
            ok = ghc.enable_org('orgs', owner, *parts)
        except GitHubError:
            ok = False

        if ok:
            print(f"  -> Automatic dependency submission enabled via '{endpoint}'")
            return True
        print(f"  -> Attempt via '{endpoint}' failed (endpoint may not exist or "
              "you lack permissions)")

    print("  -> Automatic dependency submission could not be enabled via API.")
    print("     Enable it in the organization settings: Code security and analysis "
          "-> Automatic dependency submission")
    return False


def prepare(files: List[RepoFile] = FILES, prompt: bool = False
            ) -> Callable[[Client, Repository], bool]:
    def action(ghc: Client, r: Repository) -> bool:
        print(f"Preparing repository files for {r.full_name}")
        ok = all([write(ghc, r, f, prompt) for f in files])

        if RENOVATE in files and confirm("Dispatch the Renovate workflow now?", prompt):
            print("  -> Dispatching Renovate workflow to run now...")
            try:
                dispatched = ghc.dispatch_workflow(r, 'renovate.yml')
            except GitHubError:
                dispatched = False
            if dispatched:
                print("  -> Renovate workflow dispatched (check Actions in the repo).")
            else:
                print("  -> WARNING: Could not dispatch Renovate workflow. "
                      "Run it manually in the Actions UI.")
        return ok
    return action
