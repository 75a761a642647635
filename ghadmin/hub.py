# SPDX-License-Identifier: GPL-3.0-or-later

import os
import subprocess
from typing import Any, Dict, List, Optional

from github3 import GitHub
from github3.exceptions import error_for
from github3.repos.contents import Contents
from github3.repos.repo import Repository
from github3.users import AuthenticatedUser
from urllib3.util import Url

from ghadmin import RepoFile, RepositoryRef, Ruleset, SecuritySettings

# Same upper bound as `gh repo list --limit 1000`
LIST_LIMIT = 1000


def web_url(full_name: str, *parts: str) -> str:
    return Url(scheme='https', host='github.com', path='/'.join(('', full_name) + parts)).url


def _accepted(resp, *codes: int) -> Any:
    if resp.status_code in codes:
        return resp.json() if resp.content else {}
    raise error_for(resp)


def _url(r: Repository, *parts: str) -> str:
    return r._build_url(*parts, base_url=r._api)


class Client:
    """Repository administration on top of github3.py.

    github3 does not know about rulesets, code scanning default setup and most
    of the security endpoints, so those go through the session helpers of the
    repository objects directly (like the branch protection workaround did).
    """
    _gh: GitHub
    _me: Optional[AuthenticatedUser] = None

    def __init__(self, gh: GitHub) -> None:
        self._gh = gh

    def me(self) -> AuthenticatedUser:
        if self._me is None:
            self._me = self._gh.me()
        return self._me

    def is_organization(self, owner: str) -> bool:
        return self._gh.organization(owner) is not None

    def repository(self, ref: RepositoryRef) -> Optional[Repository]:
        return self._gh.repository(ref.owner, ref.name)

    def fetch_repos(self, owner: str, include_private: bool = False) -> List[RepositoryRef]:
        org = self._gh.organization(owner)
        if org is not None:
            itr = org.repositories(type='all' if include_private else 'public',
                                   number=LIST_LIMIT)
        elif include_private and self.me().login == owner:
            # Only the authenticated user can see its own private repositories
            itr = self._gh.repositories(type='owner', number=LIST_LIMIT)
        else:
            itr = self._gh.repositories_by(owner, type='owner', number=LIST_LIMIT)

        repos = []
        for r in itr:
            if not include_private and r.private:
                continue
            repos.append(RepositoryRef.parse(r.full_name, owner))
        return repos

    # Branches

    @staticmethod
    def branch_exists(r: Repository, name: str) -> bool:
        return r.branch(name) is not None

    @staticmethod
    def create_branch(r: Repository, name: str) -> Optional[str]:
        default = r.branch(r.default_branch)
        if default is None:
            # Empty repositories have no commit to branch from
            return None
        sha = default.commit.sha
        r.create_ref(f'refs/heads/{name}', sha)
        return sha

    # Rulesets

    @staticmethod
    def rulesets(r: Repository) -> List[Dict[str, Any]]:
        return r._json(r._get(_url(r, 'rulesets')), 200) or []

    @staticmethod
    def create_ruleset(r: Repository, ruleset: Ruleset) -> Dict[str, Any]:
        return _accepted(r._post(_url(r, 'rulesets'), data=ruleset.as_dict()), 201)

    @staticmethod
    def delete_ruleset(r: Repository, ruleset_id: int) -> bool:
        return r._boolean(r._delete(_url(r, 'rulesets', str(ruleset_id))), 204, 404)

    # Security and analysis

    @staticmethod
    def security_status(r: Repository, feature: str) -> Optional[str]:
        settings = r.as_dict().get('security_and_analysis') or {}
        return (settings.get(feature) or {}).get('status')

    @staticmethod
    def update_security(r: Repository, settings: SecuritySettings) -> Dict[str, Any]:
        return _accepted(r._patch(r._api, json=settings.as_dict()), 200)

    @staticmethod
    def enable(r: Repository, endpoint: str, data: Optional[Dict[str, Any]] = None) -> bool:
        # vulnerability-alerts, automated-security-fixes, private-vulnerability-reporting, ...
        return r._boolean(r._put(_url(r, endpoint), json=data), 204, 404)

    @staticmethod
    def languages(r: Repository) -> List[str]:
        return [lang for lang, _ in r.languages()]

    @staticmethod
    def codeql_setup(r: Repository) -> Optional[Dict[str, Any]]:
        return r._json(r._get(_url(r, 'code-scanning', 'default-setup')), 200)

    @staticmethod
    def update_codeql_setup(r: Repository, payload: Dict[str, Any]) -> Dict[str, Any]:
        return _accepted(r._patch(_url(r, 'code-scanning', 'default-setup'), json=payload),
                         200, 202)

    @staticmethod
    def submit_snapshot(r: Repository, snapshot: Dict[str, Any]) -> Dict[str, Any]:
        return _accepted(r._post(_url(r, 'dependency-graph', 'snapshots'), data=snapshot), 201)

    # Actions

    @staticmethod
    def dispatch_workflow(r: Repository, workflow: str, ref: Optional[str] = None) -> bool:
        url = _url(r, 'actions', 'workflows', workflow, 'dispatches')
        return r._boolean(r._post(url, data={'ref': ref or r.default_branch}), 204, 404)

    # Files

    @staticmethod
    def file_contents(r: Repository, path: str) -> Optional[Contents]:
        return r.file_contents(path)

    @staticmethod
    def write_file(r: Repository, f: RepoFile) -> bool:
        """Create or update a file, returns True if it already existed."""
        existing = r.file_contents(f.path)
        if existing is not None:
            existing.update(f"chore: update {f.title}", f.content.encode())
            return True

        r.create_file(f.path, f"chore: add {f.title}", f.content.encode())
        return False

    # Organisation

    def enable_org(self, *parts: str) -> bool:
        gh = self._gh
        return gh._boolean(gh._put(gh._build_url(*parts)), 204, 404)


class AuthenticationError(Exception):
    pass


def _gh_cli_token() -> str:
    # Reuse the credentials of an authenticated GitHub CLI
    try:
        p = subprocess.run(['gh', 'auth', 'token'], stdout=subprocess.PIPE,
                           universal_newlines=True, check=True)
    except (FileNotFoundError, subprocess.CalledProcessError) as e:
        raise AuthenticationError(
            f"No GitHub token found ({e}). Run 'gh auth login' or set GITHUB_TOKEN.")
    token = p.stdout.strip()
    if not token:
        raise AuthenticationError("'gh auth token' returned no token. "
                                  "Run 'gh auth login' or set GITHUB_TOKEN.")
    return token


def create_client(token: Optional[str] = None) -> Client:
    token = token or os.environ.get('GITHUB_TOKEN') or os.environ.get('GH_TOKEN') \
        or _gh_cli_token()

    gh = GitHub()
    gh.login(token=token)
    return Client(gh)
