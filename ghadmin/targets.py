# SPDX-License-Identifier: GPL-3.0-or-later

import re
from typing import List, Optional

from ghadmin import RepositoryRef
from ghadmin.hub import Client


class NoRepositoriesError(Exception):
    pass


def parse_repos(value: str, owner: str) -> List[RepositoryRef]:
    """Parse "repo1,repo2", "repo1 repo2" or "owner/repo" lists."""
    repos: List[RepositoryRef] = []
    for item in re.split(r'[,\s]+', value):
        if not item:
            continue
        ref = RepositoryRef.parse(item, owner)
        if not ref.owner or not ref.name or '/' in ref.name:
            raise NoRepositoriesError(
                f"Invalid repository '{item}', expected 'repo' or 'owner/repo'")
        if ref not in repos:
            repos.append(ref)
    return repos


def resolve(ghc: Client, owner: str, repos: Optional[str] = None,
            include_private: bool = False, fetch_all: bool = False,
            require_explicit: bool = False) -> List[RepositoryRef]:
    if repos and repos.strip():
        print("Using provided repositories")
        return parse_repos(repos, owner)

    if require_explicit and not fetch_all:
        raise NoRepositoriesError("No repositories specified, use --repos (or REPOS) "
                                  "or --all (or FETCH_ALL_PUBLIC_REPOS=true)")

    if include_private:
        print(f"Fetching repositories for {owner} (including private repositories)...")
    else:
        print(f"Fetching public repositories for {owner}...")

    return ghc.fetch_repos(owner, include_private)
