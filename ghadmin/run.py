# SPDX-License-Identifier: GPL-3.0-or-later

from typing import Callable, Iterable

from github3.exceptions import GitHubException
from github3.repos.repo import Repository

from ghadmin import RepositoryRef
from ghadmin.hub import Client

SEPARATOR = '-' * 50

Action = Callable[[Client, Repository], bool]


def confirm(question: str, prompt: bool) -> bool:
    if not prompt:
        return True
    answer = input(f"  -> {question} [y/N] ")
    return answer.strip() in ('y', 'Y')


def each(ghc: Client, repos: Iterable[RepositoryRef], action: Action,
         skip_archived: bool = True) -> int:
    """Run action for every repository and return how often it succeeded.

    Failures are reported and the next repository is processed anyway.
    """
    count = 0
    for ref in repos:
        print(SEPARATOR)
        print(f"Processing {ref}")

        try:
            r = ghc.repository(ref)
            if r is None:
                print(f"  -> ERROR: Repository {ref} does not exist or is not accessible")
                continue
            if skip_archived and r.archived:
                print("  -> Skipping archived repository")
                continue

            if action(ghc, r):
                count += 1
        except GitHubException as e:
            print(f"  -> ERROR: {ref}: {e}")

    print(SEPARATOR)
    return count
